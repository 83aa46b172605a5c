from enum import Enum


class Conference(str, Enum):
    EASTERN = "Eastern"
    WESTERN = "Western"


class Division(str, Enum):
    ATLANTIC = "Atlantic"
    METROPOLITAN = "Metropolitan"
    CENTRAL = "Central"
    PACIFIC = "Pacific"


class PlayoffStatus(str, Enum):
    CLINCHED = "clinched"
    ELIMINATED = "eliminated"
    COMPETING = "competing"


class TiebreakerResult(int, Enum):
    TEAM_A_WINS = -1
    TIE = 0
    TEAM_B_WINS = 1


class AcquisitionState(str, Enum):
    IDLE = "IDLE"
    ATTEMPTING = "ATTEMPTING"
    WAITING = "WAITING"
    SUCCEEDED = "SUCCEEDED"
    FAILED_FALLBACK = "FAILED_FALLBACK"
    FAILED_FATAL = "FAILED_FATAL"


VALID_DIVISIONS = [division.value for division in Division]
VALID_CONFERENCES = [conference.value for conference in Conference]
