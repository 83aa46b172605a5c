import json
import math
from collections import Counter
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from nhl_standings.config.settings import AppSettings
from nhl_standings.models.enums import VALID_CONFERENCES, VALID_DIVISIONS
from nhl_standings.models.validation import ValidationError, ValidationResult

REQUIRED_FIELDS = [
    "teamName",
    "teamAbbrev",
    "wins",
    "losses",
    "otLosses",
    "points",
    "gamesPlayed",
    "regulationWins",
    "divisionName",
    "conferenceName",
]

COUNT_FIELDS = ["wins", "losses", "otLosses", "gamesPlayed", "regulationWins"]


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a valid count
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite_number(value: Any) -> bool:
    # Ints are always finite; math.isfinite would overflow on huge ones
    return _is_number(value) and (isinstance(value, int) or math.isfinite(value))


class SnapshotValidator:
    """Checks a raw standings snapshot for structure and internal consistency.

    The validator never raises on malformed input: every problem is reported
    as a ValidationError inside the returned ValidationResult, and the caller
    decides what an invalid snapshot means.
    """

    def __init__(self, settings: AppSettings):
        self.settings = settings
        self.numeric_ranges: Dict[str, Tuple[int, int]] = {
            field: (0, settings.season_games) for field in COUNT_FIELDS
        }
        self.numeric_ranges["points"] = (0, settings.max_points)

    def validate(self, data: Any) -> ValidationResult:
        """Validates the complete snapshot, accumulating every error found."""
        standings, errors = self._extract_standings(data)
        if standings is None:
            return ValidationResult.from_errors(errors)

        errors.extend(self._check_team_count(standings))

        all_entries_valid = True
        for index, entry in enumerate(standings):
            entry_errors = self._validate_entry(entry, index)
            if entry_errors:
                all_entries_valid = False
            errors.extend(entry_errors)

        # Distribution is only meaningful once every entry names a known group
        if all_entries_valid:
            errors.extend(self._check_distribution(standings))

        result = ValidationResult.from_errors(errors)
        if result.is_valid:
            logger.debug(f"Snapshot with {len(standings)} teams passed validation")
        else:
            logger.debug(f"Snapshot failed validation with {len(errors)} error(s)")
        return result

    def validate_team_count(self, data: Any) -> ValidationResult:
        standings, errors = self._extract_standings(data)
        if standings is None:
            return ValidationResult.from_errors(errors)
        return ValidationResult.from_errors(self._check_team_count(standings))

    def validate_division_distribution(self, data: Any) -> ValidationResult:
        standings, errors = self._extract_standings(data)
        if standings is None:
            return ValidationResult.from_errors(errors)
        return ValidationResult.from_errors(
            self._check_group_counts(
                standings,
                "divisionName",
                VALID_DIVISIONS,
                self.settings.teams_per_division,
                "division",
            )
        )

    def validate_conference_distribution(self, data: Any) -> ValidationResult:
        standings, errors = self._extract_standings(data)
        if standings is None:
            return ValidationResult.from_errors(errors)
        return ValidationResult.from_errors(
            self._check_group_counts(
                standings,
                "conferenceName",
                VALID_CONFERENCES,
                self.settings.teams_per_conference,
                "conference",
            )
        )

    def _extract_standings(
        self, data: Any
    ) -> Tuple[Optional[List[Any]], List[ValidationError]]:
        if not data:
            return None, [
                ValidationError(field="data", message="Standings response is null or empty")
            ]
        standings = data.get("standings") if isinstance(data, dict) else None
        if standings is None:
            return None, [
                ValidationError(
                    field="standings", message="Missing standings array in API response"
                )
            ]
        if not isinstance(standings, list):
            return None, [
                ValidationError(
                    field="standings",
                    message="Standings is not an array",
                    value=type(standings).__name__,
                )
            ]
        return standings, []

    def _check_team_count(self, standings: List[Any]) -> List[ValidationError]:
        expected = self.settings.expected_team_count
        if len(standings) != expected:
            return [
                ValidationError(
                    field="standings.length",
                    message=f"Expected {expected} teams, found {len(standings)}",
                    value=len(standings),
                )
            ]
        return []

    def _check_distribution(self, standings: List[Any]) -> List[ValidationError]:
        return self._check_group_counts(
            standings,
            "divisionName",
            VALID_DIVISIONS,
            self.settings.teams_per_division,
            "division",
        ) + self._check_group_counts(
            standings,
            "conferenceName",
            VALID_CONFERENCES,
            self.settings.teams_per_conference,
            "conference",
        )

    def _check_group_counts(
        self,
        standings: List[Any],
        key: str,
        groups: List[str],
        expected: int,
        label: str,
    ) -> List[ValidationError]:
        # Non-string names count towards no group
        counts = Counter(
            entry.get(key)
            for entry in standings
            if isinstance(entry, dict) and isinstance(entry.get(key), str)
        )
        errors = []
        for group in groups:
            count = counts.get(group, 0)
            if count != expected:
                errors.append(
                    ValidationError(
                        field=f"{label}.{group}",
                        message=f"Expected {expected} teams in {group} {label}, found {count}",
                        value=count,
                    )
                )
        return errors

    def _validate_entry(self, team: Any, index: int) -> List[ValidationError]:
        prefix = f"standings[{index}]"

        if not isinstance(team, dict):
            return [
                ValidationError(
                    field=prefix,
                    message="Standing entry is not an object",
                    value=type(team).__name__,
                )
            ]

        errors = [
            ValidationError(
                field=f"{prefix}.{field}", message=f"Missing required field: {field}"
            )
            for field in REQUIRED_FIELDS
            if team.get(field) is None
        ]
        # Without every required field the consistency checks below are noise
        if errors:
            return errors

        for field, (low, high) in self.numeric_ranges.items():
            error = self._check_numeric(team[field], f"{prefix}.{field}", field, low, high)
            if error:
                errors.append(error)
        # Out-of-range values still take part in the arithmetic checks
        numeric_ok = {field: _is_finite_number(team[field]) for field in self.numeric_ranges}

        errors.extend(self._check_optional_wins(team, prefix, numeric_ok["wins"]))

        if all(numeric_ok[f] for f in ("wins", "losses", "otLosses", "gamesPlayed")):
            total_games = team["wins"] + team["losses"] + team["otLosses"]
            if team["gamesPlayed"] != total_games:
                errors.append(
                    ValidationError(
                        field=f"{prefix}.gamesPlayed",
                        message=(
                            f"Games played ({team['gamesPlayed']}) does not match "
                            f"wins + losses + otLosses ({total_games})"
                        ),
                        value=team["gamesPlayed"],
                    )
                )

        if all(numeric_ok[f] for f in ("wins", "otLosses", "points")):
            expected_points = team["wins"] * self.settings.points_per_win + team["otLosses"]
            if team["points"] != expected_points:
                errors.append(
                    ValidationError(
                        field=f"{prefix}.points",
                        message=(
                            f"Points ({team['points']}) does not match "
                            f"expected calculation ({expected_points})"
                        ),
                        value=team["points"],
                    )
                )

        if numeric_ok["regulationWins"] and numeric_ok["wins"]:
            if team["regulationWins"] > team["wins"]:
                errors.append(
                    ValidationError(
                        field=f"{prefix}.regulationWins",
                        message=(
                            f"Regulation wins ({team['regulationWins']}) cannot exceed "
                            f"total wins ({team['wins']})"
                        ),
                        value=team["regulationWins"],
                    )
                )

        if team["divisionName"] not in VALID_DIVISIONS:
            errors.append(
                ValidationError(
                    field=f"{prefix}.divisionName",
                    message=(
                        f"Invalid division name: {team['divisionName']}. "
                        f"Must be one of: {', '.join(VALID_DIVISIONS)}"
                    ),
                    value=team["divisionName"],
                )
            )

        if team["conferenceName"] not in VALID_CONFERENCES:
            errors.append(
                ValidationError(
                    field=f"{prefix}.conferenceName",
                    message=(
                        f"Invalid conference name: {team['conferenceName']}. "
                        f"Must be one of: {', '.join(VALID_CONFERENCES)}"
                    ),
                    value=team["conferenceName"],
                )
            )

        for field, label in (("teamName", "Team name"), ("teamAbbrev", "Team abbreviation")):
            default = team[field].get("default") if isinstance(team[field], dict) else None
            if not isinstance(default, str) or not default.strip():
                errors.append(
                    ValidationError(
                        field=f"{prefix}.{field}.default",
                        message=f"{label} must have a non-empty default string property",
                    )
                )

        return errors

    def _check_optional_wins(
        self, team: Dict[str, Any], prefix: str, wins_ok: bool
    ) -> List[ValidationError]:
        """regulationPlusOtWins may be absent, but when present it is a count."""
        value = team.get("regulationPlusOtWins")
        if value is None:
            return []
        path = f"{prefix}.regulationPlusOtWins"
        error = self._check_numeric(
            value, path, "regulationPlusOtWins", 0, self.settings.season_games
        )
        if error:
            return [error]
        if wins_ok and value > team["wins"]:
            return [
                ValidationError(
                    field=path,
                    message=(
                        f"Regulation plus overtime wins ({value}) cannot exceed "
                        f"total wins ({team['wins']})"
                    ),
                    value=value,
                )
            ]
        return []

    @staticmethod
    def _check_numeric(
        value: Any, path: str, field: str, low: int, high: int
    ) -> Optional[ValidationError]:
        if not _is_number(value):
            return ValidationError(
                field=path,
                message=f"Field {field} must be a number",
                value=type(value).__name__,
            )
        if not _is_finite_number(value):
            return ValidationError(
                field=path, message=f"Field {field} must be a finite number", value=str(value)
            )
        if value != int(value):
            return ValidationError(
                field=path, message=f"Field {field} must be a whole number", value=value
            )
        if value < low or value > high:
            return ValidationError(
                field=path,
                message=f"Field {field} must be between {low} and {high}",
                value=value,
            )
        return None


def format_validation_errors(errors: List[ValidationError]) -> str:
    """Formats validation errors for logging."""
    if not errors:
        return "No validation errors"

    lines = ["Validation errors found:"]
    for number, error in enumerate(errors, start=1):
        lines.append(f"  {number}. [{error.field}] {error.message}")
        if error.value is not None:
            lines.append(f"     Value: {json.dumps(error.value, default=str)}")
    return "\n".join(lines)
