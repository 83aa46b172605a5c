"""
Turns a validated raw snapshot into the standings document.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from loguru import logger

from nhl_standings.calculation.classifier import classify, organize_conference
from nhl_standings.calculation.ranking import with_point_percentages
from nhl_standings.models.acquisition import AcquisitionResult
from nhl_standings.models.enums import Conference
from nhl_standings.models.standings import StandingsDocument
from nhl_standings.normalization.transformer import StandingsTransformer


def process_standings(
    snapshot: Dict[str, Any], now: Optional[datetime] = None
) -> StandingsDocument:
    """Process a validated snapshot into standings with playoff positions.

    Args:
        snapshot: Raw standings payload that passed validation.
        now: Build time, defaults to the current UTC time.

    Returns:
        StandingsDocument with both conferences organised by division and
        wild card board.
    """
    teams = StandingsTransformer().transform(snapshot["standings"])
    teams = classify(with_point_percentages(teams))

    document = StandingsDocument(
        eastern=organize_conference(teams, Conference.EASTERN.value),
        western=organize_conference(teams, Conference.WESTERN.value),
        last_updated=(now or datetime.now(timezone.utc)).isoformat(),
    )
    logger.info(
        f"Processed {len(teams)} teams "
        f"(Eastern: {len(document.eastern.divisions)} divisions, "
        f"Western: {len(document.western.divisions)} divisions)"
    )
    return document


def build_document(
    acquisition: AcquisitionResult, now: Optional[datetime] = None
) -> StandingsDocument:
    """Processes an acquired snapshot, flagging the document when it is stale."""
    document = process_standings(acquisition.data, now=now)
    if acquisition.is_stale:
        document = document.model_copy(
            update={"is_stale_data": True, "cache_timestamp": acquisition.cache_timestamp}
        )
    return document
