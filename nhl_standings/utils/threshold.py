# nhl_standings/utils/threshold.py
import re
from typing import Union

from nhl_standings.config.settings import AppSettings

_DIGITS = re.compile(r"^\d+$")


class ThresholdError(ValueError):
    """Raised when a caller-supplied playoff threshold is unusable."""

    pass


def parse_threshold(value: Union[str, int], settings: AppSettings) -> int:
    """Turns user input into a playoff threshold within the configured range.

    Surrounding whitespace and leading zeros are accepted; decimals, signs
    and any other characters are not.
    """
    if isinstance(value, bool):
        raise ThresholdError("Threshold must be a whole number")
    if isinstance(value, int):
        threshold = value
    else:
        text = str(value).strip()
        if not text:
            raise ThresholdError("Threshold is required")
        if not _DIGITS.match(text):
            raise ThresholdError(f"Threshold must be a whole number, got '{text}'")
        threshold = int(text)

    if not settings.threshold_min <= threshold <= settings.threshold_max:
        raise ThresholdError(
            f"Threshold must be between {settings.threshold_min} and {settings.threshold_max}, got {threshold}"
        )
    return threshold
