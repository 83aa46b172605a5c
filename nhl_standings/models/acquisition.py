from typing import Any, Dict, Optional

from pydantic import BaseModel


class CacheEntry(BaseModel):
    """Persisted snapshot: {"data": <raw snapshot>, "timestamp": <ISO-8601>}."""

    data: Dict[str, Any]
    timestamp: str


class AcquisitionResult(BaseModel):
    """Raw snapshot returned by the acquirer plus its staleness."""

    data: Dict[str, Any]
    is_stale: bool = False
    cache_timestamp: Optional[str] = None
