import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from nhl_standings.config.settings import AppSettings
from nhl_standings.models.acquisition import AcquisitionResult
from nhl_standings.models.enums import AcquisitionState
from nhl_standings.storage.file_cache import CacheReadError, CacheWriteError, FileCache
from nhl_standings.validation.validator import SnapshotValidator, format_validation_errors
from .base_fetcher import BaseFetcher, InvalidSnapshotError, TransientAcquisitionError


class FatalAcquisitionError(Exception):
    """Every fetch attempt failed and no usable cached snapshot exists."""

    def __init__(self, message: str, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.last_error = last_error


class Acquirer:
    """Fetches the raw standings snapshot with retries and a cache fallback.

    Progress is tracked as a small state machine: ATTEMPTING(attempt) while a
    fetch is in flight, WAITING(attempt, wait_until) between attempts, and one
    of SUCCEEDED, FAILED_FALLBACK or FAILED_FATAL once acquire() returns.
    The wait between attempts is an awaited sleep, so an overall deadline
    (or the caller cancelling the task) interrupts it immediately.
    """

    def __init__(
        self,
        settings: AppSettings,
        fetcher: BaseFetcher,
        validator: SnapshotValidator,
        cache: FileCache,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.settings = settings
        self.fetcher = fetcher
        self.validator = validator
        self.cache = cache
        self._sleep = sleep

        self.state = AcquisitionState.IDLE
        self.attempt = 0
        self.wait_until: Optional[datetime] = None

    async def acquire(self) -> AcquisitionResult:
        """Returns a validated snapshot, fresh if possible, otherwise cached.

        Raises:
            FatalAcquisitionError: retries are exhausted and the cache is
                absent, unreadable or invalid.
        """
        deadline = self.settings.acquisition_deadline_seconds
        try:
            if deadline:
                snapshot = await asyncio.wait_for(self._fetch_with_retries(), timeout=deadline)
            else:
                snapshot = await self._fetch_with_retries()
        except TransientAcquisitionError as e:
            last_error: BaseException = e
        except asyncio.TimeoutError:
            logger.error(f"Acquisition deadline of {deadline}s exceeded, abandoning retries")
            last_error = TransientAcquisitionError(f"Acquisition deadline of {deadline}s exceeded")
        else:
            self._transition(AcquisitionState.SUCCEEDED)
            self._store(snapshot)
            return AcquisitionResult(data=snapshot, is_stale=False)

        logger.warning("All fetch attempts failed, attempting to use cached data...")
        logger.error(f"Last error: {last_error}")
        return self._fall_back(last_error)

    async def _fetch_with_retries(self) -> Dict[str, Any]:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.settings.max_attempts),
            # initial_delay * factor ** (attempt - 1): 1s, 2s, 4s ... by default
            wait=wait_exponential(
                multiplier=self.settings.initial_delay_ms / 1000,
                exp_base=self.settings.backoff_factor,
            ),
            retry=retry_if_exception_type(TransientAcquisitionError),
            before=self._before_attempt,
            before_sleep=self._before_wait,
            sleep=self._sleep,
            reraise=True,  # Surface the last TransientAcquisitionError itself
        )
        snapshot: Dict[str, Any] = {}
        async for attempt in retrying:
            with attempt:
                snapshot = await self._attempt_fetch()
        return snapshot

    async def _attempt_fetch(self) -> Dict[str, Any]:
        try:
            snapshot = await self.fetcher.fetch_snapshot()
            result = self.validator.validate(snapshot)
            if not result.is_valid:
                logger.error(
                    "API response validation failed:\n" + format_validation_errors(result.errors)
                )
                raise InvalidSnapshotError("Invalid API response: validation failed", result)
        except TransientAcquisitionError as e:
            logger.error(f"Attempt {self.attempt} failed: {e}")
            raise

        logger.success(
            f"Successfully fetched and validated data for {len(snapshot['standings'])} teams"
        )
        return snapshot

    def _before_attempt(self, retry_state: RetryCallState) -> None:
        self.attempt = retry_state.attempt_number
        self.wait_until = None
        self._transition(AcquisitionState.ATTEMPTING)
        logger.info(
            f"Fetching standings (attempt {self.attempt}/{self.settings.max_attempts})..."
        )

    def _before_wait(self, retry_state: RetryCallState) -> None:
        delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
        self.wait_until = datetime.now(timezone.utc) + timedelta(seconds=delay)
        self._transition(AcquisitionState.WAITING)
        logger.warning(f"Waiting {delay:g}s before retry...")

    def _store(self, snapshot: Dict[str, Any]) -> None:
        # Caching is best-effort: a failed write never fails the acquisition
        try:
            self.cache.put(self.settings.cache_key, snapshot)
            logger.info("Data cached successfully")
        except CacheWriteError as e:
            logger.error(f"Failed to cache data: {e}")

    def _fall_back(self, last_error: BaseException) -> AcquisitionResult:
        try:
            entry = self.cache.get(self.settings.cache_key)
        except CacheReadError as e:
            logger.error(f"Failed to load cached data: {e}")
            self._fail(last_error, "the cached data is unreadable")

        if entry is None:
            self._fail(last_error, "no cached data available")

        result = self.validator.validate(entry.data)
        if not result.is_valid:
            logger.error("Cached data validation failed:\n" + format_validation_errors(result.errors))
            self._fail(last_error, "the cached data is invalid")

        self._transition(AcquisitionState.FAILED_FALLBACK)
        logger.warning(
            f"Using stale cached data from {entry.timestamp} due to API fetch failure"
        )
        return AcquisitionResult(data=entry.data, is_stale=True, cache_timestamp=entry.timestamp)

    def _fail(self, last_error: BaseException, reason: str) -> None:
        self._transition(AcquisitionState.FAILED_FATAL)
        message = (
            f"Failed to fetch standings after {self.settings.max_attempts} attempts and "
            f"{reason}. Last error: {last_error}"
        )
        logger.critical(message)
        raise FatalAcquisitionError(message, last_error=last_error) from last_error

    def _transition(self, state: AcquisitionState) -> None:
        logger.debug(f"Acquirer state {self.state.value} -> {state.value} (attempt {self.attempt})")
        self.state = state
