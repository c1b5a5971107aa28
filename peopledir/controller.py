"""
Debounced search pipeline for one directory instance.

Every keystroke replaces the pending evaluation; only the last text typed
before the input goes quiet for `delay_ms` is ever evaluated. Each
directory (faculty, residents, fellows) owns its own controller so their
timers never interfere.
"""

from enum import Enum
from typing import Callable, List, Optional, Sequence

from .env import DEFAULT_DEBOUNCE_MS
from .logger import get_logger
from .normalize import normalize_query
from .ranking import build_ranked_ids, default_order
from .records import Person, RecordId
from .scheduler import CancelHandle, Scheduler


class SearchState(Enum):
    IDLE = "idle"
    TYPING = "typing"
    SETTLED = "settled"


ResultCallback = Callable[[List[RecordId]], None]


class SearchController:
    """
    Owns input normalization and debounced evaluation for one directory.

    Args:
        records: The directory's people; copied, never mutated
        scheduler: Provides delayed callbacks (see scheduler.AsyncioScheduler)
        on_result: Receives the ordered ids of each settled evaluation
        delay_ms: Quiet period before evaluating; applies to clearing too
        name: Label used in log context
    """

    def __init__(
        self,
        records: Sequence[Person],
        scheduler: Scheduler,
        on_result: ResultCallback,
        delay_ms: int = DEFAULT_DEBOUNCE_MS,
        name: str = "directory",
    ):
        self._records = tuple(records)
        self._scheduler = scheduler
        self._on_result = on_result
        self.delay_ms = delay_ms
        self.name = name
        self.state = SearchState.IDLE
        self._latest_text = ""
        self._pending: Optional[CancelHandle] = None
        self.last_result: Optional[List[RecordId]] = None

    @property
    def records(self) -> tuple:
        return self._records

    def start(self) -> List[RecordId]:
        """Show the full default-ordered list immediately, as on page load."""
        ids = default_order(self._records)
        self._emit(ids)
        return ids

    def on_input(self, raw_text: str) -> None:
        """Record the latest text and (re)schedule evaluation."""
        self._latest_text = raw_text or ""
        if self._pending is not None:
            self._pending.cancel()
            get_logger().record_superseded()
        self.state = SearchState.TYPING
        self._pending = self._scheduler.schedule(self._fire, self.delay_ms)

    def evaluate(self, raw_text: str) -> List[RecordId]:
        """Evaluate raw text synchronously without touching the timer."""
        query = normalize_query(raw_text)
        if not query:
            return default_order(self._records)
        return build_ranked_ids(self._records, query)

    def _fire(self) -> None:
        self._pending = None
        query = normalize_query(self._latest_text)
        ids = self.evaluate(query)
        logger = get_logger()
        logger.record_evaluation()
        logger.debug("Search settled", directory=self.name, query=query, results=len(ids))
        self._emit(ids)
        self.state = SearchState.SETTLED

    def _emit(self, ids: List[RecordId]) -> None:
        self.last_result = list(ids)
        self._on_result(list(ids))

    @property
    def has_pending(self) -> bool:
        return self._pending is not None
