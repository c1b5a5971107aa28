"""
Apply a computed ordering to an already-rendered display surface.

Elements are never created or destroyed here: hidden ids get
set_visible(False), and the wanted ids are shown and appended to the end
one by one, which leaves them in the requested relative order.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol, Sequence

from .logger import get_logger
from .ranking import compute_order
from .records import Person, RecordId


class MissingDisplaySurface(LookupError):
    """The container to reconcile against could not be found."""


class DisplaySurface(Protocol):
    def has_element(self, record_id: RecordId) -> bool: ...

    def set_visible(self, record_id: RecordId, visible: bool) -> None: ...

    def move_to_end(self, record_id: RecordId) -> None: ...


def apply_order(
    container: Optional[DisplaySurface],
    ordered_ids: Sequence[RecordId],
    all_ids: Iterable[RecordId],
) -> bool:
    """
    Hide every id not in ordered_ids, then show and append ordered_ids in
    sequence. Ids with no element on the surface are skipped.

    Returns False (after logging) when there is no container.
    """
    if container is None:
        get_logger().error("Display surface not found; nothing reconciled")
        return False

    wanted = set(ordered_ids)
    for record_id in all_ids:
        if record_id not in wanted and container.has_element(record_id):
            container.set_visible(record_id, False)

    for record_id in ordered_ids:
        if not container.has_element(record_id):
            continue
        container.set_visible(record_id, True)
        container.move_to_end(record_id)

    get_logger().record_reconciliation()
    return True


def reconcile(
    container: Optional[DisplaySurface],
    records: Sequence[Person],
    query: Optional[str],
) -> List[RecordId]:
    """Compute the order for query and apply it to container."""
    ordered = compute_order(records, query)
    apply_order(container, ordered, [p.id for p in records])
    return ordered


class ListContainer:
    """
    In-memory ordered container of elements keyed by id.

    Useful as a headless surface (tests, terminal listings). Elements are
    arbitrary objects; only their position and visibility change.
    """

    def __init__(self, elements: Dict[RecordId, Any] | None = None):
        self._elements: Dict[RecordId, Any] = dict(elements or {})
        self._children: List[RecordId] = list(self._elements)
        self._visible: Dict[RecordId, bool] = {k: True for k in self._children}

    @classmethod
    def from_records(cls, records: Iterable[Person]) -> "ListContainer":
        return cls({p.id: p for p in records})

    def has_element(self, record_id: RecordId) -> bool:
        return record_id in self._elements

    def element(self, record_id: RecordId) -> Any:
        return self._elements[record_id]

    def set_visible(self, record_id: RecordId, visible: bool) -> None:
        self._visible[record_id] = visible

    def is_visible(self, record_id: RecordId) -> bool:
        return self._visible[record_id]

    def move_to_end(self, record_id: RecordId) -> None:
        self._children.remove(record_id)
        self._children.append(record_id)

    @property
    def children(self) -> List[RecordId]:
        return list(self._children)

    def visible_ids(self) -> List[RecordId]:
        return [k for k in self._children if self._visible[k]]
