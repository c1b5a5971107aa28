from typing import Iterable, List

from .normalize import id_sort_key, normalize_query
from .records import Person, RecordId
from .scoring import score_record


def _default_key(person: Person):
    return (person.order, id_sort_key(person.id))


def default_order(records: Iterable[Person]) -> List[RecordId]:
    """Ids of all records sorted by `order`, ties broken by id."""
    return [p.id for p in sorted(records, key=_default_key)]


def build_ranked_ids(records: Iterable[Person], query: str) -> List[RecordId]:
    """
    Score every record against a normalized query and return the ids of the
    matches, best first. Equal scores fall back to the default order, so the
    result never depends on sort stability or input order.
    """
    scored = []
    for person in records:
        match = score_record(person, query)
        if match.matched:
            scored.append((-match.score, person.order, id_sort_key(person.id), person.id))
    scored.sort(key=lambda item: item[:3])
    return [item[3] for item in scored]


def compute_order(records: Iterable[Person], query: str | None) -> List[RecordId]:
    """
    Ordered ids to display for raw query text.

    An empty (or whitespace-only) query takes the reset path and returns
    every id in default order. The caller's collection is never reordered.
    """
    normalized = normalize_query(query)
    if not normalized:
        return default_order(records)
    return build_ranked_ids(records, normalized)
