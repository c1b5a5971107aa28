"""
Immutable person records consumed by the search engine.

Raw directory entries are plain JSON objects with many optional fields.
They are converted once, at the loading boundary, into frozen `Person`
values so nothing downstream can mutate them.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

RecordId = Union[str, int]

CATEGORIES = ("faculty", "residents", "fellows")


def _str_or_empty(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _tuple_of_str(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value)


def _int_or(value: Any, default: Optional[int]) -> Optional[int]:
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class Person:
    """A single directory entry (faculty member, resident or fellow)."""

    id: RecordId
    name: str
    title: str = ""
    academic_rank: str = ""
    clinical_focus: Tuple[str, ...] = ()
    research_interests: Tuple[str, ...] = ()
    pgy_level: str = ""
    fellowship_type: str = ""
    order: int = 0
    status: str = "active"
    publications_count: Optional[int] = None
    years_of_service: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status.strip().lower() == "active"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Person":
        """
        Build a Person from a raw JSON mapping.

        Missing optional fields fall back to empty values. A negative or
        unparseable `order` is treated as 0. Raises KeyError if `id` or
        `name` is absent; callers validate first (see schema.validate_person).
        """
        order = _int_or(data.get("order"), 0)
        years = data.get("years_of_service", data.get("years_at_rush"))
        return cls(
            id=data["id"],
            name=_str_or_empty(data["name"]),
            title=_str_or_empty(data.get("title")),
            academic_rank=_str_or_empty(data.get("academic_rank")),
            clinical_focus=_tuple_of_str(data.get("clinical_focus")),
            research_interests=_tuple_of_str(data.get("research_interests")),
            pgy_level=_str_or_empty(data.get("pgy_level")),
            fellowship_type=_str_or_empty(data.get("fellowship_type")),
            order=max(order, 0),
            status=_str_or_empty(data.get("status")) or "active",
            publications_count=_int_or(data.get("publications_count"), None),
            years_of_service=_int_or(years, None),
        )
