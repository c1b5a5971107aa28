from typing import Any, Iterable


def normalize_query(raw: str | None) -> str:
    """Trim and lower-case raw search input. None becomes the empty query."""
    if not raw:
        return ""
    return raw.strip().lower()


def normalize_field(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()


def join_terms(values: Iterable[str] | None) -> str:
    """Join a sequence field with single spaces, lower-cased."""
    if not values:
        return ""
    return " ".join(str(v) for v in values).lower()


def id_sort_key(record_id: Any) -> tuple:
    # Integer ids compare numerically and sort before string ids
    if isinstance(record_id, int) and not isinstance(record_id, bool):
        return (0, record_id, "")
    return (1, 0, str(record_id))
