from typing import Any, Dict, Iterable, List, Tuple

REQUIRED_FIELDS = ["id", "name"]
OPTIONAL_STR_FIELDS = [
    "title",
    "academic_rank",
    "pgy_level",
    "fellowship_type",
    "status",
]
OPTIONAL_LIST_FIELDS = ["clinical_focus", "research_interests"]
OPTIONAL_INT_FIELDS = ["order", "publications_count", "years_at_rush", "years_of_service"]

KNOWN_STATUSES = {"active", "inactive"}


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_valid_id(v: Any) -> bool:
    if isinstance(v, bool):
        return False
    return isinstance(v, int) or _is_non_empty_str(v)


def validate_person(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    Only `id` and `name` are required; everything else is checked for shape
    when present.
    """
    errors: List[str] = []

    if "id" not in data:
        errors.append("Missing required field: id")
    elif not _is_valid_id(data["id"]):
        errors.append("Field 'id' must be a non-empty string or an integer")

    if "name" not in data:
        errors.append("Missing required field: name")
    elif not _is_non_empty_str(data["name"]):
        errors.append("Field 'name' must be a non-empty string")

    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    for f in OPTIONAL_LIST_FIELDS:
        value = data.get(f)
        if value is None:
            continue
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            errors.append(f"Field '{f}' must be a list of strings if provided")

    for f in OPTIONAL_INT_FIELDS:
        value = data.get(f)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            errors.append(f"Field '{f}' must be an integer if provided")
        elif value < 0:
            errors.append(f"Field '{f}' must not be negative")

    return errors


def validate_collection(
    entries: Iterable[Dict[str, Any]],
    strict: bool = False,
) -> List[Tuple[int, List[str]]]:
    """
    Validate a whole directory listing.

    Returns (index, errors) pairs for every invalid entry, plus an entry for
    each duplicated id (ids must be unique within a collection). With
    strict=True, unknown status values are errors too.
    """
    problems: List[Tuple[int, List[str]]] = []
    seen = {}
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            problems.append((index, ["Entry must be an object"]))
            continue
        errors = validate_person_strict(entry)[1] if strict else validate_person(entry)
        record_id = entry.get("id")
        if record_id is not None and _is_valid_id(record_id):
            key = str(record_id)
            if key in seen:
                errors.append(f"Duplicate id '{record_id}' (first seen at entry {seen[key]})")
            else:
                seen[key] = index
        if errors:
            problems.append((index, errors))
    return problems


def validate_person_strict(data: Dict[str, Any]) -> Tuple[bool, List[str]]:
    """Like validate_person, but also rejects unknown status values."""
    errors = validate_person(data)
    status = data.get("status")
    if isinstance(status, str) and status.strip().lower() not in KNOWN_STATUSES:
        errors.append(f"Unknown status '{status}'. Expected one of: {', '.join(sorted(KNOWN_STATUSES))}")
    return (len(errors) == 0, errors)
