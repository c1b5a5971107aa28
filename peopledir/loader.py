"""Load directory listings from a local JSON file or an http(s) URL."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests

from .env import DEFAULT_HTTP_TIMEOUT
from .logger import get_logger
from .records import CATEGORIES, Person
from .retry import RetryError, TransientFetchError, exponential_backoff, should_retry_http_status
from .schema import validate_person

DEFAULT_DIVISION = "body-imaging"


def _log_retry(attempt: int, error: Exception, delay: float) -> None:
    get_logger().warning("Retrying directory fetch", attempt=attempt, delay=delay, error=str(error))


@exponential_backoff(
    max_retries=3,
    base_delay=0.5,
    exceptions=(requests.exceptions.Timeout, requests.exceptions.ConnectionError, TransientFetchError),
    on_retry=_log_retry,
)
def _fetch_json(url: str, timeout: float) -> Any:
    resp = requests.get(url, timeout=timeout)
    if should_retry_http_status(resp.status_code):
        raise TransientFetchError(f"Server returned {resp.status_code}", status_code=resp.status_code)
    resp.raise_for_status()
    return resp.json()


def _is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def fetch_document(source: str, timeout: float = DEFAULT_HTTP_TIMEOUT) -> Optional[Any]:
    """
    Read and parse a directory JSON document.

    Returns None on any failure (missing file, bad JSON, HTTP error, retries
    exhausted); the failure is logged and counted, never raised.
    """
    logger = get_logger()
    try:
        if _is_url(source):
            return _fetch_json(source, timeout)
        path = Path(source)
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.record_load_failure("FileNotFound")
        logger.error("Directory file not found", source=source)
    except json.JSONDecodeError as e:
        logger.record_load_failure("JSONDecodeError")
        logger.error("Directory file is not valid JSON", source=source, error=str(e))
    except RetryError as e:
        logger.record_load_failure("RetryExhausted")
        logger.error("Directory fetch failed after retries", source=source, error=str(e))
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "HTTPError"
        logger.record_load_failure(f"HTTPError_{status}")
        logger.error("Directory request failed", source=source, status=status)
    except (requests.exceptions.RequestException, ValueError) as e:
        logger.record_load_failure(type(e).__name__)
        logger.error("Directory request error", source=source, error=str(e))
    except OSError as e:
        logger.record_load_failure("OSError")
        logger.error("Directory file could not be read", source=source, error=str(e))
    return None


def division_info(document: Any, division: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """The faculty division object (name, faculty, ...) or None if absent."""
    if not isinstance(document, dict):
        return None
    info = (document.get("divisions") or {}).get(division or DEFAULT_DIVISION)
    return info if isinstance(info, dict) else None


def extract_entries(document: Any, category: str, division: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Pick the raw entries for a category out of a parsed document.

    Faculty documents are keyed by division:
    {"divisions": {"body-imaging": {"faculty": [...]}}}.
    Residents and fellows are flat: {"residents": [...]}, {"fellows": [...]}.
    """
    logger = get_logger()
    if category not in CATEGORIES:
        raise ValueError(f"Unknown category '{category}'. Expected one of: {', '.join(CATEGORIES)}")
    if not isinstance(document, dict):
        logger.error("Directory document must be a JSON object", category=category)
        return []

    if category == "faculty":
        division_data = division_info(document, division)
        if division_data is None:
            logger.error("Division not found in faculty data", division=division or DEFAULT_DIVISION)
            return []
        entries = division_data.get("faculty") or []
    else:
        entries = document.get(category) or []

    if not isinstance(entries, list):
        logger.error("Directory entries must be a list", category=category)
        return []
    return entries


def to_people(entries: List[Any], active_only: bool = True) -> List[Person]:
    """Convert raw entries, skipping invalid ones and (optionally) inactive ones."""
    logger = get_logger()
    people: List[Person] = []
    seen_ids = set()
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skipping non-object directory entry", index=index)
            continue
        errors = validate_person(entry)
        if "id" not in entry or "name" not in entry or any(
            e.startswith(("Field 'id'", "Field 'name'")) for e in errors
        ):
            logger.warning("Skipping malformed directory entry", index=index, errors=errors)
            continue
        if str(entry["id"]) in seen_ids:
            logger.warning("Skipping duplicate directory id", index=index, id=entry["id"])
            continue
        person = Person.from_dict(entry)
        if active_only and not person.is_active:
            continue
        seen_ids.add(str(person.id))
        people.append(person)
    return people


def load_people(
    source: str,
    category: str = "faculty",
    division: Optional[str] = None,
    timeout: float = DEFAULT_HTTP_TIMEOUT,
) -> List[Person]:
    """
    Load the active people of one directory.

    Args:
        source: Local path or http(s) URL of the JSON resource
        category: faculty, residents or fellows
        division: Faculty division key (default: body-imaging)
        timeout: HTTP timeout in seconds

    Returns:
        Active people; an empty list whenever loading fails.
    """
    document = fetch_document(source, timeout=timeout)
    if document is None:
        return []
    people = to_people(extract_entries(document, category, division))
    logger = get_logger()
    logger.record_load(len(people))
    if not people:
        logger.warning("No people found", category=category, division=division, source=source)
    else:
        logger.info(f"Loaded {len(people)} {category}", division=division, source=source)
    return people
