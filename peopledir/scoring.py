"""
Relevance scoring of a single person against a search query.

Scores accumulate across every field that matches, so a resident whose
name and PGY level both contain the query outranks one who matches on
name alone.
"""

from dataclasses import dataclass

from .normalize import join_terms, normalize_field
from .records import Person, RecordId

NAME_PREFIX_WEIGHT = 100
NAME_CONTAINS_WEIGHT = 50
PGY_LEVEL_WEIGHT = 25
FELLOWSHIP_TYPE_WEIGHT = 25
TITLE_WEIGHT = 20
ACADEMIC_RANK_WEIGHT = 15
CLINICAL_FOCUS_WEIGHT = 10
RESEARCH_INTERESTS_WEIGHT = 8


@dataclass(frozen=True)
class Match:
    record_id: RecordId
    score: int
    matched: bool


def score_record(person: Person, query: str) -> Match:
    """
    Score one person against an already-normalized (trimmed, lower-cased,
    non-empty) query.

    Args:
        person: The record to score
        query: Normalized query text

    Returns:
        Match with the summed score; matched is False when no field contains
        the query, in which case score is 0.
    """
    score = 0
    matched = False

    name = normalize_field(person.name)
    if query in name:
        score += NAME_PREFIX_WEIGHT if name.startswith(query) else NAME_CONTAINS_WEIGHT
        matched = True

    field_weights = (
        (normalize_field(person.pgy_level), PGY_LEVEL_WEIGHT),
        (normalize_field(person.fellowship_type), FELLOWSHIP_TYPE_WEIGHT),
        (normalize_field(person.academic_rank), ACADEMIC_RANK_WEIGHT),
        (normalize_field(person.title), TITLE_WEIGHT),
        (join_terms(person.clinical_focus), CLINICAL_FOCUS_WEIGHT),
        (join_terms(person.research_interests), RESEARCH_INTERESTS_WEIGHT),
    )
    for text, weight in field_weights:
        if text and query in text:
            score += weight
            matched = True

    return Match(record_id=person.id, score=score, matched=matched)
