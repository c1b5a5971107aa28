from typing import Dict, List, Optional, Sequence

from .records import Person

RANK_KEYS = {
    "Professor": "professors",
    "Associate Professor": "associate_professors",
    "Assistant Professor": "assistant_professors",
    "Clinical Instructor": "clinical_instructors",
}


def filter_by_rank(people: Sequence[Person], rank: str) -> List[Person]:
    """People whose academic rank equals rank exactly."""
    return [p for p in people if p.academic_rank == rank]


def average(values: Sequence[float]) -> Optional[float]:
    """Arithmetic mean, or None for an empty sequence."""
    if not values:
        return None
    return sum(values) / len(values)


def directory_stats(people: Sequence[Person]) -> Dict[str, Optional[float]]:
    """
    Summary counts for a faculty listing.

    average_years_of_service averages over every person, counting a missing
    value as 0, and is None when the listing is empty.
    """
    stats: Dict[str, Optional[float]] = {"total": len(people)}
    for rank, key in RANK_KEYS.items():
        stats[key] = len(filter_by_rank(people, rank))
    stats["total_publications"] = sum(p.publications_count or 0 for p in people)
    stats["average_years_of_service"] = average([p.years_of_service or 0 for p in people])
    return stats
