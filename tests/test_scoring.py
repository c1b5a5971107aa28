"""
Tests for relevance scoring.
"""

import pytest
from peopledir.records import Person
from peopledir.scoring import score_record


class TestScoreRecord:
    """Test the per-field weight table."""

    def test_name_prefix(self):
        """A name starting with the query scores 100."""
        match = score_record(Person(id="A", name="Maya Patel"), "ma")
        assert match.matched
        assert match.score == 100
        assert match.record_id == "A"

    def test_name_contains_not_prefix(self):
        """A name containing the query elsewhere scores 50."""
        match = score_record(Person(id="A", name="Maya Patel"), "pat")
        assert match.score == 50

    def test_no_match(self):
        """Unmatched records report matched=False with score 0."""
        match = score_record(Person(id="B", name="Alex Chen"), "ma")
        assert not match.matched
        assert match.score == 0

    @pytest.mark.parametrize("field,value,weight", [
        ("pgy_level", "PGY-3 MRI track", 25),
        ("fellowship_type", "Body MRI fellowship", 25),
        ("title", "Chief of MRI", 20),
        ("academic_rank", "MRI Professor", 15),
    ])
    def test_string_field_weights(self, field, value, weight):
        """Each optional string field contributes its own weight."""
        person = Person(id=1, name="Zed", **{field: value})
        assert score_record(person, "mri").score == weight

    def test_sequence_fields_joined(self):
        """Sequence fields are joined with spaces before matching."""
        person = Person(
            id=1,
            name="Zed",
            clinical_focus=("Liver", "imaging"),
            research_interests=("liver imaging",),
        )
        match = score_record(person, "liver imaging")
        assert match.score == 10 + 8

    def test_scores_accumulate(self):
        """Matches on several fields are summed."""
        person = Person(
            id=1,
            name="Neuro Smith",
            title="Neuroradiologist",
            academic_rank="Neuro Professor",
            clinical_focus=("neuro",),
            research_interests=("neuro",),
        )
        assert score_record(person, "neuro").score == 100 + 20 + 15 + 10 + 8

    def test_case_insensitive_fields(self):
        """Field text is lower-cased before comparing."""
        assert score_record(Person(id=1, name="MAYA"), "maya").score == 100

    def test_missing_optional_fields_never_match(self):
        """Defaults are empty and cannot match anything."""
        match = score_record(Person(id=1, name="Zed"), "pgy")
        assert not match.matched
