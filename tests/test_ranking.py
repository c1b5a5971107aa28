"""
Tests for ranked ordering and the default-order reset path.
"""

from peopledir.records import Person
from peopledir.ranking import build_ranked_ids, compute_order, default_order
from peopledir.scoring import score_record


class TestComputeOrder:
    """Test query and reset paths."""

    def test_prefix_example(self, maya_and_alex):
        """'ma' keeps only Maya Patel."""
        assert compute_order(maya_and_alex, "ma") == ["A"]

    def test_score_descending(self, neuro_people):
        """Title match (20) outranks academic rank match (15)."""
        assert compute_order(neuro_people, "neuro") == ["D", "C"]

    def test_clearing_restores_default_order(self, maya_and_alex):
        """An empty query after a search shows everyone in order."""
        compute_order(maya_and_alex, "ma")
        assert compute_order(maya_and_alex, "") == ["A", "B"]

    def test_whitespace_query_is_reset(self, maya_and_alex):
        assert compute_order(maya_and_alex, "   ") == ["A", "B"]

    def test_none_query_is_reset(self, maya_and_alex):
        assert compute_order(maya_and_alex, None) == ["A", "B"]

    def test_query_is_normalized(self, maya_and_alex):
        """Raw text is trimmed and lower-cased."""
        assert compute_order(maya_and_alex, "  MA ") == ["A"]

    def test_every_result_matches(self, neuro_people, maya_and_alex):
        people = neuro_people + maya_and_alex
        for q in ["a", "neuro", "imaging", "zz"]:
            for record_id in compute_order(people, q):
                person = next(p for p in people if p.id == record_id)
                assert score_record(person, q).matched

    def test_repeated_calls_identical(self, neuro_people):
        """Ordering is deterministic for unchanged input."""
        first = compute_order(neuro_people, "i")
        assert compute_order(neuro_people, "i") == first
        assert compute_order(neuro_people, "i") == first

    def test_empty_collection(self):
        assert compute_order([], "ma") == []
        assert compute_order([], "") == []


class TestTieBreak:
    """Test deterministic ordering of equal scores."""

    def test_equal_scores_by_order(self):
        people = [
            Person(id="x", name="Sam One", order=5),
            Person(id="y", name="Sam Two", order=1),
            Person(id="z", name="Sam Three", order=3),
        ]
        assert build_ranked_ids(people, "sam") == ["y", "z", "x"]

    def test_equal_order_by_id(self):
        people = [
            Person(id="b", name="Sam", order=1),
            Person(id="a", name="Sam", order=1),
        ]
        assert build_ranked_ids(people, "sam") == ["a", "b"]
        assert build_ranked_ids(list(reversed(people)), "sam") == ["a", "b"]

    def test_default_order_ties_by_id(self):
        people = [
            Person(id=10, name="Ten", order=0),
            Person(id=2, name="Two", order=0),
            Person(id="c", name="Cee", order=0),
        ]
        # Integer ids compare numerically, ahead of string ids
        assert default_order(people) == [2, 10, "c"]

    def test_equal_scores_by_integer_id(self):
        people = [
            Person(id=10, name="Sam Ten", order=0),
            Person(id=9, name="Sam Nine", order=0),
        ]
        assert compute_order(people, "sam") == [9, 10]


class TestNoMutation:
    """The caller's collection is never reordered."""

    def test_reset_does_not_sort_input(self):
        people = [
            Person(id="late", name="Late", order=9),
            Person(id="early", name="Early", order=0),
        ]
        snapshot = list(people)
        assert default_order(people) == ["early", "late"]
        assert people == snapshot

    def test_query_does_not_sort_input(self, neuro_people):
        snapshot = list(neuro_people)
        compute_order(neuro_people, "neuro")
        assert neuro_people == snapshot
