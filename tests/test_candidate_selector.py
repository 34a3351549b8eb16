"""
Tests for pair enumeration.
"""

from pipelines.entity_resolution.candidate_selector import all_pairs, cross_pairs


class TestAllPairs:
    """Test unordered pair generation."""

    def test_empty_and_single(self):
        assert list(all_pairs([])) == []
        assert list(all_pairs(["a"])) == []

    def test_pair_count_is_n_choose_2(self):
        items = list(range(7))
        assert len(list(all_pairs(items))) == 7 * 6 // 2

    def test_enumeration_order(self):
        pairs = [(i, j) for i, j, _, _ in all_pairs(["a", "b", "c", "d"])]
        assert pairs == [(0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3)]

    def test_never_pairs_item_with_itself(self):
        assert all(i < j for i, j, _, _ in all_pairs(list("abcde")))

    def test_yields_items(self):
        assert list(all_pairs(["x", "y"])) == [(0, 1, "x", "y")]

    def test_duplicate_values_still_paired(self):
        assert len(list(all_pairs(["same", "same"]))) == 1


class TestCrossPairs:
    """Test two-group pair generation."""

    def test_every_combination(self):
        pairs = [(a, b) for _, _, a, b in cross_pairs(["n1", "n2"], ["e1", "e2", "e3"])]
        assert pairs == [
            ("n1", "e1"), ("n1", "e2"), ("n1", "e3"),
            ("n2", "e1"), ("n2", "e2"), ("n2", "e3"),
        ]

    def test_empty_group(self):
        assert list(cross_pairs([], ["e1"])) == []
        assert list(cross_pairs(["n1"], [])) == []
