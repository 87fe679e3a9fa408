"""Tests for fuzzy entity resolution."""

import pytest

from talent_matcher.core.errors import NoMatchError
from talent_matcher.core.resolver import (
    normalize_fragment,
    require_opportunity,
    require_talent,
    resolve,
    resolve_opportunity,
    resolve_talent,
    similarity,
)

from conftest import make_talent


class TestSimilarity:
    def test_identical(self):
        assert similarity("fijula", "fijula") == 1.0

    def test_one_substitution(self):
        assert similarity("fibula", "fijula") == pytest.approx(5 / 6)

    def test_classic_pair(self):
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)

    def test_empty(self):
        assert similarity("", "abc") == 0.0
        assert similarity("", "") == 1.0


class TestResolve:
    """Exact, then unique substring, then edit distance."""

    names = ["Fijula Rao", "Marcus Chen", "Leo Garcia"]

    def test_exact_is_case_insensitive(self):
        assert resolve("marcus chen", self.names) == "Marcus Chen"

    def test_unique_substring(self):
        assert resolve("marcus", self.names) == "Marcus Chen"

    def test_ambiguous_substring_falls_through(self):
        names = ["Ana Lopez", "Ana Smith"]
        assert resolve("ana", names) is None

    def test_edit_distance(self):
        assert resolve("marcus chan", self.names) == "Marcus Chen"

    def test_below_threshold(self):
        assert resolve("zzzzzz", self.names) is None

    def test_threshold_is_strict(self):
        # distance 3 over length 10 gives exactly 0.7, which is not enough
        assert resolve("abcdefghij", ["abcdefgxyz"]) is None

    def test_tie_goes_to_first_candidate(self):
        assert resolve("abcd", ["abce", "abcf"]) == "abce"

    def test_empty_inputs(self):
        assert resolve("", self.names) is None
        assert resolve("marcus", []) is None

    def test_without_partial_stage(self):
        assert resolve("experienced", ["Ed", "Priya"], partial=False) is None
        assert resolve("priya", ["Ed", "Priya"], partial=False) == "Priya"


class TestResolveTalent:
    def test_misheard_first_name(self, talents, fijula):
        assert resolve_talent("fibula's", talents) == fijula

    def test_full_name(self, talents, marcus):
        assert resolve_talent("Marcus Chen", talents) == marcus

    def test_last_name(self, talents, leo):
        assert resolve_talent("garcia", talents) == leo

    def test_no_match(self, talents):
        assert resolve_talent("qwerty", talents) is None

    def test_short_first_name_not_found_inside_words(self):
        ed = make_talent(first_name="Ed", last_name="Vale")
        priya = make_talent(first_name="Priya", last_name="Nair")

        assert resolve_talent("experienced", [ed, priya]) is None
        assert resolve_talent("ed", [ed, priya]) == ed

    def test_ignores_nameless_talents(self):
        nameless = make_talent(first_name="", last_name="")
        assert resolve_talent("test", [nameless]) is None

    def test_require_raises(self, talents):
        with pytest.raises(NoMatchError):
            require_talent("qwerty", talents)

    def test_normalize_fragment(self):
        assert normalize_fragment("Fibula's,") == "fibula"
        assert normalize_fragment("  Leo! ") == "leo"


class TestResolveOpportunity:
    def test_title_fragment(self, opportunities, backend_opportunity):
        assert resolve_opportunity("senior backend", opportunities) == backend_opportunity

    def test_misspelled_title(self, opportunities, mobile_opportunity):
        assert resolve_opportunity("mobile app leed", opportunities) == mobile_opportunity

    def test_description_containment(self, opportunities, mobile_opportunity):
        assert resolve_opportunity("flutter", opportunities) == mobile_opportunity

    def test_require_raises(self, opportunities):
        with pytest.raises(NoMatchError):
            require_opportunity("underwater welding", opportunities)
