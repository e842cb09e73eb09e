"""Tests for title expansion over the taxonomy."""

import pytest

from services.engine.taxonomy import TitleTaxonomy, default_taxonomy, normalize_title
from services.engine.title_expander import TitleExpander


def _lower(titles):
    return {normalize_title(t) for t in titles}


class TestExpand:
    def setup_method(self):
        self.taxonomy = default_taxonomy()
        self.expander = TitleExpander(self.taxonomy)

    def test_unknown_title_is_singleton(self):
        assert self.expander.expand("Chief Happiness Officer") == ["Chief Happiness Officer"]

    def test_title_comes_first(self):
        assert self.expander.expand("software developer")[0] == "software developer"

    def test_equivalents_of_canonical(self):
        expanded = _lower(self.expander.expand("Software Engineer"))
        assert {"software developer", "programmer", "sde"} <= expanded

    def test_member_maps_back_to_canonical(self):
        expanded = _lower(self.expander.expand("Web Developer"))
        assert "frontend developer" in expanded
        assert "ui engineer" in expanded

    def test_case_insensitive_lookup(self):
        assert _lower(self.expander.expand("bACKEND enGINEER")) >= {
            "backend developer", "api developer",
        }

    def test_hierarchy_adds_parents_and_their_equivalents(self):
        expanded = _lower(self.expander.expand("Java Developer"))
        assert "backend developer" in expanded
        assert "software engineer" in expanded
        assert "backend engineer" in expanded  # equivalent of a parent
        assert "software developer" in expanded

    def test_hierarchy_is_one_hop(self):
        expanded = _lower(self.expander.expand("Lead Software Engineer"))
        assert "senior software engineer" in expanded
        # Senior -> Software Engineer is a second hop and is not followed
        assert "software engineer" not in expanded

    def test_domain_titles_roll_up(self):
        expanded = _lower(self.expander.expand("Trading Systems Developer"))
        assert "software engineer" in expanded

    def test_domain_restricts_lookup(self):
        assert _lower(self.expander.expand("Trading Systems Developer", domain="Finance")) >= {
            "software engineer"
        }
        assert self.expander.expand("Trading Systems Developer", domain="Healthcare") == [
            "Trading Systems Developer"
        ]

    def test_no_duplicates(self):
        expanded = self.expander.expand("Senior Backend Developer")
        assert len(expanded) == len(_lower(expanded))

    def test_deterministic(self):
        assert self.expander.expand("React Developer") == self.expander.expand("React Developer")

    @pytest.mark.parametrize("title", [
        "Software Engineer", "QA Engineer", "Java Developer", "CTO",
        "Healthcare Data Analyst", "Nobody Knows", "",
    ])
    def test_expand_contains_title(self, title):
        assert title in self.expander.expand(title)

    def test_equivalence_is_symmetric(self):
        for canonical, members in self.taxonomy.equivalents.items():
            for member in members:
                assert normalize_title(canonical) in _lower(self.expander.expand(member)), member

    def test_expanding_a_member_keeps_it(self):
        for member in self.expander.expand("Java Developer"):
            assert member in self.expander.expand(member)


class TestRolesFromSkills:
    def setup_method(self):
        self.expander = TitleExpander(default_taxonomy())

    def test_substring_match(self):
        roles = _lower(self.expander.roles_from_skills(["ReactJS", "kubernetes admin"]))
        assert {"frontend developer", "devops engineer", "cloud engineer"} <= roles

    def test_no_skills(self):
        assert self.expander.roles_from_skills([]) == []
        assert self.expander.roles_from_skills(["", "  "]) == []

    def test_unknown_skill(self):
        assert self.expander.roles_from_skills(["Basket weaving"]) == []


class TestTitleAnalysis:
    def setup_method(self):
        self.expander = TitleExpander(default_taxonomy())

    def test_technologies_in_title(self):
        assert self.expander.technologies_in_title("Senior Python Developer") == ["Python"]

    def test_are_equivalent_same_group(self):
        assert self.expander.are_equivalent("Product Owner", "technical product manager")

    def test_are_equivalent_shared_technology(self):
        assert self.expander.are_equivalent("Python Developer", "Senior Python Engineer")

    def test_not_equivalent(self):
        assert not self.expander.are_equivalent("Data Scientist", "Project Manager")

    def test_seniority(self):
        assert self.expander.seniority("Senior Data Engineer") == ("Senior", 1.0)
        assert self.expander.seniority("Data Engineer") == ("Mid-level", 0.9)


def test_custom_taxonomy_is_used():
    expander = TitleExpander(TitleTaxonomy(equivalents={"Nurse": ("RN",)}))
    assert _lower(expander.expand("rn")) == {"rn", "nurse"}
    assert expander.expand("Java Developer") == ["Java Developer"]
