"""Tests for the employment history comparator."""

import pytest

from models.schemas.discrepancy import EmployerChange
from models.schemas.employment import ResumeProfile
from services.engine.history_comparator import (
    EmploymentHistoryComparator,
    diff_field,
    evaluate_risk_level,
)


def _change(employer="Acme"):
    return EmployerChange(employer=employer, old="a", new="b")


class TestDiffField:
    def test_added_removed_unchanged(self):
        diff = diff_field(["Acme", "Globex"], ["Globex", "Initech"])
        assert diff.added == ["Initech"]
        assert diff.removed == ["Acme"]
        assert diff.unchanged == ["Globex"]

    def test_case_sensitive(self):
        diff = diff_field(["Acme"], ["ACME"])
        assert diff.added == ["ACME"]
        assert diff.removed == ["Acme"]

    def test_duplicates_collapsed(self):
        assert diff_field([], ["X", "X"]).added == ["X"]


class TestComparator:
    def setup_method(self):
        self.comparator = EmploymentHistoryComparator()

    def test_identical_profiles(self, acme_profile):
        report = self.comparator.diff(acme_profile, acme_profile)
        assert report.score == 0
        assert not report.has_changes
        assert not report.is_significant
        assert report.risk_level == "none"
        for field in (report.companies, report.titles, report.dates, report.education):
            assert field.added == []
            assert field.removed == []

    def test_empty_previous_scores_zero(self, acme_profile):
        report = self.comparator.diff(ResumeProfile(), acme_profile)
        assert report.score == 0
        assert report.companies.added == ["Acme", "Globex"]
        assert report.has_changes

    def test_score_formula(self):
        previous = ResumeProfile.from_parallel_arrays(companies=["A", "B"])
        current = ResumeProfile.from_parallel_arrays(companies=["A", "C"])
        # (1 added + 1 removed) / (2 * 2 previous fields)
        assert self.comparator.diff(previous, current).score == 50

    def test_repeated_employer_counted_once(self):
        previous = ResumeProfile.from_parallel_arrays(companies=["Acme", "Acme", "Globex"])
        current = ResumeProfile.from_parallel_arrays(companies=["Acme", "Initech"])
        # (1 added + 1 removed) / (2 * 2 distinct previous companies)
        assert self.comparator.diff(previous, current).score == 50

    def test_score_rounds(self, acme_profile):
        current = ResumeProfile.from_parallel_arrays(
            companies=["Acme", "Initech"],
            titles=["Java Developer", "Lead Software Engineer"],
            periods=["2020-2021", "2021-2023"],
            education=["BS Computer Science"],
        )
        report = self.comparator.diff(acme_profile, current)
        # 6 changes over 7 previous fields: 6 / 14 = 42.86%
        assert report.score == 43
        assert report.companies.removed == ["Globex"]
        assert report.titles.added == ["Lead Software Engineer"]

    def test_score_capped_at_100(self):
        previous = ResumeProfile.from_parallel_arrays(companies=["A"])
        current = ResumeProfile.from_parallel_arrays(companies=["B", "C", "D", "E"])
        assert self.comparator.diff(previous, current).score == 100

    def test_threshold_is_strict(self):
        previous = ResumeProfile.from_parallel_arrays(companies=["A", "B", "C", "D", "E"])
        current = ResumeProfile.from_parallel_arrays(companies=["A", "B", "C", "D", "F"])
        report = EmploymentHistoryComparator(threshold=20).diff(previous, current)
        assert report.score == 20
        assert report.threshold == 20
        assert not report.is_significant

    def test_significant_above_threshold(self, acme_profile):
        current = acme_profile.model_copy(update={"education": ["PhD Physics"]})
        report = self.comparator.diff(acme_profile, current)
        # 2 changes over 7 fields -> 14%
        assert report.score == 14
        assert report.is_significant

    def test_placeholders_ignored(self):
        previous = ResumeProfile.from_parallel_arrays(companies=["Acme"], titles=["Dev", "QA"])
        current = ResumeProfile.from_parallel_arrays(companies=["Acme"], titles=["Dev", "QA"])
        report = self.comparator.diff(previous, current)
        assert report.companies.unchanged == ["Acme"]
        assert "Unknown Company" not in report.companies.unchanged
        assert report.score == 0

    def test_changed_title_and_dates_per_employer(self, acme_profile):
        current = ResumeProfile.from_parallel_arrays(
            companies=["Acme", "Globex"],
            titles=["Senior Java Developer", "Senior Software Engineer"],
            periods=["2019-2021", "2021-2022"],
            education=["BS Computer Science"],
        )
        report = self.comparator.diff(acme_profile, current)
        assert report.changed_titles == [
            EmployerChange(employer="Acme", old="Java Developer", new="Senior Java Developer")
        ]
        assert report.changed_dates == [
            EmployerChange(employer="Acme", old="2020-2021", new="2019-2021")
        ]
        assert report.risk_level == "low"

    def test_inputs_not_mutated(self, acme_profile):
        before = acme_profile.model_dump()
        self.comparator.diff(acme_profile, ResumeProfile())
        assert acme_profile.model_dump() == before


class TestRiskLevel:
    def test_no_changes(self):
        assert evaluate_risk_level([], [], [], []) == "none"

    def test_added_employers_only(self):
        assert evaluate_risk_level(["New Co"], [], [], []) == "low"

    def test_multiple_removed_employers(self):
        assert evaluate_risk_level([], ["A", "B"], [], []) == "high"

    @pytest.mark.parametrize("count, expected", [(1, "low"), (2, "medium"), (3, "high")])
    def test_changed_dates(self, count, expected):
        changes = [_change(str(i)) for i in range(count)]
        assert evaluate_risk_level([], [], changes, []) == expected

    def test_removed_employer_with_changes(self):
        assert evaluate_risk_level([], ["A"], [], [_change()]) == "medium"

    @pytest.mark.parametrize("count, expected", [(1, "low"), (3, "medium")])
    def test_changed_titles(self, count, expected):
        changes = [_change(str(i)) for i in range(count)]
        assert evaluate_risk_level([], [], [], changes) == expected

    def test_single_removed_employer(self):
        assert evaluate_risk_level([], ["A"], [], []) == "low"
