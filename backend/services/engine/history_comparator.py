"""Employment history comparator: diff two resume submissions of the same candidate.

score = round((sum(added) + sum(removed)) / (2 * sum(previous)) * 100)

over the distinct values of companies, titles, dates and education, so an
employer listed twice counts once. Membership is exact,
case-sensitive string equality. An empty previous profile scores 0.
"""

import logging

from models.schemas.discrepancy import DiscrepancyReport, EmployerChange, FieldDiff
from models.schemas.employment import UNKNOWN_COMPANY, ResumeProfile

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 10


def _unique(items: list[str]) -> list[str]:
    return list(dict.fromkeys(items))


def diff_field(previous: list[str], current: list[str]) -> FieldDiff:
    prev_set = set(previous)
    curr_set = set(current)
    return FieldDiff(
        added=[x for x in _unique(current) if x not in prev_set],
        removed=[x for x in _unique(previous) if x not in curr_set],
        unchanged=[x for x in _unique(previous) if x in curr_set],
    )


def _employer_changes(
    previous: ResumeProfile, current: ResumeProfile, attr: str
) -> list[EmployerChange]:
    """Title or period changes for employers present in both submissions."""
    current_by_company: dict[str, str] = {}
    for record in current.records:
        current_by_company.setdefault(record.company, getattr(record, attr))

    changes: list[EmployerChange] = []
    for record in previous.records:
        if record.company == UNKNOWN_COMPANY or record.company not in current_by_company:
            continue
        old = getattr(record, attr)
        new = current_by_company[record.company]
        if old != new:
            changes.append(EmployerChange(employer=record.company, old=old, new=new))
    return changes


def evaluate_risk_level(
    added_employers: list[str],
    removed_employers: list[str],
    changed_dates: list[EmployerChange],
    changed_titles: list[EmployerChange],
) -> str:
    """Risk level of the changes between two resume versions."""
    # Dropping employers is the strongest signal
    if len(removed_employers) > 1:
        return "high"

    if len(changed_dates) > 1:
        return "high" if len(changed_dates) > 2 else "medium"

    if len(removed_employers) == 1 and (changed_dates or changed_titles):
        return "medium"

    if changed_titles:
        return "medium" if len(changed_titles) > 2 else "low"

    # Only new employers added: the normal case for a resubmission
    if added_employers:
        return "low"

    return "low" if removed_employers or changed_dates else "none"


class EmploymentHistoryComparator:
    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        self.threshold = threshold

    def diff(self, previous: ResumeProfile, current: ResumeProfile) -> DiscrepancyReport:
        companies = diff_field(previous.companies, current.companies)
        titles = diff_field(previous.titles, current.titles)
        dates = diff_field(previous.periods, current.periods)
        education = diff_field(previous.education, current.education)
        fields = (companies, titles, dates, education)

        total_previous = sum(
            len(set(values))
            for values in (previous.companies, previous.titles, previous.periods, previous.education)
        )
        total_changed = sum(len(f.added) + len(f.removed) for f in fields)

        if total_previous == 0:
            score = 0
        else:
            score = round(total_changed / (2 * total_previous) * 100)
        score = max(0, min(100, score))

        changed_titles = _employer_changes(previous, current, "title")
        changed_dates = _employer_changes(previous, current, "period")

        report = DiscrepancyReport(
            companies=companies,
            titles=titles,
            dates=dates,
            education=education,
            changed_titles=changed_titles,
            changed_dates=changed_dates,
            score=score,
            threshold=self.threshold,
            is_significant=score > self.threshold,
            has_changes=total_changed > 0 or bool(changed_titles or changed_dates),
            risk_level=evaluate_risk_level(
                companies.added, companies.removed, changed_dates, changed_titles
            ),
        )
        logger.info(
            "Employment history diff: score=%d%% significant=%s risk=%s",
            report.score, report.is_significant, report.risk_level,
        )
        return report
