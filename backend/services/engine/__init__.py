"""Candidate matching and fraud-detection engine.

Function surface over the registry-managed components:

    expand_title(title)                       -> list[str]
    score_title_match(job_title, titles, ...) -> TitleMatchResult
    diff_employment_history(previous, current) -> DiscrepancyReport
    find_similar_candidates(candidate, pool)  -> SimilarityReport
    decide_validation(report, similarity, choice, reason) -> ValidationOutcome
"""

from models.schemas.candidate import Candidate
from models.schemas.discrepancy import DiscrepancyReport
from models.schemas.employment import ResumeProfile
from models.schemas.similarity import SimilarityReport
from models.schemas.title_match import TitleMatchResult
from services.engine.registry import get_engine
from services.engine.validation_workflow import decide_validation


def expand_title(title: str, domain: str | None = None) -> list[str]:
    return get_engine("title_expander").expand(title, domain)


def score_title_match(
    job_title: str,
    candidate_titles: list[str],
    job_skills: list[str] | None = None,
    candidate_skills: list[str] | None = None,
) -> TitleMatchResult:
    return get_engine("title_matcher").score(
        job_title, candidate_titles, job_skills, candidate_skills
    )


def diff_employment_history(previous: ResumeProfile, current: ResumeProfile) -> DiscrepancyReport:
    return get_engine("history_comparator").diff(previous, current)


def find_similar_candidates(
    candidate: Candidate, pool: list[Candidate] | None
) -> SimilarityReport:
    return get_engine("similarity_detector").find_similar_to_candidate(candidate, pool)


__all__ = [
    "decide_validation",
    "diff_employment_history",
    "expand_title",
    "find_similar_candidates",
    "score_title_match",
]
