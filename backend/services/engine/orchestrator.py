"""Resubmission orchestrator: wires comparator, detector and workflow together.

Flow:
    candidate (stored profile) + new profile + candidate pool
      ├─ EmploymentHistoryComparator.diff(stored, new)    → DiscrepancyReport
      ├─ CrossCandidateSimilarityDetector.find_similar(new, pool)  → SimilarityReport
      │                          ↓                              ↓
      └─ ValidationWorkflow(report, similarity, candidate flag)
                                 ↓
                  operator choice → ValidationOutcome

The similarity scan only enriches the review: if the pool cannot be read the
review carries an empty SimilarityReport.
"""

import logging
from collections.abc import Callable

from models.schemas.candidate import Candidate
from models.schemas.employment import ResumeProfile
from models.schemas.review import ResubmissionReview
from models.schemas.similarity import SimilarityReport
from models.schemas.validation import ValidationDecision, ValidationOutcome
from services.engine.registry import get_engine
from services.engine.validation_workflow import ValidationWorkflow

logger = logging.getLogger(__name__)

PoolSource = list[Candidate] | Callable[[], list[Candidate]] | None


def _read_pool(pool: PoolSource) -> list[Candidate]:
    if pool is None:
        return []
    if callable(pool):
        try:
            return list(pool())
        except Exception as e:
            logger.warning("Candidate pool unavailable, skipping similarity check: %s", e)
            return []
    return list(pool)


def check_similarity(
    profile: ResumeProfile, pool: PoolSource, exclude_id: int | None = None
) -> SimilarityReport:
    detector = get_engine("similarity_detector")
    return detector.find_similar(profile, _read_pool(pool), exclude_id=exclude_id)


def _workflow(
    candidate: Candidate, new_profile: ResumeProfile, pool: PoolSource
) -> ValidationWorkflow:
    comparator = get_engine("history_comparator")
    report = comparator.diff(candidate.profile, new_profile)
    similarity = check_similarity(new_profile, pool, exclude_id=candidate.id)
    return ValidationWorkflow(report, similarity, candidate.suspicious_flag)


def review_resubmission(
    candidate: Candidate, new_profile: ResumeProfile, pool: PoolSource
) -> ResubmissionReview:
    """Findings for a resubmission, without deciding."""
    workflow = _workflow(candidate, new_profile, pool)
    return ResubmissionReview(
        candidate_id=candidate.id,
        discrepancy=workflow.report,
        similarity=workflow.similarity or SimilarityReport(),
        existing_flag=candidate.suspicious_flag,
        detected_flag=workflow.detected_flag,
        suggested_reason=workflow.suggested_reason,
        is_unreal=candidate.is_unreal,
    )


def validate_resubmission(
    candidate: Candidate,
    new_profile: ResumeProfile,
    pool: PoolSource,
    choice: ValidationDecision | str,
    reason: str | None = None,
) -> ValidationOutcome:
    """Review a resubmission and apply the operator's decision.

    Raises MissingReasonError when `choice` is unreal and `reason` is empty.
    """
    workflow = _workflow(candidate, new_profile, pool)
    outcome = workflow.decide(choice, reason)
    logger.info(
        "Candidate %d validated as %s (discrepancy %d%%, flag %s)",
        candidate.id, outcome.decision.value, outcome.discrepancy_score,
        outcome.flag.severity.value if outcome.flag.severity else "none",
    )
    return outcome
