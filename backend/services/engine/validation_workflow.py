"""Validation workflow for a resubmitted candidate.

    PENDING -- mark_matching()     --> MATCHING   (eligible for submission)
    PENDING -- mark_unreal(reason) --> UNREAL     (flagged system-wide)

Both end states are terminal. Approving a candidate never clears an existing
suspicious flag; only `clear_flag` does, and it needs an operator reason.
"""

import logging
from enum import Enum

from models.schemas.discrepancy import DiscrepancyReport
from models.schemas.similarity import SimilarityReport
from models.schemas.validation import (
    Severity,
    SuspiciousFlag,
    ValidationDecision,
    ValidationOutcome,
)

logger = logging.getLogger(__name__)

DEFAULT_UNREAL_REASON = "Employment history discrepancy"


class InvalidTransitionError(ValueError):
    """Raised when a validation transition is not allowed."""


class MissingReasonError(InvalidTransitionError):
    """Raised when a transition that needs a reason gets an empty one."""


class WorkflowState(str, Enum):
    PENDING = "pending"
    MATCHING = "matching"
    UNREAL = "unreal"


def flag_from_findings(
    report: DiscrepancyReport | None,
    similarity: SimilarityReport | None,
) -> SuspiciousFlag:
    """Suspicious flag implied by comparator and detector output."""
    if similarity is not None and similarity.identical_chronology_matches:
        n = len(similarity.identical_chronology_matches)
        return SuspiciousFlag(
            is_suspicious=True,
            reason=f"Identical job chronology with {n} other candidate(s)",
            severity=Severity.HIGH,
        )
    if similarity is not None and similarity.high_similarity_matches:
        n = len(similarity.high_similarity_matches)
        return SuspiciousFlag(
            is_suspicious=True,
            reason=f"Highly similar employment history with {n} other candidate(s)",
            severity=Severity.MEDIUM,
        )
    if report is not None and report.is_significant:
        return SuspiciousFlag(
            is_suspicious=True,
            reason=f"{report.score}% discrepancy between resume submissions",
            severity=Severity.LOW,
        )
    return SuspiciousFlag()


def suggest_reason(
    report: DiscrepancyReport | None,
    similarity: SimilarityReport | None,
) -> str:
    """Reason text proposed to the operator when marking a candidate unreal."""
    parts: list[str] = []
    if similarity is not None:
        identical = similarity.identical_chronology_matches
        if identical:
            names = ", ".join(m.candidate_name for m in identical[:3])
            parts.append(f"Identical job chronology with other candidate(s): {names}")
        elif similarity.high_similarity_matches:
            best = similarity.high_similarity_matches[0]
            parts.append(
                f"Employment history {best.similarity_score}% similar to {best.candidate_name}"
            )
    if report is not None and report.is_significant:
        parts.append(f"{report.score}% discrepancy from previous submission")
    return "; ".join(parts) or DEFAULT_UNREAL_REASON


def clear_flag(flag: SuspiciousFlag, reason: str) -> SuspiciousFlag:
    """Explicit operator override removing a suspicious flag."""
    if not reason or not reason.strip():
        raise MissingReasonError("Clearing a suspicious flag requires a reason")
    if flag.is_suspicious:
        logger.info("Suspicious flag (%s) cleared by override: %s", flag.severity, reason)
    return SuspiciousFlag()


class ValidationWorkflow:
    """One validation of one resubmission."""

    def __init__(
        self,
        report: DiscrepancyReport | None = None,
        similarity: SimilarityReport | None = None,
        existing_flag: SuspiciousFlag | None = None,
    ) -> None:
        self.report = report or DiscrepancyReport()
        self.similarity = similarity
        self.existing_flag = existing_flag or SuspiciousFlag()
        self.state = WorkflowState.PENDING
        self.outcome: ValidationOutcome | None = None

    @property
    def suggested_reason(self) -> str:
        return suggest_reason(self.report, self.similarity)

    @property
    def detected_flag(self) -> SuspiciousFlag:
        return flag_from_findings(self.report, self.similarity)

    def _ensure_pending(self) -> None:
        if self.state is not WorkflowState.PENDING:
            raise InvalidTransitionError(
                f"Validation already decided as {self.state.value}"
            )

    def mark_matching(self, note: str | None = None) -> ValidationOutcome:
        self._ensure_pending()
        flag = self.existing_flag.merge(self.detected_flag)
        self.state = WorkflowState.MATCHING
        self.outcome = ValidationOutcome(
            decision=ValidationDecision.MATCHING,
            reason=(note or "").strip(),
            flag=flag,
            discrepancy_score=self.report.score,
            significant_discrepancy=self.report.is_significant,
            eligible_for_submission=True,
            is_unreal=False,
        )
        if flag.is_suspicious:
            logger.info("Candidate approved but keeps %s suspicious flag", flag.severity)
        return self.outcome

    def mark_unreal(self, reason: str | None) -> ValidationOutcome:
        self._ensure_pending()
        if not reason or not reason.strip():
            raise MissingReasonError("Marking a candidate as unreal requires a reason")
        reason = reason.strip()
        flag = self.existing_flag.merge(
            SuspiciousFlag(is_suspicious=True, reason=reason, severity=Severity.CRITICAL)
        )
        self.state = WorkflowState.UNREAL
        self.outcome = ValidationOutcome(
            decision=ValidationDecision.UNREAL,
            reason=reason,
            flag=flag,
            discrepancy_score=self.report.score,
            significant_discrepancy=self.report.is_significant,
            eligible_for_submission=False,
            is_unreal=True,
        )
        logger.info("Candidate marked unreal: %s", reason)
        return self.outcome

    def decide(
        self, choice: ValidationDecision | str, reason: str | None = None
    ) -> ValidationOutcome:
        try:
            decision = ValidationDecision(choice)
        except ValueError:
            raise InvalidTransitionError(f"Unknown validation choice: {choice!r}") from None
        if decision is ValidationDecision.UNREAL:
            return self.mark_unreal(reason)
        return self.mark_matching(reason)


def decide_validation(
    report: DiscrepancyReport | None,
    similarity: SimilarityReport | None,
    choice: ValidationDecision | str,
    reason: str | None = None,
    existing_flag: SuspiciousFlag | None = None,
) -> ValidationOutcome:
    """Run a fresh workflow to a terminal decision."""
    workflow = ValidationWorkflow(report, similarity, existing_flag)
    return workflow.decide(choice, reason)
