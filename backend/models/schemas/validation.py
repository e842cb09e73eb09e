"""Suspicious flags and validation decisions."""

from enum import Enum

from pydantic import BaseModel


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
    Severity.CRITICAL: 4,
}


class ValidationDecision(str, Enum):
    MATCHING = "matching"
    UNREAL = "unreal"


class SuspiciousFlag(BaseModel):
    """Persistent fraud-risk marker on a candidate or submission.

    Severity only ever goes up through `merge`; dropping a flag requires an
    explicit override (see validation_workflow.clear_flag).
    """
    is_suspicious: bool = False
    reason: str = ""
    severity: Severity | None = None

    def merge(self, other: "SuspiciousFlag | None") -> "SuspiciousFlag":
        """Combine two flags, keeping the higher severity and its reason."""
        if other is None or not other.is_suspicious:
            return self.model_copy()
        if not self.is_suspicious:
            return other.model_copy()
        if other.severity is not None and (
            self.severity is None or other.severity.rank > self.severity.rank
        ):
            return other.model_copy()
        return self.model_copy()


class ValidationOutcome(BaseModel):
    """Terminal result of the validation workflow for one resubmission."""
    decision: ValidationDecision
    reason: str = ""
    flag: SuspiciousFlag = SuspiciousFlag()
    discrepancy_score: int = 0
    significant_discrepancy: bool = False
    eligible_for_submission: bool = False
    is_unreal: bool = False
