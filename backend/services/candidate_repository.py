"""In-memory candidate repository.

Stands in for the application's persistence layer: it supplies the candidate
pool to the similarity detector and records validation decisions. Reads
return copies, so callers work on a snapshot.
"""

import logging

from models.schemas.candidate import Candidate
from models.schemas.employment import ResumeProfile
from models.schemas.validation import SuspiciousFlag, ValidationDecision, ValidationOutcome
from services.engine.validation_workflow import clear_flag

logger = logging.getLogger(__name__)


class CandidateNotFoundError(LookupError):
    pass


class InMemoryCandidateRepository:
    def __init__(self, candidates: list[Candidate] | None = None) -> None:
        self._candidates: dict[int, Candidate] = {}
        self._validations: dict[int, list[ValidationOutcome]] = {}
        for c in candidates or []:
            self.add(c)

    def add(self, candidate: Candidate) -> Candidate:
        self._candidates[candidate.id] = candidate.model_copy(deep=True)
        return candidate

    def create(
        self, name: str = "", email: str = "", profile: ResumeProfile | None = None
    ) -> Candidate:
        """Store a new candidate under the next free id."""
        candidate_id = max(self._candidates, default=0) + 1
        candidate = Candidate(
            id=candidate_id, name=name, email=email, profile=profile or ResumeProfile()
        )
        self._candidates[candidate_id] = candidate
        logger.info("Created candidate %d", candidate_id)
        return candidate.model_copy(deep=True)

    def get(self, candidate_id: int) -> Candidate | None:
        candidate = self._candidates.get(candidate_id)
        return candidate.model_copy(deep=True) if candidate else None

    def require(self, candidate_id: int) -> Candidate:
        candidate = self.get(candidate_id)
        if candidate is None:
            raise CandidateNotFoundError(f"Candidate {candidate_id} not found")
        return candidate

    def all(self) -> list[Candidate]:
        return [c.model_copy(deep=True) for c in self._candidates.values()]

    def validations(self, candidate_id: int) -> list[ValidationOutcome]:
        return list(self._validations.get(candidate_id, []))

    def record_validation(
        self,
        candidate_id: int,
        outcome: ValidationOutcome,
        new_profile: ResumeProfile | None = None,
    ) -> Candidate:
        """Persist a decision: unreal marks the candidate, matching stores the new profile."""
        candidate = self.require(candidate_id)
        # Never lowers a flag raised after the outcome was computed
        updates: dict = {"suspicious_flag": candidate.suspicious_flag.merge(outcome.flag)}
        if outcome.decision is ValidationDecision.UNREAL:
            updates["is_unreal"] = True
            updates["unreal_reason"] = outcome.reason
        elif new_profile is not None and new_profile.records:
            updates["profile"] = new_profile

        updated = candidate.model_copy(update=updates, deep=True)
        self._candidates[candidate_id] = updated
        self._validations.setdefault(candidate_id, []).append(outcome)
        logger.info("Recorded %s validation for candidate %d", outcome.decision.value, candidate_id)
        return updated.model_copy(deep=True)

    def clear_flag(self, candidate_id: int, reason: str) -> Candidate:
        """Explicit override: drop the suspicious flag and the unreal mark."""
        candidate = self.require(candidate_id)
        updated = candidate.model_copy(update={
            "suspicious_flag": clear_flag(candidate.suspicious_flag, reason),
            "is_unreal": False,
            "unreal_reason": None,
        })
        self._candidates[candidate_id] = updated
        return updated.model_copy(deep=True)

    def clear(self) -> None:
        """Drop all candidates and validations. Useful for testing."""
        self._candidates.clear()
        self._validations.clear()

    def set_flag(self, candidate_id: int, flag: SuspiciousFlag) -> Candidate:
        """Raise a candidate's flag; never lowers the current severity."""
        candidate = self.require(candidate_id)
        updated = candidate.model_copy(update={
            "suspicious_flag": candidate.suspicious_flag.merge(flag),
        })
        self._candidates[candidate_id] = updated
        return updated.model_copy(deep=True)
