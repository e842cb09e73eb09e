"""CrossCandidateSimilarityDetector output."""

from pydantic import BaseModel, computed_field

from models.schemas.validation import Severity


class CandidateSimilarityMatch(BaseModel):
    """Another candidate whose employment chronology overlaps the checked one."""
    candidate_id: int
    candidate_name: str = ""
    candidate_email: str = ""
    similarity_score: int = 0  # 0-100
    matched_companies: list[str] = []
    matched_dates: list[str] = []
    severity: Severity = Severity.MEDIUM


class SuspiciousPattern(BaseModel):
    type: str  # IDENTICAL_CHRONOLOGY, HIGH_SIMILARITY
    severity: Severity
    message: str
    detail: str = ""


class SimilarityReport(BaseModel):
    """Result of scanning the candidate pool for shared employment histories.

    Identical and high-similarity matches are kept apart so callers can
    treat them differently.
    """
    identical_chronology_matches: list[CandidateSimilarityMatch] = []
    high_similarity_matches: list[CandidateSimilarityMatch] = []
    total_candidates_checked: int = 0
    suspicious_patterns: list[SuspiciousPattern] = []
    message: str = "Employment history validation complete"

    @computed_field
    @property
    def has_identical_chronology(self) -> bool:
        return bool(self.identical_chronology_matches)

    @computed_field
    @property
    def has_similar_histories(self) -> bool:
        return bool(self.high_similarity_matches)
