"""Pydantic contracts exchanged between the matching and fraud-detection services."""

from models.schemas.candidate import Candidate
from models.schemas.discrepancy import DiscrepancyReport, EmployerChange, FieldDiff
from models.schemas.employment import EmploymentRecord, ResumeProfile
from models.schemas.review import ResubmissionReview
from models.schemas.similarity import CandidateSimilarityMatch, SimilarityReport, SuspiciousPattern
from models.schemas.title_match import TitleMatchResult
from models.schemas.validation import (
    Severity,
    SuspiciousFlag,
    ValidationDecision,
    ValidationOutcome,
)

__all__ = [
    "Candidate",
    "CandidateSimilarityMatch",
    "DiscrepancyReport",
    "EmployerChange",
    "EmploymentRecord",
    "FieldDiff",
    "ResubmissionReview",
    "ResumeProfile",
    "Severity",
    "SimilarityReport",
    "SuspiciousFlag",
    "SuspiciousPattern",
    "TitleMatchResult",
    "ValidationDecision",
    "ValidationOutcome",
]
