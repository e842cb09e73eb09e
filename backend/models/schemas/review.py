"""Combined integrity findings for a candidate resubmission."""

from pydantic import BaseModel

from models.schemas.discrepancy import DiscrepancyReport
from models.schemas.similarity import SimilarityReport
from models.schemas.validation import SuspiciousFlag


class ResubmissionReview(BaseModel):
    """What the operator sees before deciding matching / unreal."""
    candidate_id: int
    discrepancy: DiscrepancyReport = DiscrepancyReport()
    similarity: SimilarityReport = SimilarityReport()
    existing_flag: SuspiciousFlag = SuspiciousFlag()
    detected_flag: SuspiciousFlag = SuspiciousFlag()
    suggested_reason: str = ""
    is_unreal: bool = False  # candidate already marked unreal system-wide
