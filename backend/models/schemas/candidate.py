"""Candidate as seen by the engine (owned by the candidate repository)."""

from pydantic import BaseModel

from models.schemas.employment import ResumeProfile
from models.schemas.validation import SuspiciousFlag


class Candidate(BaseModel):
    id: int
    name: str = ""
    email: str = ""
    profile: ResumeProfile = ResumeProfile()
    is_unreal: bool = False
    unreal_reason: str | None = None
    suspicious_flag: SuspiciousFlag = SuspiciousFlag()
