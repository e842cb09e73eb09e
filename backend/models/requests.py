from pydantic import BaseModel, Field

from models.schemas.employment import ResumeProfile
from models.schemas.validation import ValidationDecision


class ExpandTitleRequest(BaseModel):
    title: str = Field(..., max_length=200, description="Job title to expand")
    domain: str | None = Field(None, max_length=100, description="Industry domain, e.g. Finance")


class TitleMatchRequest(BaseModel):
    job_title: str = Field(..., max_length=200)
    candidate_titles: list[str] = []
    job_skills: list[str] = []
    candidate_skills: list[str] = []


class ResumeFields(BaseModel):
    """Resume fields as parallel arrays, the way the extraction service sends them."""
    companies: list[str] = []
    titles: list[str] = []
    periods: list[str] = []
    education: list[str] = []
    skills: list[str] = []

    def to_profile(self) -> ResumeProfile:
        return ResumeProfile.from_parallel_arrays(
            self.companies, self.titles, self.periods, self.education, self.skills
        )


class CompareHistoryRequest(BaseModel):
    previous: ResumeFields
    current: ResumeFields


class SimilarEmploymentRequest(BaseModel):
    candidate_id: int | None = Field(None, description="Candidate to exclude from the scan")
    companies: list[str] = []
    periods: list[str] = []


class ValidateCandidateRequest(ResumeFields):
    choice: ValidationDecision
    reason: str | None = Field(None, max_length=2000)


class ClearFlagRequest(BaseModel):
    reason: str = Field(..., max_length=2000)


class CreateCandidateRequest(ResumeFields):
    name: str = Field("", max_length=200)
    email: str = Field("", max_length=320)
