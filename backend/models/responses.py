from pydantic import BaseModel

from models.schemas.candidate import Candidate
from models.schemas.validation import ValidationOutcome


class ExpandTitleResponse(BaseModel):
    title: str
    expanded: list[str] = []
    parent_roles: list[str] = []
    seniority: str = ""


class ValidationResponse(BaseModel):
    outcome: ValidationOutcome
    candidate: Candidate
    message: str = ""
