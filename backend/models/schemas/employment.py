"""Structured employment history handed over by the resume extraction service."""

from itertools import zip_longest

from pydantic import BaseModel

UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_TITLE = "Position not specified"
UNKNOWN_PERIOD = "Dates not specified"

_PLACEHOLDERS = {UNKNOWN_COMPANY, UNKNOWN_TITLE, UNKNOWN_PERIOD}


class EmploymentRecord(BaseModel):
    """A single job stint."""
    company: str = UNKNOWN_COMPANY
    title: str = UNKNOWN_TITLE
    period: str = UNKNOWN_PERIOD  # free text, e.g. "Feb 2023 - Present"


class ResumeProfile(BaseModel):
    """A candidate's employment history, education and declared skills.

    Upstream extraction delivers companies, titles and periods as parallel
    arrays; use `from_parallel_arrays` to zip them into records.
    """
    records: list[EmploymentRecord] = []
    education: list[str] = []
    skills: list[str] = []

    @classmethod
    def from_parallel_arrays(
        cls,
        companies: list[str] | None = None,
        titles: list[str] | None = None,
        periods: list[str] | None = None,
        education: list[str] | None = None,
        skills: list[str] | None = None,
    ) -> "ResumeProfile":
        """Zip index-aligned arrays, padding short ones with placeholders."""
        records = [
            EmploymentRecord(
                company=company or UNKNOWN_COMPANY,
                title=title or UNKNOWN_TITLE,
                period=period or UNKNOWN_PERIOD,
            )
            for company, title, period in zip_longest(
                companies or [], titles or [], periods or []
            )
        ]
        return cls(
            records=records,
            education=list(education or []),
            skills=list(skills or []),
        )

    @property
    def companies(self) -> list[str]:
        return [r.company for r in self.records if r.company not in _PLACEHOLDERS]

    @property
    def titles(self) -> list[str]:
        return [r.title for r in self.records if r.title not in _PLACEHOLDERS]

    @property
    def periods(self) -> list[str]:
        return [r.period for r in self.records if r.period not in _PLACEHOLDERS]

    @property
    def is_empty(self) -> bool:
        return not (self.records or self.education)
