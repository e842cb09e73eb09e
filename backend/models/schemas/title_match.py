"""TitleMatcher output: best title match between a job and a candidate."""

from pydantic import BaseModel


class TitleMatchResult(BaseModel):
    """Best match of a candidate's title history against a job title.

    `matched_title` is always one of the candidate's original titles, never
    an expansion.
    """
    score: float = 0.0  # 0.0-1.0
    matched_title: str | None = None
    match_type: str = "none"  # exact, expanded, lexical, none
    technologies: list[str] = []  # technologies named in both titles
    job_seniority: str = ""
    candidate_seniority: str = ""
