"""EmploymentHistoryComparator output: changes between two resume submissions."""

from pydantic import BaseModel


class FieldDiff(BaseModel):
    """Set difference of one profile field between submissions."""
    added: list[str] = []
    removed: list[str] = []
    unchanged: list[str] = []


class EmployerChange(BaseModel):
    """A title or date that changed for an employer present in both submissions."""
    employer: str
    old: str
    new: str


class DiscrepancyReport(BaseModel):
    """Structured output of the Employment History Comparator.

    `score` is the percentage of fields that changed, 0-100.
    """
    companies: FieldDiff = FieldDiff()
    titles: FieldDiff = FieldDiff()
    dates: FieldDiff = FieldDiff()
    education: FieldDiff = FieldDiff()

    changed_titles: list[EmployerChange] = []
    changed_dates: list[EmployerChange] = []

    score: int = 0  # 0-100
    threshold: int = 10
    is_significant: bool = False  # score > threshold
    has_changes: bool = False
    risk_level: str = "none"  # none, low, medium, high
