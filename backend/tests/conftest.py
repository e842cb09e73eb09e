"""Shared test configuration, fixtures and pytest markers."""

import pytest

from models.schemas.candidate import Candidate
from models.schemas.employment import ResumeProfile
from services.engine.registry import clear as clear_registry


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "api: exercises the HTTP routes through TestClient"
    )


@pytest.fixture(autouse=True)
def _reset_registry():
    """Drop cached engine components so settings changes take effect."""
    clear_registry()
    yield
    clear_registry()


@pytest.fixture
def acme_profile() -> ResumeProfile:
    return ResumeProfile.from_parallel_arrays(
        companies=["Acme", "Globex"],
        titles=["Java Developer", "Senior Software Engineer"],
        periods=["2020-2021", "2021-2022"],
        education=["BS Computer Science"],
        skills=["Java", "Spring"],
    )


@pytest.fixture
def candidate_pool() -> list[Candidate]:
    """Pool with one identical history (reordered), one near match and one unrelated."""
    return [
        Candidate(
            id=2,
            name="Jane Roe",
            email="jane@example.com",
            profile=ResumeProfile.from_parallel_arrays(
                companies=["Globex", "Acme"],
                periods=["2021-2022", "2020-2021"],
            ),
        ),
        Candidate(
            id=3,
            name="Sam Poe",
            email="sam@example.com",
            profile=ResumeProfile.from_parallel_arrays(
                companies=["Acme, Austin, TX", "Globex", "Initech", "Umbrella", "Hooli"],
                periods=["2020 - 2021", "2021 - 2022", "2018-2019", "2016-2018", "2015-2016"],
            ),
        ),
        Candidate(
            id=4,
            name="Lee Doe",
            email="lee@example.com",
            profile=ResumeProfile.from_parallel_arrays(
                companies=["Initech"],
                periods=["2010-2012"],
            ),
        ),
        Candidate(id=5, name="No History"),
    ]
