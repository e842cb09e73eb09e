"""Shared dependencies for API routes."""

from services.candidate_repository import InMemoryCandidateRepository

_repository = InMemoryCandidateRepository()


def get_candidate_repository() -> InMemoryCandidateRepository:
    return _repository
