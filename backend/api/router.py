from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_candidate_repository
from config import settings
from models.requests import (
    ClearFlagRequest,
    CreateCandidateRequest,
    CompareHistoryRequest,
    ExpandTitleRequest,
    ResumeFields,
    SimilarEmploymentRequest,
    TitleMatchRequest,
    ValidateCandidateRequest,
)
from models.responses import ExpandTitleResponse, ValidationResponse
from models.schemas.candidate import Candidate
from models.schemas.discrepancy import DiscrepancyReport
from models.schemas.employment import ResumeProfile
from models.schemas.review import ResubmissionReview
from models.schemas.similarity import SimilarityReport
from models.schemas.title_match import TitleMatchResult
from models.schemas.validation import ValidationDecision
from services.candidate_repository import CandidateNotFoundError, InMemoryCandidateRepository
from services.engine import orchestrator
from services.engine.registry import get_engine, get_taxonomy
from services.engine.validation_workflow import InvalidTransitionError, flag_from_findings

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _require_candidate(repo: InMemoryCandidateRepository, candidate_id: int) -> Candidate:
    try:
        return repo.require(candidate_id)
    except CandidateNotFoundError:
        raise HTTPException(status_code=404, detail="Candidate not found")


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "taxonomy_titles": get_taxonomy().size,
    }


@router.post("/titles/expand", response_model=ExpandTitleResponse)
@limiter.limit(settings.rate_limit)
async def expand_title(request: Request, body: ExpandTitleRequest):
    if not body.title.strip():
        raise HTTPException(status_code=400, detail="Title is required")
    expander = get_engine("title_expander")
    return ExpandTitleResponse(
        title=body.title,
        expanded=expander.expand(body.title, body.domain),
        parent_roles=expander.parent_roles(body.title),
        seniority=expander.seniority(body.title)[0],
    )


@router.post("/titles/match", response_model=TitleMatchResult)
@limiter.limit(settings.rate_limit)
async def match_title(request: Request, body: TitleMatchRequest):
    return get_engine("title_matcher").score(
        body.job_title, body.candidate_titles, body.job_skills, body.candidate_skills
    )


@router.post("/candidates", response_model=Candidate, status_code=201)
@limiter.limit(settings.rate_limit)
async def create_candidate(
    request: Request,
    body: CreateCandidateRequest,
    repo: InMemoryCandidateRepository = Depends(get_candidate_repository),
):
    return repo.create(body.name, body.email, body.to_profile())


@router.get("/candidates", response_model=list[Candidate])
async def list_candidates(repo: InMemoryCandidateRepository = Depends(get_candidate_repository)):
    return repo.all()


@router.get("/candidates/{candidate_id}", response_model=Candidate)
async def get_candidate(
    candidate_id: int,
    repo: InMemoryCandidateRepository = Depends(get_candidate_repository),
):
    return _require_candidate(repo, candidate_id)


@router.post("/candidates/compare-history", response_model=DiscrepancyReport)
@limiter.limit(settings.rate_limit)
async def compare_history(request: Request, body: CompareHistoryRequest):
    return get_engine("history_comparator").diff(
        body.previous.to_profile(), body.current.to_profile()
    )


@router.post("/candidates/check-similar-employment", response_model=SimilarityReport)
@limiter.limit(settings.rate_limit)
async def check_similar_employment(
    request: Request,
    body: SimilarEmploymentRequest,
    repo: InMemoryCandidateRepository = Depends(get_candidate_repository),
):
    if not body.companies:
        raise HTTPException(
            status_code=400,
            detail="Required fields missing: companies must be a non-empty array",
        )
    profile = ResumeProfile.from_parallel_arrays(companies=body.companies, periods=body.periods)
    report = orchestrator.check_similarity(profile, repo.all, exclude_id=body.candidate_id)

    flag = flag_from_findings(None, report)
    # Unsaved candidates are checked but cannot carry a flag yet
    if flag.is_suspicious and body.candidate_id is not None and repo.get(body.candidate_id):
        repo.set_flag(body.candidate_id, flag)
    return report


@router.post("/candidates/{candidate_id}/review", response_model=ResubmissionReview)
@limiter.limit(settings.rate_limit)
async def review_candidate(
    request: Request,
    candidate_id: int,
    body: ResumeFields,
    repo: InMemoryCandidateRepository = Depends(get_candidate_repository),
):
    candidate = _require_candidate(repo, candidate_id)
    return orchestrator.review_resubmission(candidate, body.to_profile(), repo.all)


@router.post("/candidates/{candidate_id}/validate", response_model=ValidationResponse)
@limiter.limit(settings.rate_limit)
async def validate_candidate(
    request: Request,
    candidate_id: int,
    body: ValidateCandidateRequest,
    repo: InMemoryCandidateRepository = Depends(get_candidate_repository),
):
    candidate = _require_candidate(repo, candidate_id)
    new_profile = body.to_profile()
    try:
        outcome = orchestrator.validate_resubmission(
            candidate, new_profile, repo.all, body.choice, body.reason
        )
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))

    updated = repo.record_validation(candidate_id, outcome, new_profile)
    if outcome.decision is ValidationDecision.UNREAL:
        message = "Candidate marked as unreal"
    else:
        message = "Candidate validated successfully"
    return ValidationResponse(outcome=outcome, candidate=updated, message=message)


@router.post("/candidates/{candidate_id}/flag/clear", response_model=Candidate)
@limiter.limit(settings.rate_limit)
async def clear_candidate_flag(
    request: Request,
    candidate_id: int,
    body: ClearFlagRequest,
    repo: InMemoryCandidateRepository = Depends(get_candidate_repository),
):
    _require_candidate(repo, candidate_id)
    try:
        return repo.clear_flag(candidate_id, body.reason)
    except InvalidTransitionError as e:
        raise HTTPException(status_code=400, detail=str(e))
