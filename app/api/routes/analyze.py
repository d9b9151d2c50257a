from fastapi import APIRouter, HTTPException

from app.core.analysis import build_analysis_prompt, parse_analysis_response
from app.core.schemas import (
    AnalysisPromptResponse,
    AnalysisValidationRequest,
    AnalysisValidationResponse,
    ProfileRecord,
)

router = APIRouter(prefix="/analyze", tags=["analyze"])


@router.post(
    "/prompt",
    response_model=AnalysisPromptResponse,
    summary="Build Analysis Prompt",
    description="Build the prompt sent to the external analysis model for a parsed profile.",
    responses={400: {"description": "Profile has no name"}},
)
def analysis_prompt(profile: ProfileRecord):
    if not profile.name:
        raise HTTPException(status_code=400, detail="Invalid profile data provided")
    return AnalysisPromptResponse(prompt=build_analysis_prompt(profile))


@router.post(
    "/validate",
    response_model=AnalysisValidationResponse,
    summary="Validate Analysis Reply",
    description=(
        "Validate the analysis model's raw reply against the analysis schema. "
        "Unusable replies are replaced with a deterministic fallback analysis."
    ),
)
def validate_analysis(body: AnalysisValidationRequest):
    analysis, used_fallback = parse_analysis_response(body.response_text, body.profile)
    return AnalysisValidationResponse(analysis=analysis, used_fallback=used_fallback)
