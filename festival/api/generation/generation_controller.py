import traceback
from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from festival.api.generation.generation_dto import (
    CoupletRequest,
    CoupletResult,
    ErrorResponse,
    FortuneCard,
)
from festival.api.generation.generation_service import GenerationService
from festival.config import Settings, get_settings
from festival.utils.errors import MalformedUpstreamResponseError, MissingCredentialError

router = APIRouter(
    tags=["Generation"],
    prefix="/api",
)


def get_generation_service(
    settings: Settings = Depends(get_settings),
) -> GenerationService:
    return GenerationService(settings)


def _failure(where: str, fallback: str, e: Exception) -> JSONResponse:
    if isinstance(e, MissingCredentialError):
        return JSONResponse(status_code=500, content={"error": str(e)})
    if isinstance(e, MalformedUpstreamResponseError):
        print(f"{where} generation error: {e}")
    else:
        print(f"{where} generation error: {e!r}")
        traceback.print_exc()
    return JSONResponse(status_code=500, content={"error": fallback})


@router.post(
    "/couplet",
    response_model=CoupletResult,
    responses={500: {"model": ErrorResponse}},
    summary="Generate a New Year couplet for a theme",
)
async def create_couplet(
    body: Optional[CoupletRequest] = None,
    service: GenerationService = Depends(get_generation_service),
):
    # a missing body is treated as an empty request
    body = body or CoupletRequest()
    try:
        return await service.generate_couplet(body.theme, body.style)
    except Exception as e:
        return _failure("Couplet", "Failed to generate couplet", e)


@router.post(
    "/fortune",
    response_model=FortuneCard,
    responses={500: {"model": ErrorResponse}},
    summary="Draw a New Year fortune card",
)
async def create_fortune(
    service: GenerationService = Depends(get_generation_service),
):
    try:
        return await service.generate_fortune()
    except Exception as e:
        return _failure("Fortune", "Failed to generate fortune", e)
