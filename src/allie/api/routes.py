"""API routes."""
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from allie.api.dependencies import Services, get_services
from allie.core.errors import AllieError, ErrorKind, LLMServiceError, ProviderError, ScheduleStoreError
from allie.core.logging import logger
from allie.models.schemas import (
    ErrorResponse,
    GenerateRequest,
    MessageResponse,
    ScheduleDeleteRequest,
    ScheduleRequest,
    SmartRequest,
    SmartResponse,
    TranscriptionResponse,
)
from allie.services.chat.handlers.base import ChatResponse

router = APIRouter()

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UPSTREAM: 500,
    ErrorKind.INTERNAL: 500,
}


def error_response(message: str, kind: ErrorKind) -> JSONResponse:
    return JSONResponse(status_code=STATUS_BY_KIND[kind], content=ErrorResponse(error=message).model_dump())


def render(response: ChatResponse) -> JSONResponse:
    """Turn a handler outcome into the JSON envelope and status code."""
    if response.ok:
        return JSONResponse(content=response.to_dict())
    return JSONResponse(status_code=STATUS_BY_KIND[response.error_kind], content=response.to_dict())


@router.get("/health")
def health_check():
    """Liveness check; makes no outbound calls."""
    return {"status": "ok"}


@router.get("/health/ready")
def readiness_check(services: Services = Depends(get_services)):
    """Readiness check; verifies that the language model API answers."""
    return {"status": "ok", "llm": services.llm.health_check()}


@router.post("/api/smart", response_model=SmartResponse)
def smart(request: SmartRequest, services: Services = Depends(get_services)):
    """Classify the prompt and answer with the matching handler or the LLM."""
    if not request.prompt:
        return error_response("Prompt is required", ErrorKind.VALIDATION)

    logger.info(f"[API /smart] prompt: '{request.prompt[:50]}'")
    response = services.orchestrator.chat(
        message=request.prompt,
        history=[turn.model_dump() for turn in request.conversationHistory],
        personality=request.personality or request.mode,
    )
    return render(response)


@router.post("/api/transcribe", response_model=TranscriptionResponse)
def transcribe(
    file: Optional[UploadFile] = File(None),
    services: Services = Depends(get_services),
):
    """Speech-to-text for a single uploaded audio file."""
    if file is None:
        return error_response("No audio file uploaded", ErrorKind.VALIDATION)

    try:
        text = services.transcription.transcribe_upload(file.file)
    except (LLMServiceError, OSError) as e:
        logger.error(f"Whisper transcription error: {e}")
        return error_response("Failed to transcribe audio", ErrorKind.UPSTREAM)
    return {"text": text}


@router.post("/api/schedule", response_model=MessageResponse)
def schedule(request: ScheduleRequest, services: Services = Depends(get_services)):
    """Add an event from a "remind me to ..." prompt, or list the schedule."""
    if not request.prompt:
        return error_response("Prompt is required", ErrorKind.VALIDATION)

    try:
        message = services.schedule.handle_prompt(request.prompt)
    except ScheduleStoreError as e:
        logger.error(f"Schedule API error: {e}", exc_info=True)
        return error_response("Internal server error", e.kind)
    return {"message": message}


@router.post("/api/schedule/delete", response_model=MessageResponse)
def schedule_delete(request: ScheduleDeleteRequest, services: Services = Depends(get_services)):
    """Delete an event by id, or by keyword when exactly one event matches."""
    try:
        if request.id:
            return {"message": services.schedule.delete_by_id(request.id)}
        if not request.prompt:
            return error_response("Prompt or id is required to delete an event.", ErrorKind.VALIDATION)
        return {"message": services.schedule.delete_matching(request.prompt)}
    except ScheduleStoreError as e:
        logger.error(f"Schedule Delete API error: {e}", exc_info=True)
        return error_response("Internal server error", e.kind)


# ===== Endpoints kept for older clients =====

@router.get("/api/weather/{city}")
def weather_raw(city: str, services: Services = Depends(get_services)):
    """Raw provider payload for a city."""
    try:
        return services.weather.current(city)
    except ProviderError as e:
        logger.error(f"Weather API error: {e}")
        return error_response("Failed to fetch weather data", ErrorKind.UPSTREAM)


@router.post("/api/generate", response_model=SmartResponse)
def generate(request: GenerateRequest, services: Services = Depends(get_services)):
    """Plain completion with no intent routing or personality."""
    if not request.prompt:
        return error_response("Prompt is required", ErrorKind.VALIDATION)

    try:
        result = services.llm.complete([{"role": "user", "content": request.prompt}])
    except AllieError as e:
        logger.error(f"Generate error: {e}")
        return error_response("Failed to get AI response", ErrorKind.UPSTREAM)
    return {"result": result}
