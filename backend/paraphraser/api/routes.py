import json
import logging
from typing import Iterator, Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse, StreamingResponse

from paraphraser.config import GEMINI_MODEL, GEMINI_QUICK_MODEL, get_api_key
from paraphraser.llm.client import GeminiClient
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.controller import PipelineController
from paraphraser.schemas import (
    ErrorResponse,
    HealthResponse,
    HumanizeRequest,
    HumanizeResponse,
    QuickParaphraseRequest,
    QuickParaphraseResponse,
)
from paraphraser.validation import (
    normalize_tone,
    validate_humanize_text,
    validate_quick_text,
    validate_tone,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_KEY = "GEMINI_API_KEY is missing in environment variables"
PIPELINE_FAILED = "Paraphrasing failed"
QUICK_FAILED = "An error occurred while paraphrasing the text."

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(
    message: str, status_code: int, details: Optional[str] = None
) -> JSONResponse:
    content = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def _prepare_humanize(request: HumanizeRequest):
    """
    Validate a humanize request and build its client.

    Returns (client, tone, None) or (None, None, error JSONResponse).
    """
    tone = normalize_tone(request.tone)

    error = validate_humanize_text(request.text) or validate_tone(tone)
    if error:
        return None, None, error_response(error, 400)

    api_key = get_api_key()
    if not api_key:
        logger.error(MISSING_KEY)
        return None, None, error_response(MISSING_KEY, 500)

    return GeminiClient(api_key=api_key, model=GEMINI_MODEL), tone, None


# ============================================================
# HUMANIZE PIPELINE
# ============================================================

@router.post(
    "/api/paraphrase",
    response_model=HumanizeResponse,
    responses=ERROR_RESPONSES,
)
def humanize(request: HumanizeRequest):
    client, tone, error = _prepare_humanize(request)
    if error:
        return error

    context = PipelineController(client).run(request.text, tone=tone)

    if not context.ok:
        details = context.errors[0] if context.errors else "Pipeline produced no result"
        logger.error("Paraphrase pipeline failed: %s", details)
        return error_response(PIPELINE_FAILED, 500, details=details)

    return {"result": context.result}


def _sse(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


@router.post("/api/paraphrase/stream", responses=ERROR_RESPONSES)
def humanize_stream(request: HumanizeRequest):
    """
    Stream pipeline progress as Server-Sent Events (SSE).

    Validation errors are plain JSON responses sent before the stream opens.
    """
    client, tone, error = _prepare_humanize(request)
    if error:
        return error

    controller = PipelineController(client)
    context = ParaphraseContext(text=request.text, tone=tone)

    def event_generator() -> Iterator[str]:
        for stage, result, progress in controller.iter_run(context):
            if not result.is_valid:
                break
            yield _sse({"stage": stage.name, "status": "complete", "progress": progress})

        if context.ok:
            yield _sse(
                {
                    "stage": "complete",
                    "status": "success",
                    "progress": 100,
                    "result": context.result,
                }
            )
        else:
            details = context.errors[0] if context.errors else "Pipeline produced no result"
            logger.error("Paraphrase stream failed: %s", details)
            yield _sse({"stage": "error", "status": "failed", "message": details})

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )


# ============================================================
# QUICK PARAPHRASE
# ============================================================

@router.post(
    "/paraphrase",
    response_model=QuickParaphraseResponse,
    responses=ERROR_RESPONSES,
)
def quick_paraphrase(request: QuickParaphraseRequest):
    error = validate_quick_text(request.text)
    if error:
        return error_response(error, 400)

    api_key = get_api_key()
    if not api_key:
        logger.error(MISSING_KEY)
        return error_response(QUICK_FAILED, 500)

    client = GeminiClient(api_key=api_key, model=GEMINI_QUICK_MODEL)
    context = PipelineController.quick(client).run(request.text.strip())

    if not context.ok:
        logger.error("Error in paraphrasing: %s", context.errors)
        return error_response(QUICK_FAILED, 500)

    return {"paraphrased": context.result}


@router.get("/health", response_model=HealthResponse)
def health():
    return {"status": "OK"}
