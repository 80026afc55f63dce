from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from health_companion.ai.prompt import build_diagnosis_prompt
from health_companion.ai.schemas import (
    AnswerOut,
    AskIn,
    DiagnosisIn,
    DiagnosisOut,
    TtsIn,
    TtsOut,
)
from health_companion.api.exception_handlers import error_response
from health_companion.api.schemas import ErrorOut
from health_companion.auth.store import require_session
from health_companion.core.llm.completion_client import (
    CompletionClient,
    CompletionNotConfiguredError,
    CompletionUpstreamError,
    PromptTemplate,
    passthrough_prompt,
)
from health_companion.core.llm.deps import get_ask_client, get_diagnosis_client
from health_companion.core.metrics import record_ai_completion
from health_companion.core.middleware.http_logging import request_id_of
from health_companion.domain.exceptions import CallerInputError

router = APIRouter(prefix="/ai", tags=["ai"], dependencies=[Depends(require_session)])
logger = logging.getLogger("health_companion.ai")

MOCK_AUDIO_URL = "https://example.com/audio/generated.mp3"

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorOut, "description": "Required text field missing."},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {
        "model": ErrorOut,
        "description": "AI key not configured or the completion service failed.",
    },
}


@dataclass(frozen=True)
class CompletionFeature:
    name: str
    missing_input_msg: str
    not_configured_msg: str
    failed_msg: str
    prompt_template: PromptTemplate


DIAGNOSIS = CompletionFeature(
    name="diagnosis",
    missing_input_msg="症状是必填项",
    not_configured_msg="服务端未配置智能诊断的AI API KEY",
    failed_msg="智能诊断服务异常",
    prompt_template=build_diagnosis_prompt,
)

ASK = CompletionFeature(
    name="ask",
    missing_input_msg="问题是必填项",
    not_configured_msg="服务端未配置AI问答的AI API KEY",
    failed_msg="AI服务异常",
    prompt_template=passthrough_prompt,
)


async def _run_completion(
    *,
    request: Request,
    feature: CompletionFeature,
    text: str | None,
    client: CompletionClient,
) -> str | JSONResponse:
    """
    Validate the input, call the completion service and map failures to the envelope.

    Upstream status and body are logged here and never returned to the caller.
    """

    if not text:
        raise CallerInputError(feature.missing_input_msg)

    request_id = request_id_of(request)
    try:
        answer = await client.complete(text, prompt_template=feature.prompt_template)
    except CompletionNotConfiguredError:
        record_ai_completion(feature=feature.name, outcome="not_configured")
        logger.error(
            "AI completion not configured",
            extra={"request_id": request_id, "feature": feature.name, "outcome": "not_configured"},
        )
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, msg=feature.not_configured_msg
        )
    except CompletionUpstreamError as exc:
        record_ai_completion(feature=feature.name, outcome="upstream_error")
        logger.error(
            "AI completion failed",
            exc_info=exc.status_code is None,
            extra={
                "request_id": request_id,
                "feature": feature.name,
                "outcome": "upstream_error",
                "upstream_status_code": exc.status_code,
                "upstream_body": exc.body,
            },
        )
        return error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, msg=feature.failed_msg
        )

    outcome = "success" if answer else "empty"
    record_ai_completion(feature=feature.name, outcome=outcome)
    logger.info(
        "AI completion finished",
        extra={"request_id": request_id, "feature": feature.name, "outcome": outcome},
    )
    return answer


@router.post("/diagnosis", response_model=DiagnosisOut, responses=_ERROR_RESPONSES)
async def diagnosis(
    request: Request,
    payload: DiagnosisIn | None = None,
    client: CompletionClient = Depends(get_diagnosis_client),
):
    """
    Preliminary health advice for a symptom description.

    The symptoms are wrapped in a fixed instruction prompt. An empty `diagnosis`
    means the model answered with nothing usable; it is still a success.
    """

    result = await _run_completion(
        request=request,
        feature=DIAGNOSIS,
        text=payload.symptoms if payload else None,
        client=client,
    )
    if isinstance(result, JSONResponse):
        return result
    return DiagnosisOut(diagnosis=result)


@router.post("/ask", response_model=AnswerOut, responses=_ERROR_RESPONSES)
async def ask(
    request: Request,
    payload: AskIn | None = None,
    client: CompletionClient = Depends(get_ask_client),
):
    """Free-form question answering; the question is sent to the model unchanged."""

    result = await _run_completion(
        request=request,
        feature=ASK,
        text=payload.question if payload else None,
        client=client,
    )
    if isinstance(result, JSONResponse):
        return result
    return AnswerOut(answer=result)


@router.post("/tts", response_model=TtsOut)
async def text_to_speech(payload: TtsIn | None = None) -> TtsOut:
    # Mock: no speech service is called.
    return TtsOut(audio_url=MOCK_AUDIO_URL)
