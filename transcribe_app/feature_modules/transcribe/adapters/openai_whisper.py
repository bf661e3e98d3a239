import logging
from collections.abc import Mapping
from typing import Optional

from openai import AsyncOpenAI, APIConnectionError, APIStatusError, OpenAIError

from transcribe_app.feature_modules.transcribe.config import TranscribeConfig as Cfg
from transcribe_app.feature_modules.transcribe.errors import RemoteServiceError, ValidationError
from transcribe_app.feature_modules.transcribe.models import AudioPayload, TranscriptionResult

# OpenAI Audio Transcriptions endpoint via the SDK
# POST {OPENAI_API_BASE}/v1/audio/transcriptions
# form: file, model, language, response_format

def _client(api_key: str, timeout_s: float) -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=api_key,
        base_url=f"{Cfg.openai_api_base().rstrip('/')}/v1",
        timeout=timeout_s,
        max_retries=0,  # a failed call is reported, never retried
    )

def _remote_message(e: APIStatusError) -> str:
    # SDK unwraps {"error": {...}} into e.body; e.message is "Error code: N - <body repr>"
    body = e.body
    if isinstance(body, Mapping):
        msg = body.get("message")
        if isinstance(msg, str) and msg:
            return msg
    return e.message

def _status_error(e: APIStatusError) -> Exception:
    message = _remote_message(e)
    logging.error(
        "OpenAI API error: status=%s message=%s body=%s",
        e.status_code, message, e.body,
    )
    if e.status_code == 413:
        return ValidationError("File too large for processing", status_code=413)
    return RemoteServiceError(details=message, status_code=e.status_code or 500)

async def transcribe_whisper(
    *,
    payload: AudioPayload,
    api_key: str,
    model: Optional[str] = None,
    response_format: Optional[str] = None,
    language: Optional[str] = None,
    timeout_s: Optional[float] = None,
) -> TranscriptionResult:
    params = {
        "model": model or Cfg.model(),
        "response_format": response_format or Cfg.response_format(),
        "language": language or Cfg.language(),
    }

    try:
        async with _client(api_key, timeout_s or Cfg.timeout_s()) as client:
            if payload.on_disk:
                with open(payload.path, "rb") as fh:
                    resp = await client.audio.transcriptions.create(file=payload.as_upload(fh), **params)
            else:
                resp = await client.audio.transcriptions.create(file=payload.as_upload(), **params)
    except APIStatusError as e:
        raise _status_error(e) from e
    except APIConnectionError as e:
        logging.error("OpenAI connection error: %s", e)
        raise RemoteServiceError(details=str(e) or "Connection error.") from e
    except OpenAIError as e:
        logging.error("OpenAI client error: %s", e)
        raise RemoteServiceError(details=str(e)) from e

    logging.info("Transcription successful (model=%s)", params["model"])
    return TranscriptionResult(
        text=getattr(resp, "text", "") or "",
        language=getattr(resp, "language", None),
    )
