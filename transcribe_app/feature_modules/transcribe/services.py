import logging

from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException

from transcribe_app.feature_modules.transcribe.config import TranscribeConfig as Cfg
from transcribe_app.feature_modules.transcribe.errors import ConfigurationError, ValidationError
from transcribe_app.feature_modules.transcribe.models import AudioPayload, TranscriptionResult
from transcribe_app.feature_modules.transcribe.storage import materialize
from transcribe_app.feature_modules.transcribe.validators import ensure_audio_field
from transcribe_app.feature_modules.transcribe.adapters.openai_whisper import transcribe_whisper

def _require_api_key() -> str:
    Cfg.ensure_env()
    key = Cfg.openai_api_key()
    if not key:
        logging.error("OpenAI API key missing")
        raise ConfigurationError()
    return key

async def _intake(request: Request) -> AudioPayload:
    field_name = Cfg.field_name()
    try:
        form = await request.form(max_files=1)
    except StarletteHTTPException as e:
        logging.error("Form parsing error: %s", e.detail)
        raise ValidationError("Invalid multipart body", details=str(e.detail)) from e

    try:
        upload = ensure_audio_field(form, field_name)
        logging.info(
            "Audio file details: size=%s type=%s name=%s",
            getattr(upload, "size", None), upload.content_type, upload.filename,
        )
        return await materialize(upload)
    except ValidationError as e:
        logging.error("Rejected %r upload: %s", field_name, e.error)
        raise
    finally:
        await form.close()

async def transcribe_request(*, request: Request) -> TranscriptionResult:
    # Credential first, before any body parsing
    api_key = _require_api_key()

    payload = await _intake(request)
    try:
        return await transcribe_whisper(payload=payload, api_key=api_key)
    finally:
        payload.discard()
