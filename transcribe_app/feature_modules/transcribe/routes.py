import logging
import traceback

from fastapi import APIRouter, Request, Response

from transcribe_app.feature_modules.transcribe.config import TranscribeConfig as Cfg
from transcribe_app.feature_modules.transcribe.errors import LocalProcessingError, TranscribeError
from transcribe_app.feature_modules.transcribe.responses import error_response, success_response
from transcribe_app.feature_modules.transcribe.schemas import TranscribeResponse
from transcribe_app.feature_modules.transcribe.services import transcribe_request

router = APIRouter(prefix="/api", tags=["transcribe"])

@router.post("/transcribe", response_model=TranscribeResponse)
async def post_transcribe(request: Request):
    """
    multipart/form-data with one audio file → {"text", "success"}.
    Every failure is returned as {"error", "details"?, "success": false}.
    """
    try:
        result = await transcribe_request(request=request)
    except TranscribeError as e:
        return error_response(e)
    except Exception as e:
        logging.exception("General error while processing audio file")
        stack = traceback.format_exc() if Cfg.debug_errors() else None
        return error_response(LocalProcessingError.from_exception(e, stack=stack))
    return success_response(result)

@router.options("/transcribe")
async def options_transcribe() -> Response:
    # CORS headers are assigned by the origin filter middleware
    return Response(status_code=200)
