from fastapi.responses import JSONResponse

from .errors import TranscribeError
from .models import TranscriptionResult
from .schemas import ErrorResponse, TranscribeResponse

def success_response(result: TranscriptionResult) -> JSONResponse:
    body = TranscribeResponse(text=result.text, language=result.language)
    return JSONResponse(status_code=200, content=body.model_dump(exclude_none=True))

def error_response(err: TranscribeError) -> JSONResponse:
    body = ErrorResponse(error=err.error, details=err.details, stack=err.stack)
    return JSONResponse(status_code=err.status_code, content=body.model_dump(exclude_none=True))
