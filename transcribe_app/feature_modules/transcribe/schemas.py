from pydantic import BaseModel

class TranscribeResponse(BaseModel):
    text: str
    success: bool = True
    language: str | None = None

class ErrorResponse(BaseModel):
    error: str
    details: str | None = None
    stack: str | None = None
    success: bool = False
