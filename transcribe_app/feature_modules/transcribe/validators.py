from typing import Any, Optional

from starlette.datastructures import FormData, UploadFile

from .errors import ValidationError

def _limit_label(max_bytes: int) -> str:
    mb = 1024 * 1024
    if max_bytes >= mb and max_bytes % mb == 0:
        return f"{max_bytes // mb}MB"
    return f"{max_bytes} bytes"

def too_large(max_bytes: int) -> ValidationError:
    return ValidationError(f"Audio file size exceeds {_limit_label(max_bytes)} limit")

def ensure_audio_field(form: FormData, field_name: str) -> UploadFile:
    value: Optional[Any] = form.get(field_name)
    if value is None:
        raise ValidationError("No audio file provided")
    if not isinstance(value, UploadFile):
        raise ValidationError("Invalid audio file")
    return value

def ensure_declared_size(upload: UploadFile, max_bytes: int) -> None:
    # Starlette records the part size once spooled; None when unknown
    size = getattr(upload, "size", None)
    if size is not None and size > max_bytes:
        raise too_large(max_bytes)

def ensure_not_empty(size: int) -> None:
    if size <= 0:
        raise ValidationError("Audio file is empty")

async def read_and_check_size(upload: UploadFile, max_bytes: int, chunk_size: int) -> bytes:
    buf = bytearray()
    while True:
        chunk = await upload.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise too_large(max_bytes)
    ensure_not_empty(len(buf))
    return bytes(buf)
