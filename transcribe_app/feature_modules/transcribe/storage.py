"""
Materialize an uploaded file as an AudioPayload.

memory: the bytes are kept in a buffer.
disk:   the bytes are streamed to <tmp_dir>/<uuid>.<ext>; the caller owns the
        file and must call ``AudioPayload.discard()`` on every exit path.
"""
from __future__ import annotations
import logging
import mimetypes
import os
import uuid

from starlette.datastructures import UploadFile

from .config import TranscribeConfig as Cfg
from .models import AudioPayload
from .validators import ensure_declared_size, ensure_not_empty, read_and_check_size, too_large

def _ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)

def _mime_of(upload: UploadFile) -> str:
    return (upload.content_type or "").split(";")[0].strip().lower() or Cfg.DEFAULT_MIME

def _ext_for(filename: str, mime: str) -> str:
    ext = os.path.splitext(filename)[1]
    if ext:
        return ext.lower()
    return mimetypes.guess_extension(mime) or ".webm"

def _filename_of(upload: UploadFile) -> str:
    name = os.path.basename((upload.filename or "").strip())
    return name or Cfg.DEFAULT_FILENAME

async def buffer_upload(upload: UploadFile, max_bytes: int) -> AudioPayload:
    ensure_declared_size(upload, max_bytes)
    data = await read_and_check_size(upload, max_bytes, Cfg.CHUNK_SIZE)
    return AudioPayload(
        size=len(data),
        mime=_mime_of(upload),
        filename=_filename_of(upload),
        data=data,
    )

async def spool_upload_to_disk(upload: UploadFile, max_bytes: int, tmp_dir: str) -> AudioPayload:
    ensure_declared_size(upload, max_bytes)
    _ensure_dir(tmp_dir)

    mime = _mime_of(upload)
    filename = _filename_of(upload)
    save_path = os.path.join(tmp_dir, f"{uuid.uuid4().hex}{_ext_for(filename, mime)}")
    payload = AudioPayload(size=0, mime=mime, filename=filename, path=save_path)

    # Stream to disk with size guard
    try:
        with open(save_path, "wb") as out:
            while True:
                chunk = await upload.read(Cfg.CHUNK_SIZE)
                if not chunk:
                    break
                payload.size += len(chunk)
                if payload.size > max_bytes:
                    raise too_large(max_bytes)
                out.write(chunk)
        ensure_not_empty(payload.size)
    except BaseException:
        payload.discard()
        raise

    logging.info("Temp file written: %s (%d bytes)", save_path, payload.size)
    return payload

async def materialize(upload: UploadFile) -> AudioPayload:
    max_bytes = Cfg.max_bytes()
    if Cfg.storage() == "disk":
        payload = await spool_upload_to_disk(upload, max_bytes, Cfg.tmp_dir())
    else:
        payload = await buffer_upload(upload, max_bytes)
    logging.info(
        "Processing file: size=%d type=%s name=%s",
        payload.size, payload.mime, payload.filename,
    )
    return payload
