from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import BinaryIO, Optional, Tuple, Union


@dataclass
class AudioPayload:
    """
    One uploaded audio file, owned by the request that produced it.

    Exactly one of ``data`` (in-memory buffer) or ``path`` (temp file) is set.
    """
    size: int
    mime: str
    filename: str
    data: Optional[bytes] = None
    path: Optional[str] = None

    @property
    def on_disk(self) -> bool:
        return self.path is not None

    def as_upload(self, fh: Optional[BinaryIO] = None) -> Tuple[str, Union[bytes, BinaryIO], str]:
        # (filename, content, mime) tuple accepted by the OpenAI SDK
        content = fh if fh is not None else self.data
        if content is None:
            raise ValueError("disk-backed payload needs an open file handle")
        return (self.filename, content, self.mime)

    def discard(self) -> None:
        """Delete the backing temp file, if any. Never raises."""
        if not self.path:
            return
        path, self.path = self.path, None
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logging.error("Error deleting temp file %s: %s", path, e)


@dataclass(frozen=True)
class TranscriptionResult:
    text: str
    language: Optional[str] = None
