import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# Optional overrides shipped next to this module
FEATURE_ENV = Path(__file__).resolve().with_name(".env.transcribe")

def _as_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except Exception:
        return default

def _as_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except Exception:
        return default

def _as_bool(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"

class TranscribeConfig:
    # Static defaults
    DEFAULT_MIME: str = "audio/webm"
    DEFAULT_FILENAME: str = "audio.webm"
    CHUNK_SIZE: int = 1024 * 1024  # 1MB chunks

    @staticmethod
    def ensure_env() -> list[str]:
        """
        Fill in a missing OPENAI_API_KEY from .env files without overriding
        the process env: the feature file first, then the nearest .env found
        from the working directory upwards. Disabled by TRANSCRIBE_LOAD_DOTENV=false.
        """
        if os.getenv("OPENAI_API_KEY"):
            return []
        if not _as_bool("TRANSCRIBE_LOAD_DOTENV", True):
            return []
        candidates = [str(FEATURE_ENV)] if FEATURE_ENV.is_file() else []
        project_env = find_dotenv(usecwd=True)
        if project_env:
            candidates.append(project_env)
        loaded = [p for p in candidates if load_dotenv(dotenv_path=p, override=False)]
        if loaded:
            logging.info("transcribe config loaded env files: %s", loaded)
        return loaded

    # -------- dynamic getters --------
    @staticmethod
    def field_name() -> str:
        return os.getenv("TRANSCRIBE_FIELD_NAME", "audio").strip() or "audio"

    @staticmethod
    def max_bytes() -> int:
        return _as_int("TRANSCRIBE_MAX_BYTES", 10 * 1024 * 1024)  # 10 MB

    @staticmethod
    def storage() -> str:
        """'memory' keeps the upload in a buffer, 'disk' spools it to a temp file."""
        raw = os.getenv("TRANSCRIBE_STORAGE", "memory").strip().lower()
        return raw if raw in ("memory", "disk") else "memory"

    @staticmethod
    def tmp_dir() -> str:
        return os.getenv("TRANSCRIBE_TMP_DIR") or os.path.join(os.getcwd(), "tmp")

    @staticmethod
    def debug_errors() -> bool:
        return _as_bool("TRANSCRIBE_DEBUG_ERRORS", False)

    # OpenAI
    @staticmethod
    def openai_api_key() -> str | None:
        return os.getenv("OPENAI_API_KEY") or None

    @staticmethod
    def openai_api_base() -> str:
        return os.getenv("OPENAI_API_BASE", "https://api.openai.com")

    @staticmethod
    def model() -> str:
        return os.getenv("TRANSCRIBE_MODEL", "whisper-1")

    @staticmethod
    def response_format() -> str:
        raw = os.getenv("TRANSCRIBE_RESPONSE_FORMAT", "json").strip().lower()
        return raw if raw in ("json", "verbose_json") else "json"

    @staticmethod
    def language() -> str:
        return os.getenv("TRANSCRIBE_LANGUAGE", "en")

    @staticmethod
    def timeout_s() -> float:
        return _as_float("TRANSCRIBE_TIMEOUT_S", 120.0)
