from html import escape
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from transcribe_app.feature_modules.transcribe.config import TranscribeConfig

router = APIRouter(tags=["pages"])

STATIC_DIR = Path(__file__).resolve().parent / "static"

def render_upload_page(field_name: str) -> str:
    html = (STATIC_DIR / "index.html").read_text(encoding="utf-8")
    return html.replace("{{ field_name }}", escape(field_name, quote=True))

@router.get("/", response_class=HTMLResponse)
async def upload_page():
    return HTMLResponse(render_upload_page(TranscribeConfig.field_name()))
