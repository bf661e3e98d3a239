import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from .config import settings
from .security.cors import OriginFilter
from .feature_modules.transcribe.config import TranscribeConfig
from .feature_modules.transcribe.routes import router as transcribe_router
from .pages.routes import router as pages_router

logging.basicConfig(level=settings.log_level.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Missing credential is reported per request as well; never fatal
    TranscribeConfig.ensure_env()
    if not TranscribeConfig.openai_api_key():
        logging.error("OPENAI_API_KEY is not set in environment variables")
    yield


app = FastAPI(lifespan=lifespan)

# Single CORS mechanism for /api/*
app.middleware("http")(
    OriginFilter(
        allowed=settings.allowed_origins(),
        methods=settings.cors_allow_methods,
        path_prefix=settings.cors_path_prefix,
    )
)

app.include_router(pages_router)
app.include_router(transcribe_router)


@app.get("/healthz")
async def healthz():
    return {"ok": True}


def run() -> None:
    uvicorn.run(app, host=settings.app_host, port=settings.app_port)
