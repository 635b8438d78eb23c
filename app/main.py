import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from app.shared.db import Base, engine
from app.shared.logs import setup_logging

# import models so they register with Base.metadata
from app.memos import models as memos_models  # noqa: F401

# Routers Import
from app.memos.api import router as memos_router, legacy_router, get_summarizer

setup_logging()
logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Memos", "description": "Create, list, search, edit, delete and summarize memos"},
    {"name": "Legacy", "description": "Deprecated endpoints kept for old clients"},
    {"name": "Health", "description": "Service health"},
]

app = FastAPI(
    title="Memos",
    version="0.1.0",
    description="Personal memos with AI-generated summaries.",
    openapi_tags=TAGS_METADATA,
)

# ---- DEV-ONLY error handler (helps you see real errors in Swagger) ----
if os.getenv("ENV", "dev") == "dev":
    @app.exception_handler(Exception)
    async def _dev_ex_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s", request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

# ----------------------------------------------------------------------


@app.on_event("startup")
def _init_db():
    Base.metadata.create_all(bind=engine)

@app.on_event("startup")
def _check_summarizer():
    get_summarizer().check_config()

@app.get("/healthz", tags=["Health"])
def healthz():
    return {"ok": True}

# Routers
app.include_router(memos_router)
app.include_router(legacy_router)
