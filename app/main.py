"""
FastAPI application entry point.

Wires up the keyword registry and exposes ``POST /filter``,
``POST /filter-file`` and the keyword management endpoints.
"""

from __future__ import annotations

import io
import logging
import os
import re
import tempfile
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from app.config import ALLOWED_EXTENSIONS, KEYWORD_FILE, LOG_LEVEL
from app.errors import KeywordLoadError, UnsupportedDocumentError
from app.logging_setup import setup_logging
from app.schemas import (
    FilterRequest,
    FilterResponse,
    HealthResponse,
    KeywordsRequest,
    KeywordsResponse,
)
from app.services import document_loader
from app.services.filter_registry import FilterRegistry
from app.services.keyword_loader import iter_keywords

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the keyword list at startup so the first request is fast."""
    setup_logging(LOG_LEVEL)
    app.state.registry.current()
    yield


app = FastAPI(
    title="Sensitive Word Filter",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.registry = FilterRegistry(KEYWORD_FILE)

# -- CORS (allow all origins for local / dev usage) -------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_registry(request: Request) -> FilterRegistry:
    return request.app.state.registry


# -- Shared pipeline ---------------------------------------------------------

DEFAULT_DOWNLOAD_NAME = "filtered_output.txt"

# Characters that would break out of the quoted Content-Disposition value or
# cannot be carried in a latin-1 header.
_UNSAFE_FILENAME_CHARS = re.compile(r'[^\x20-\x7e]|["\\]')


def _json_safe(text: str) -> str:
    # Lone surrogates (undecodable upload bytes) cannot be serialised as JSON.
    return text.encode("utf-8", errors="replace").decode("utf-8")


def _safe_filename(filename: str) -> str:
    name = os.path.basename(filename.replace("\\", "/"))
    name = _UNSAFE_FILENAME_CHARS.sub("_", name).strip()
    return name or DEFAULT_DOWNLOAD_NAME


def _run_filter(text: str, registry: FilterRegistry) -> FilterResponse:
    outcome = registry.current().scan(text)
    logger.debug("Filtered %d chars, %d hits", len(text), outcome.hits)
    return FilterResponse(
        filtered_text=_json_safe(outcome.text),
        hits=outcome.hits,
        changed=outcome.text != text,
    )


# -- Routes ------------------------------------------------------------------

@app.get("/health", response_model=HealthResponse)
async def health(registry: FilterRegistry = Depends(get_registry)):
    """Report the active keyword count; ``degraded`` while filtering is disabled."""
    active = registry.current()
    if registry.degraded:
        logger.warning("Serving without keywords: %s", registry.load_error)
        return HealthResponse(status="degraded", keywords=0, load_error=registry.load_error)
    return HealthResponse(status="ok", keywords=len(active.automaton))


@app.post("/filter", response_model=FilterResponse)
async def filter_text(
    payload: FilterRequest,
    registry: FilterRegistry = Depends(get_registry),
):
    """Mask every sensitive word in the submitted text."""
    return _run_filter(payload.text, registry)


@app.post("/filter-file", response_model=FilterResponse)
async def filter_file(
    file: UploadFile = File(...),
    registry: FilterRegistry = Depends(get_registry),
):
    """
    Extract the text of an uploaded document and filter it.

    Bytes that are not valid UTF-8 are kept by the filter but rendered as
    ``?`` in the JSON response.
    """
    filename = file.filename or ""
    ext = os.path.splitext(filename)[1].lower()

    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: '{ext}'. Allowed: {', '.join(sorted(ALLOWED_EXTENSIONS))}",
        )

    tmp_path = None
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=ext) as tmp:
            content = await file.read()
            tmp.write(content)
            tmp_path = tmp.name

        # PDF parsing and OCR block; keep them off the event loop.
        try:
            text = await run_in_threadpool(document_loader.extract_text, tmp_path)
        except UnsupportedDocumentError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        return _run_filter(text, registry)
    finally:
        if tmp_path and os.path.exists(tmp_path):
            os.unlink(tmp_path)


@app.post("/download-filtered")
async def download_filtered(
    text: str = Form(...),
    filename: str = Form(DEFAULT_DOWNLOAD_NAME),
    registry: FilterRegistry = Depends(get_registry),
):
    """Filter the submitted text and return it as a downloadable file."""
    filename = _safe_filename(filename)
    ext = os.path.splitext(filename)[1].lower()
    media_type = "text/csv" if ext == ".csv" else "text/plain"

    filtered = registry.current().filter(text)
    buf = io.BytesIO(filtered.encode("utf-8", errors="replace"))
    return StreamingResponse(
        buf,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/keywords/reload", response_model=KeywordsResponse)
async def reload_keywords(registry: FilterRegistry = Depends(get_registry)):
    """Re-read the keyword file; the old keyword set stays active on failure."""
    try:
        active = registry.reload()
    except KeywordLoadError as exc:
        logger.error("Keyword reload failed: %s", exc)
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return KeywordsResponse(keywords=len(active.automaton))


@app.put("/keywords", response_model=KeywordsResponse)
async def replace_keywords(
    payload: KeywordsRequest,
    registry: FilterRegistry = Depends(get_registry),
):
    """Swap in an in-memory keyword set."""
    active = registry.replace(iter_keywords(payload.keywords))
    return KeywordsResponse(keywords=len(active.automaton))
