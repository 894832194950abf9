from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel

from infinitune.core.config import settings
from infinitune.core.errors import UnknownLocaleError
from infinitune.models.query import SongsQuery
from infinitune.models.song import Song, SongPage
from infinitune.services.identity import LOCALES, identity_for_locale
from infinitune.services.songs import generate, generate_song

VERSION = "1.0.0"

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("Infinitune")


class HealthResponse(BaseModel):
    ok: bool
    service: str
    version: str
    env: str
    timestamp: str


class LocaleInfo(BaseModel):
    code: str
    label: str


app = FastAPI(title="Infinitune API", version=VERSION, default_response_class=ORJSONResponse)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET"],
    allow_headers=["*"],
)


def _provider(locale: str):
    try:
        return identity_for_locale(locale)
    except UnknownLocaleError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@app.get("/api/health", response_model=HealthResponse)
def health():
    return HealthResponse(
        ok=True,
        service="infinitune",
        version=VERSION,
        env=settings.env,
        timestamp=datetime.now().isoformat(),
    )


@app.get("/api/locales", response_model=list[LocaleInfo])
def locales():
    return [LocaleInfo(code=code, label=spec.label) for code, spec in LOCALES.items()]


@app.get("/api/songs", response_model=SongPage)
def songs(
    seed: Optional[str] = None,
    page: Optional[str] = None,
    locale: Optional[str] = None,
    likes: Optional[str] = None,
    limit: Optional[str] = None,
):
    """
    One catalog page. Parameters are lenient: blank or unparsable values
    fall back to defaults (limit=0 included) and limit is clamped to
    [1, MAX_LIMIT].
    """
    q = SongsQuery(seed=seed, page=page, locale=locale, likes=likes, limit=limit)
    provider = _provider(q.locale)

    start = time.time()
    result = generate(q.seed, q.locale, q.page, q.limit, q.likes, identity=provider)
    logger.info(
        f"🎵 Songs | seed={q.seed} | locale={q.locale} | page={q.page} | "
        f"limit={q.limit} | likes={q.likes} | {time.time() - start:.3f}s"
    )
    return result


@app.get("/api/songs/{index}", response_model=Song)
def song(
    index: int,
    seed: Optional[str] = None,
    locale: Optional[str] = None,
    likes: Optional[str] = None,
):
    """
    A single record by absolute (1-based) index; identical to the same index
    inside any page.
    """
    if index < 1:
        raise HTTPException(status_code=422, detail="index must be >= 1")
    q = SongsQuery(seed=seed, locale=locale, likes=likes)
    return generate_song(q.seed, q.locale, index, q.likes, _provider(q.locale))


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
