# infinitune/services/songs.py
"""
Song assembly.

One SeededStream per item, consumed in a fixed order:

  1. identity reseed draw, then title / artist / genre / album / review
  2. likes (one float)
  3. cover
  4. score

The order is part of the output format: moving a step changes every field
after it for every previously generated seed.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from infinitune.models.query import SongsQuery
from infinitune.models.song import Song, SongPage
from infinitune.services.composer import compose_score
from infinitune.services.cover import generate_cover
from infinitune.services.identity import IdentityProvider, identity_for_locale
from infinitune.services.randomizer import SeededStream

logger = logging.getLogger(__name__)


def song_seed(seed: str, locale: str, absolute_index: int) -> str:
    return f"{seed}_{locale}_{absolute_index}"


def compute_likes(stream: SeededStream, avg_likes: float) -> int:
    """
    Integer likes whose expectation is avg_likes: the fractional part becomes
    the chance of one extra like. One draw per item, used even when
    avg_likes is whole.
    """
    base = math.floor(avg_likes)
    fractional_chance = avg_likes - base
    extra = 1 if stream.next_float() < fractional_chance else 0
    return int(base) + extra


def generate_song(
    seed: str,
    locale: str,
    absolute_index: int,
    avg_likes: float,
    identity: IdentityProvider,
    target_duration_sec: Optional[float] = None,
) -> Song:
    item_seed = song_seed(seed, locale, absolute_index)
    stream = SeededStream(item_seed)

    identity.reseed(stream.reseed_value())
    title = identity.song_title()
    artist = identity.artist_name()
    genre = identity.genre()
    album = identity.album_name()
    review = identity.review()

    likes = compute_likes(stream, avg_likes)
    cover = generate_cover(stream, title, artist)
    score = compose_score(stream, target_duration_sec)

    return Song(
        id=item_seed,
        index=absolute_index,
        title=title,
        artist=artist,
        album=album,
        genre=genre,
        review=review,
        cover=cover,
        likes=likes,
        score=score,
    )


def page_start_index(page: int, limit: int) -> int:
    """Absolute (1-based) index of the first item on a page."""
    return (page - 1) * limit + 1


def generate_song_batch(
    seed: str,
    locale: str,
    page: int,
    limit: int,
    avg_likes: float,
    identity: IdentityProvider,
    target_duration_sec: Optional[float] = None,
) -> list[Song]:
    start = page_start_index(page, limit)
    logger.debug("Generating songs %d..%d for seed=%r locale=%r", start, start + limit - 1, seed, locale)
    return [
        generate_song(seed, locale, start + i, avg_likes, identity, target_duration_sec)
        for i in range(limit)
    ]


def generate(
    seed: Optional[str] = None,
    locale: Optional[str] = None,
    page: int = 1,
    limit: Optional[int] = None,
    avg_likes: float = 0.0,
    identity: Optional[IdentityProvider] = None,
) -> SongPage:
    """
    Catalog page entry point. Parameters pass through SongsQuery, so missing
    or out-of-range values are defaulted and clamped the same way the API
    does it.
    """
    raw = {"seed": seed, "locale": locale, "page": page, "likes": avg_likes}
    if limit is not None:
        raw["limit"] = limit
    q = SongsQuery(**raw)

    provider = identity if identity is not None else identity_for_locale(q.locale)
    songs = generate_song_batch(q.seed, q.locale, q.page, q.limit, q.likes, provider)
    return SongPage(seed=q.seed, locale=q.locale, page=q.page, limit=q.limit, songs=songs)
