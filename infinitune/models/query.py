# infinitune/models/query.py
from __future__ import annotations

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from infinitune.core.config import settings

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _finite(x: float) -> Optional[float]:
    return None if math.isnan(x) else x


def leading_int(v: Any) -> Optional[int]:
    """Integer prefix of v ("2.5" -> 2, "7th" -> 7), or None."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return int(v) if math.isfinite(v) else None
    m = _LEADING_INT.match(str(v))
    return int(m.group(1)) if m else None


def leading_float(v: Any) -> Optional[float]:
    """Float prefix of v ("1.5x" -> 1.5), or None."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return _finite(float(v))
    m = _LEADING_FLOAT.match(str(v))
    return float(m.group(1)) if m else None


def whole_number(v: Any) -> Optional[float]:
    """The whole value as a number; blank counts as 0, anything else unparsable is None."""
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return _finite(float(v))
    text = str(v).strip()
    if not text:
        return 0.0
    try:
        return _finite(float(text))
    except ValueError:
        return None


class SongsQuery(BaseModel):
    """
    Catalog page request.

    Lenient on input, strict on the result: a built query is always in range.
      page   integer prefix; missing, 0 or below -> 1
      limit  whole value; missing, 0 or unparsable -> default, then [1, max]
      likes  float prefix; missing, negative or non-finite -> 0
    """

    seed: str = Field(default_factory=lambda: settings.default_seed, min_length=1)
    locale: str = Field(default_factory=lambda: settings.default_locale, min_length=1)
    page: int = Field(default=1, ge=1)
    limit: int = Field(default_factory=lambda: settings.default_limit, ge=1)
    likes: float = Field(default=0.0, ge=0.0)

    @field_validator("seed", "locale", mode="before")
    @classmethod
    def blank_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return settings.default_seed if info.field_name == "seed" else settings.default_locale
        return v

    @field_validator("page", mode="before")
    @classmethod
    def page_or_first(cls, v: Any) -> Any:
        n = leading_int(v)
        return n if n is not None and n >= 1 else 1

    @field_validator("limit", mode="before")
    @classmethod
    def clamp_limit(cls, v: Any) -> Any:
        n = whole_number(v)
        if not n:
            n = settings.default_limit
        return int(max(1, min(settings.max_limit, n)))

    @field_validator("likes", mode="before")
    @classmethod
    def likes_or_zero(cls, v: Any) -> Any:
        x = leading_float(v)
        if x is None or not math.isfinite(x) or x < 0:
            return 0.0
        return x
