# infinitune/models/song.py
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Instrument(str, Enum):
    """Melody voice tag consumed by the audio renderer."""

    SYNTH = "synth"
    METAL = "metal"


class NoteEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    note: str  # pitch name with octave, e.g. "C4"
    duration: str  # transport notation, e.g. "8n", "1m"
    time: Union[str, float]  # "bar:quarter:sixteenth"
    velocity: float = Field(ge=0.0, le=1.0)


class SongScore(BaseModel):
    model_config = ConfigDict(frozen=True)

    bpm: int = Field(ge=80, le=140)
    instrument: Instrument
    melody: list[NoteEvent] = Field(default_factory=list)
    bass: list[NoteEvent] = Field(default_factory=list)


class Song(BaseModel):
    """
    One catalog entry. `id` is the per-item seed string, so any consumer can
    regenerate the record from it.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    index: int = Field(ge=1)

    title: str
    artist: str
    album: str
    genre: str
    review: Optional[str] = None

    cover: str  # data:image/svg+xml;base64,...
    likes: int = Field(ge=0)

    score: SongScore


class SongPage(BaseModel):
    model_config = ConfigDict(frozen=True)

    seed: str
    locale: str
    page: int
    limit: int
    songs: list[Song]
