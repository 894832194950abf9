# infinitune/services/composer.py
"""
Infinitune Composer

Turns draws from a SeededStream into a short SongScore:
- random key (root + major/minor)
- diatonic seventh chords for that key
- progression sized to a target duration, tonic first, dominant last
- one bass hit per bar, a sparse chord-tone melody on top
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Sequence, Tuple

from infinitune.core.config import settings
from infinitune.models.song import Instrument, NoteEvent, SongScore
from infinitune.services.randomizer import SeededStream

logger = logging.getLogger(__name__)

# =============================================================================
# MUSICAL CONSTANTS
# =============================================================================

ROOTS: Tuple[str, ...] = ("C", "C#", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B")

Mode = Literal["major", "minor"]

SCALES: Dict[str, List[int]] = {
    "major": [0, 2, 4, 5, 7, 9, 11],
    "minor": [0, 2, 3, 5, 7, 8, 10],  # natural minor
}

# (third, fifth, seventh) above the chord root -> chord suffix
SEVENTH_QUALITIES: Dict[Tuple[int, int, int], str] = {
    (4, 7, 11): "maj7",
    (4, 7, 10): "7",
    (3, 7, 10): "m7",
    (3, 6, 10): "m7b5",
    (3, 6, 9): "dim7",
    (3, 7, 11): "mMaj7",
    (4, 8, 11): "maj7#5",
}

MINOR_PROBABILITY = 0.3
BPM_RANGE = (80, 140)
BEATS_PER_BAR = 4
MIN_BARS = 2

TONIC = 1
DOMINANT = 5
POP_DEGREES: Tuple[int, ...] = (1, 3, 4, 5, 6)

BASS_OCTAVE = 2
BASS_DURATION = "1m"
MELODY_OCTAVES = (4, 5)
MELODY_NOTES_PER_BAR = (4, 7)  # inclusive
REST_PROBABILITY = 0.1
SIXTEENTH_OFFSETS: Tuple[int, ...] = (0, 2)
MELODY_DURATIONS: Tuple[str, ...] = ("8n", "4n", "8n", "16n")

INSTRUMENTS: Tuple[Instrument, ...] = tuple(Instrument)


# =============================================================================
# HARMONY
# =============================================================================

@dataclass(frozen=True)
class Chord:
    degree: int  # 1-based scale degree
    symbol: str  # e.g. "Cmaj7"
    notes: Tuple[str, ...]  # pitch names without octave, root first

    @property
    def root(self) -> Optional[str]:
        return self.notes[0] if self.notes else None


@dataclass(frozen=True)
class Key:
    root: str
    mode: Mode

    def chords(self) -> List[Chord]:
        return diatonic_chords(self.root, self.mode)


def _pc_name(pc: int) -> str:
    return ROOTS[pc % 12]


def diatonic_chords(root: str, mode: Mode) -> List[Chord]:
    """
    Seventh chords built by stacking scale thirds on each degree.
    Major gives maj7 m7 m7 maj7 7 m7 m7b5; natural minor gives
    m7 m7b5 maj7 m7 m7 maj7 7.
    """
    base = ROOTS.index(root)
    scale = [(base + i) % 12 for i in SCALES[mode]]
    n = len(scale)

    chords: List[Chord] = []
    for i in range(n):
        pcs = [scale[(i + step) % n] for step in (0, 2, 4, 6)]
        intervals = tuple((pc - pcs[0]) % 12 for pc in pcs[1:])
        suffix = SEVENTH_QUALITIES.get(intervals, "")
        names = tuple(_pc_name(pc) for pc in pcs)
        chords.append(Chord(degree=i + 1, symbol=names[0] + suffix, notes=names))
    return chords


def pick_key(stream: SeededStream) -> Key:
    root = stream.pick(ROOTS)
    mode: Mode = "major" if stream.next_float() > MINOR_PROBABILITY else "minor"
    return Key(root=root, mode=mode)


def bar_count(bpm: int, target_duration_sec: float) -> int:
    seconds_per_bar = BEATS_PER_BAR * 60.0 / bpm
    return max(MIN_BARS, math.ceil(target_duration_sec / seconds_per_bar))


def build_progression(stream: SeededStream, bars: int) -> List[int]:
    """Scale degrees per bar: tonic opens, dominant closes, pop degrees between."""
    if bars < MIN_BARS:
        raise ValueError(f"progression needs at least {MIN_BARS} bars, got {bars}")
    interior = [stream.pick(POP_DEGREES) for _ in range(bars - 2)]
    return [TONIC, *interior, DOMINANT]


# =============================================================================
# EVENTS
# =============================================================================

def _bass_event(stream: SeededStream, chord: Chord, bar: int) -> NoteEvent:
    return NoteEvent(
        note=f"{chord.root}{BASS_OCTAVE}",
        duration=BASS_DURATION,
        time=f"{bar}:0:0",
        velocity=0.7 + stream.next_float() * 0.3,
    )


def _melody_events(stream: SeededStream, chord: Chord, bar: int) -> List[NoteEvent]:
    events: List[NoteEvent] = []
    count = stream.next_int(*MELODY_NOTES_PER_BAR)
    for _ in range(count):
        if stream.next_float() < REST_PROBABILITY:
            continue

        name = stream.pick(chord.notes)
        octave = stream.next_int(*MELODY_OCTAVES)
        quarter = stream.next_int(0, BEATS_PER_BAR - 1)
        sixteenth = stream.pick(SIXTEENTH_OFFSETS)
        duration = stream.pick(MELODY_DURATIONS)

        events.append(
            NoteEvent(
                note=f"{name}{octave}",
                duration=duration,
                time=f"{bar}:{quarter}:{sixteenth}",
                velocity=0.4 + stream.next_float() * 0.4,
            )
        )
    return events


def render_bars(
    stream: SeededStream, bar_chords: Sequence[Chord]
) -> Tuple[List[NoteEvent], List[NoteEvent]]:
    """
    Returns (melody, bass) for a chord per bar.
    A chord without notes leaves its bar silent and draws nothing.
    """
    melody: List[NoteEvent] = []
    bass: List[NoteEvent] = []

    for bar, chord in enumerate(bar_chords):
        if not chord.notes:
            logger.debug("Bar %d: chord %r has no notes, leaving it silent", bar, chord.symbol)
            continue
        bass.append(_bass_event(stream, chord, bar))
        melody.extend(_melody_events(stream, chord, bar))

    return melody, bass


def compose_score(stream: SeededStream, target_duration_sec: Optional[float] = None) -> SongScore:
    """
    Draw order: key, bpm, progression, per-bar events, instrument.
    Changing it changes every score generated from an existing seed.
    """
    target = settings.target_duration_sec if target_duration_sec is None else float(target_duration_sec)
    if target <= 0:
        raise ValueError(f"target duration must be positive, got {target}")

    key = pick_key(stream)
    chords = key.chords()

    bpm = stream.next_int(*BPM_RANGE)
    bars = bar_count(bpm, target)

    progression = build_progression(stream, bars)
    bar_chords = [chords[degree - 1] for degree in progression]

    melody, bass = render_bars(stream, bar_chords)
    instrument = stream.pick(INSTRUMENTS)

    logger.debug(
        "Composed %s %s | bpm=%d | bars=%d | melody=%d | bass=%d",
        key.root, key.mode, bpm, bars, len(melody), len(bass),
    )

    return SongScore(bpm=bpm, instrument=instrument, melody=melody, bass=bass)
