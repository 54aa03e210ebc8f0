"""
NFL Stoppage Inference Core

Pure functions that decide whether a game is currently stopped from its
play-by-play feed. No I/O or HTTP dependencies - the caller hands over the
already-decoded RapidAPI payload and gets a JSON-ready dict back.
"""

import functools
import math
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional


IMPLICIT_STOPPAGE_THRESHOLD_SECONDS = 60
# The plays endpoint has shipped the list under both names.
PLAY_LIST_FIELDS = ('items', 'plays')
DURATION_PLACEHOLDER = "—"

CONFIDENCE_LOW = "low"
CONFIDENCE_MEDIUM = "medium"
CONFIDENCE_HIGH = "high"

EXPLICIT_STOPPAGE_REASON = "Stoppage"
UNKNOWN_GAME_STATUS = "unknown"

_STOPPAGE_PHRASES = ('timeout', 'review', 'two-minute warning')
_PERIOD_WORDS = ('quarter', 'half', 'game')

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
# fromisoformat before 3.11 only takes 3 or 6 fractional digits
_FRACTION_RE = re.compile(r"([T ]\d{2}:\d{2}:\d{2})\.(\d+)")


def _as_dict(value):
    return value if isinstance(value, dict) else {}


def _first_text(*values):
    for value in values:
        if isinstance(value, str) and value:
            return value
    return ''


def parse_sequence_number(value):
    """Numeric order key, or None. Numeric strings count ("123" -> 123.0)."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def parse_wallclock(value):
    """
    Parse an ESPN-style wallclock ("2018-12-13T01:25:37Z") into an aware UTC
    datetime. Anything missing or unparsable returns None; naive values are
    taken as UTC.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith('Z') or text.endswith('z'):
        text = text[:-1] + '+00:00'
    text = _FRACTION_RE.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", text)
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return None


@dataclass(frozen=True)
class Play:
    sequence_number: Optional[float]
    wallclock: Optional[datetime]
    period_number: Optional[int]
    clock_display: str
    type_text: str
    short_text: str
    raw: Any = None

    @classmethod
    def from_raw(cls, raw):
        data = _as_dict(raw)
        play_type = _as_dict(data.get('type'))

        period_number = _as_dict(data.get('period')).get('number')
        if isinstance(period_number, bool) or not isinstance(period_number, int):
            period_number = None

        clock_display = _as_dict(data.get('clock')).get('displayValue')
        if not isinstance(clock_display, str):
            clock_display = ''

        return cls(
            sequence_number=parse_sequence_number(data.get('sequenceNumber')),
            wallclock=parse_wallclock(data.get('wallclock')),
            period_number=period_number,
            clock_display=clock_display,
            type_text=_first_text(play_type.get('text'), play_type.get('alternativeText')),
            short_text=_first_text(data.get('shortText'), data.get('shortAlternativeText')),
            raw=raw,
        )

    @property
    def game_status(self):
        period = '?' if self.period_number is None else self.period_number
        return f"Q{period} {self.clock_display}".strip()

    @property
    def summary(self):
        return self.short_text or self.type_text or ''


@dataclass(frozen=True)
class StoppageVerdict:
    is_stoppage: bool
    confidence: str
    stoppage_reason: Optional[str]
    stoppage_duration_seconds: Optional[int]
    game_status: str
    last_play_summary: str


NO_PLAYS_VERDICT = StoppageVerdict(
    is_stoppage=False,
    confidence=CONFIDENCE_LOW,
    stoppage_reason=None,
    stoppage_duration_seconds=None,
    game_status=UNKNOWN_GAME_STATUS,
    last_play_summary='',
)


def _compare_plays(a, b):
    # Pairwise rule: sequence numbers decide only when both plays carry one.
    # Mixing sequenced and unsequenced plays is not transitive, so the pick
    # can then depend on input order; sorted() still returns deterministically.
    if (a.sequence_number is not None and b.sequence_number is not None
            and a.sequence_number != b.sequence_number):
        return -1 if a.sequence_number < b.sequence_number else 1

    ta = a.wallclock or _EPOCH
    tb = b.wallclock or _EPOCH
    if ta == tb:
        return 0
    return -1 if ta < tb else 1


def order_plays(plays):
    """Chronological order (stable) over raw plays, returned as Play objects."""
    normalized = [Play.from_raw(raw) for raw in plays or []]
    return sorted(normalized, key=functools.cmp_to_key(_compare_plays))


def latest_play(plays):
    """The chronologically latest play, or None when there are no plays."""
    ordered = order_plays(plays)
    return ordered[-1] if ordered else None


def _field_signals_stoppage(text):
    lower = (text or '').lower()
    if any(phrase in lower for phrase in _STOPPAGE_PHRASES):
        return True
    # "End of 3rd Quarter", "End Game", "End of Half"
    return 'end' in lower and any(word in lower for word in _PERIOD_WORDS)


def is_explicit_stoppage(type_text='', short_text=''):
    """True when either text field names a known stoppage."""
    return _field_signals_stoppage(type_text) or _field_signals_stoppage(short_text)


def seconds_since(wallclock, now):
    """Whole seconds elapsed since `wallclock`; 0 for plays stamped in the future."""
    if wallclock is None:
        return None
    return max(0, math.floor((now - wallclock).total_seconds()))


def implicit_stoppage_reason(threshold_seconds=IMPLICIT_STOPPAGE_THRESHOLD_SECONDS):
    return f"Possible stoppage (no events > {threshold_seconds}s)"


def infer_stoppage(plays, now=None, threshold_seconds=IMPLICIT_STOPPAGE_THRESHOLD_SECONDS):
    """
    Decide whether the game is stopped based on its latest play.

    Explicit text signals (timeout, review, two-minute warning, end of a
    period) win with high confidence. Without one, a silence longer than
    `threshold_seconds` since the latest play's wallclock is reported as a
    possible stoppage with medium confidence.
    """
    return verdict_for_play(latest_play(plays), now=now, threshold_seconds=threshold_seconds)


def verdict_for_play(last, now=None, threshold_seconds=IMPLICIT_STOPPAGE_THRESHOLD_SECONDS):
    if last is None:
        return NO_PLAYS_VERDICT

    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    elapsed = seconds_since(last.wallclock, now)

    if is_explicit_stoppage(last.type_text, last.short_text):
        return StoppageVerdict(
            is_stoppage=True,
            confidence=CONFIDENCE_HIGH,
            stoppage_reason=last.type_text or EXPLICIT_STOPPAGE_REASON,
            stoppage_duration_seconds=elapsed,
            game_status=last.game_status,
            last_play_summary=last.summary,
        )

    if elapsed is not None and elapsed > threshold_seconds:
        return StoppageVerdict(
            is_stoppage=True,
            confidence=CONFIDENCE_MEDIUM,
            stoppage_reason=implicit_stoppage_reason(threshold_seconds),
            stoppage_duration_seconds=elapsed,
            game_status=last.game_status,
            last_play_summary=last.summary,
        )

    return StoppageVerdict(
        is_stoppage=False,
        confidence=CONFIDENCE_MEDIUM,
        stoppage_reason=None,
        stoppage_duration_seconds=None,
        game_status=last.game_status,
        last_play_summary=last.summary,
    )


def format_duration(seconds):
    """Render a duration as "2m 5s" / "45s", or the placeholder when unknown."""
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        return DURATION_PLACEHOLDER
    if not math.isfinite(seconds):
        return DURATION_PLACEHOLDER
    total = max(0, math.floor(seconds))
    minutes, remainder = divmod(total, 60)
    return f"{minutes}m {remainder}s" if minutes > 0 else f"{remainder}s"


def extract_plays(raw_payload):
    """Pull the play list out of the payload, trying PLAY_LIST_FIELDS in order."""
    if not isinstance(raw_payload, dict):
        return []
    for field in PLAY_LIST_FIELDS:
        value = raw_payload.get(field)
        if value is not None:
            return value if isinstance(value, list) else []
    return []


def to_unified_response(game_id, raw_payload, now=None,
                        threshold_seconds=IMPLICIT_STOPPAGE_THRESHOLD_SECONDS):
    """
    Main entry point: build the public gameStatus payload for a game.
    Never raises - malformed payloads degrade to the low-confidence verdict.
    """
    plays = extract_plays(raw_payload)
    last = latest_play(plays)
    verdict = verdict_for_play(last, now=now, threshold_seconds=threshold_seconds)

    return {
        "gameId": game_id,
        "isStoppage": verdict.is_stoppage,
        "confidence": verdict.confidence,
        "stoppageReason": verdict.stoppage_reason,
        "stoppageDurationSeconds": verdict.stoppage_duration_seconds,
        "stoppageDurationPretty": format_duration(verdict.stoppage_duration_seconds),
        "gameStatus": verdict.game_status,
        "lastPlaySummary": verdict.last_play_summary,
        "totalPlays": len(plays),
        "debug": {"lastPlay": last.raw if last else None},
    }
