import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from models.bet import BetRecord

logger = logging.getLogger("aggregation")

NO_DATA_MESSAGE = "No data found for summary."
TOTAL_HEADER = "📊 Summary (numbers):"
PER_USER_HEADER = "📊 Summary (per user):"

# Asia/Yangon, which has no daylight saving.
LOCAL_UTC_OFFSET_MINUTES = 6 * 60 + 30
CUTOFF_HOUR = 12

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MS_PER_MINUTE = 60 * 1000
_MS_PER_HOUR = 60 * _MS_PER_MINUTE

Timestamp = Union[str, datetime]


def _epoch_millis(ts: Timestamp) -> int:
    if isinstance(ts, str):
        ts = datetime.fromisoformat(ts.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return (ts - _EPOCH) // timedelta(milliseconds=1)


def local_hour(ts: Timestamp, offset_minutes: int = LOCAL_UTC_OFFSET_MINUTES) -> int:
    local_ms = _epoch_millis(ts) + offset_minutes * _MS_PER_MINUTE
    return (local_ms // _MS_PER_HOUR) % 24


def is_before_noon_local(
    ts: Timestamp,
    offset_minutes: int = LOCAL_UTC_OFFSET_MINUTES,
    cutoff_hour: int = CUTOFF_HOUR,
) -> bool:
    """True when the UTC timestamp falls before `cutoff_hour` at a fixed UTC offset."""
    return local_hour(ts, offset_minutes) < cutoff_hour


def filter_before_noon(
    records: Iterable[BetRecord],
    offset_minutes: int = LOCAL_UTC_OFFSET_MINUTES,
    cutoff_hour: int = CUTOFF_HOUR,
) -> List[BetRecord]:
    kept = []
    for r in records:
        if r.created_at is None:
            logger.debug(f"Skipping record without created_at: {r}")
            continue
        try:
            before = is_before_noon_local(r.created_at, offset_minutes, cutoff_hour)
        except ValueError:
            logger.warning(f"Skipping record with unreadable created_at {r.created_at!r}")
            continue
        if before:
            kept.append(r)
    return kept


def coerce_amount(value: Any) -> Union[int, float]:
    """Numeric value of a stored amount, 0 when it cannot be read as a number."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    try:
        f = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(f):
        return 0
    return int(f) if f.is_integer() else f


def totals_by_number(records: Iterable[BetRecord]) -> Dict[str, Union[int, float]]:
    totals: Dict[str, Union[int, float]] = {}
    for r in records:
        totals[r.number] = totals.get(r.number, 0) + coerce_amount(r.amount)
    return totals


def totals_by_sender(records: Iterable[BetRecord]) -> Dict[str, Dict[str, Union[int, float]]]:
    # Inner dicts keep senders in the order they first bet on that number.
    grouped: Dict[str, Dict[str, Union[int, float]]] = {}
    for r in records:
        per_sender = grouped.setdefault(r.number, {})
        per_sender[r.sender] = per_sender.get(r.sender, 0) + coerce_amount(r.amount)
    return grouped


def format_total_lines(totals: Dict[str, Union[int, float]]) -> List[str]:
    return [f"{n} - {totals[n]}" for n in sorted(totals)]


def format_per_sender_lines(grouped: Dict[str, Dict[str, Union[int, float]]]) -> List[str]:
    lines = []
    for n in sorted(grouped):
        parts = "; ".join(f"{sender}: {total}" for sender, total in grouped[n].items())
        lines.append(f"{n} -> {parts}")
    return lines


def summarize(records: List[BetRecord], per_user: bool = False) -> Optional[str]:
    """Build the summary report, or None when there is nothing to summarize.

    Callers render None as NO_DATA_MESSAGE, never as an empty report.
    """
    if not records:
        return None

    if per_user:
        lines = format_per_sender_lines(totals_by_sender(records))
        header = PER_USER_HEADER
    else:
        lines = format_total_lines(totals_by_number(records))
        header = TOTAL_HEADER
    return header + "\n" + "\n".join(lines)
