import time
from datetime import datetime, timezone
from typing import Optional, Union

Number = Union[int, float]

BYTE_UNITS = ['B', 'KB', 'MB', 'GB', 'TB']

def _trim(value: float, places: int) -> str:
    text = f"{value:.{places}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text

def format_bytes(num_bytes: Number) -> str:
    """Human readable size in powers of 1024, e.g. ``1536 -> '1.5 KB'``."""
    if not num_bytes or num_bytes <= 0:
        return '0 B'
    index = 0
    while num_bytes >= 1024 ** (index + 1) and index < len(BYTE_UNITS) - 1:
        index += 1
    return f"{_trim(num_bytes / (1024 ** index), 2)} {BYTE_UNITS[index]}"

def format_number(num: Number) -> str:
    if isinstance(num, float) and not num.is_integer():
        whole, _, fraction = _trim(abs(num), 3).partition('.')
        sign = '-' if num < 0 else ''
        return f"{sign}{int(whole):,}.{fraction}" if fraction else f"{sign}{int(whole):,}"
    return f"{int(num):,}"

def format_timestamp(timestamp: Number) -> str:
    """Hour and minute label for a unix timestamp in seconds (UTC)."""
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime('%I:%M %p')

def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'' if count == 1 else 's'} ago"

def format_time_ago(timestamp: Number, now: Optional[float] = None) -> str:
    """Relative age of a unix timestamp in seconds."""
    now = time.time() if now is None else now
    seconds = max(int(now - timestamp), 0)
    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if days > 0:
        return _plural(days, 'day')
    if hours > 0:
        return _plural(hours, 'hour')
    if minutes > 0:
        return _plural(minutes, 'minute')
    return _plural(seconds, 'second')

def format_block_time(timestamp_ms: Number, now_ms: Optional[float] = None) -> str:
    """Relative age of a millisecond timestamp, absolute date after a week."""
    now_ms = time.time() * 1000 if now_ms is None else now_ms
    minutes = int((now_ms - timestamp_ms) // 60000)

    if minutes < 1:
        return 'Just now'
    if minutes < 60:
        return _plural(minutes, 'minute')

    hours = minutes // 60
    if hours < 24:
        return _plural(hours, 'hour')

    days = hours // 24
    if days < 7:
        return _plural(days, 'day')

    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=timezone.utc)
    return moment.strftime('%b %d, %Y, %I:%M %p')
