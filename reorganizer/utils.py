"""Utility helpers for classifying files and parsing EXIF timestamps.

The date parser favours explicit ``strptime`` formats for the common EXIF
layouts and falls back to ``dateutil.parser`` for anything messier. It
never raises; unparseable input (including the all-zero placeholder some
cameras write) yields ``None``.
"""

from datetime import datetime
import re
from dateutil import parser as dparser

IMAGE_EXTENSIONS = {".jpg"}

EXPLICIT_FORMATS = [
    "%Y:%m:%d %H:%M:%S",
    "%Y:%m:%d %H:%M:%S.%f",
    "%Y:%m:%d %H:%M:%S%z",
    "%Y:%m:%d %H:%M:%S.%f%z",
    "%Y:%m:%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S%z",
]

_ZERO_DATE = re.compile(r"^[0:\- ]+$")
_FULL_DATE = re.compile(r"^(\d{4})[:\-](\d{2})[:\-](\d{2})(.*)$")


def is_image(name: str) -> bool:
    """Return ``True`` when ``name`` ends in ``.jpg`` (any case).

    A file named just ``.jpg`` counts as an image too.
    """
    if not name:
        return False
    dot = name.rfind(".")
    if dot < 0:
        return False
    return name[dot:].lower() in IMAGE_EXTENSIONS


def parse_date(s: str) -> datetime | None:
    """Parse an EXIF-style timestamp string.

    Only strings that start with a full ``YYYY:MM:DD`` (or ``YYYY-MM-DD``)
    date are accepted; anything else returns ``None`` rather than letting
    dateutil fill the missing fields from today's date.

    Returns a naive datetime, or a timezone-aware one when the string
    carries an offset. The wall-clock fields are kept as written; no
    conversion to local time or UTC is applied.
    """
    if not s or not isinstance(s, str):
        return None
    s = s.replace("\x00", "").strip()
    if not s or _ZERO_DATE.match(s):
        return None
    m = _FULL_DATE.match(s)
    if not m:
        return None

    for fmt in EXPLICIT_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            pass

    # EXIF uses ':' between date fields, which dateutil reads as a time
    y, mo, d, rest = m.groups()
    try:
        dt = dparser.parse(f"{y}-{mo}-{d}{rest}")
    except (ValueError, OverflowError):
        return None
    if (dt.year, dt.month, dt.day) != (int(y), int(mo), int(d)):
        return None
    return dt
