"""Read capture dates from image metadata.

:func:`read_date` opens an image, hands the open handle to a decoder and
reduces the decoded tags to a :class:`DateOutcome`. The outcome is one of
a real ``(year, month, day)`` triple or one of two sentinels:

- ``UNKNOWN`` ``(0, 0, 0)``: the metadata decoded but carries no usable date
- ``DECODE_ERROR`` ``(-1, -1, -1)``: the metadata container did not decode

Decoders are plain callables taking a binary file handle and returning a
mapping of tag name to value. They raise :class:`DecodeError` when the
container cannot be decoded. The default decoder uses ``exifread``; the
``exiftool`` binary can be used instead via
:func:`reorganizer.exiftool.exiftool_decoder`.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Mapping
import logging

import exifread

from .errors import DecodeError, FatalIOError
from .utils import parse_date

logger = logging.getLogger(__name__)

Decoder = Callable[[BinaryIO], Mapping[str, object]]

# Tag names as exifread reports them, most trusted first.
DATE_TAGS = ("EXIF DateTimeOriginal", "Image DateTime")


@dataclass(frozen=True)
class DateOutcome:
    year: int
    month: int
    day: int

    @property
    def is_unknown(self) -> bool:
        return self.year == 0

    @property
    def is_error(self) -> bool:
        return self.year == -1

    @property
    def is_known(self) -> bool:
        return self.year > 0


UNKNOWN = DateOutcome(0, 0, 0)
DECODE_ERROR = DateOutcome(-1, -1, -1)


def exifread_decoder(fh: BinaryIO) -> Mapping[str, object]:
    """Decode EXIF tags from ``fh`` with exifread.

    exifread reports a missing or unrecognised container by returning an
    empty mapping; that is treated as a decode failure.
    """
    try:
        tags = exifread.process_file(fh, details=False)
    except Exception as exc:
        raise DecodeError(str(exc)) from exc
    if not tags:
        raise DecodeError("no EXIF data found")
    return tags


def date_from_tags(tags: Mapping[str, object], date_tags=DATE_TAGS) -> DateOutcome:
    """Return the outcome for an already-decoded tag mapping."""
    for name in date_tags:
        value = tags.get(name)
        if value is None:
            continue
        dt = parse_date(str(value))
        if dt is None:
            logger.debug("Unparseable %s value %r", name, value)
            continue
        return DateOutcome(dt.year, dt.month, dt.day)
    return UNKNOWN


def read_date(path: Path, decoder: Decoder | None = None, date_tags=DATE_TAGS) -> DateOutcome:
    """Return the capture date of the image at ``path``.

    Args:
        path: Image to inspect.
        decoder: Callable turning an open binary handle into a tag mapping.
            Defaults to :func:`exifread_decoder`.
        date_tags: Tag names to look for, in order of preference.

    Raises:
        FatalIOError: if the file cannot be opened.
    """
    decoder = decoder or exifread_decoder
    try:
        fh = open(path, "rb")
    except OSError as exc:
        raise FatalIOError(f"cannot open {path}: {exc.strerror or exc}", path) from exc

    with fh:
        try:
            tags = decoder(fh)
        except DecodeError as exc:
            logger.debug("Decode failed for %s: %s", path, exc)
            return DECODE_ERROR
    return date_from_tags(tags, date_tags)
