"""Decode image metadata with the external ``exiftool`` binary.

This is an alternative to the default exifread decoder for images that
exifread cannot handle. The image bytes are piped to ``exiftool`` on
stdin and the JSON it prints is reduced to the tag names used by
:mod:`reorganizer.exif`, so both decoders feed the same date lookup.
"""
import json
import shutil
import subprocess
from typing import BinaryIO, Dict

from .errors import DecodeError

EXIFTOOL_ARGS = ["exiftool", "-j", "-G0:1", "-a", "-s", "-EXIF:all", "-"]

# exiftool "-G0:1" keys -> exifread keys
TAG_ALIASES = {
    "EXIF:ExifIFD:DateTimeOriginal": "EXIF DateTimeOriginal",
    "EXIF:ExifIFD:CreateDate": "EXIF DateTimeDigitized",
    "EXIF:IFD0:ModifyDate": "Image DateTime",
}


def has_exiftool():
    """Return ``True`` when the ``exiftool`` binary is found on PATH."""
    return shutil.which("exiftool") is not None


def read_all_tags(data: bytes) -> Dict[str, object]:
    """Return the exiftool JSON mapping for an in-memory file.

    Raises:
        DecodeError: when exiftool fails, prints something other than a
            JSON list, or reports an error for the input.
    """
    try:
        r = subprocess.run(
            EXIFTOOL_ARGS,
            input=data,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        raise DecodeError(f"exiftool could not be run: {exc}") from exc

    try:
        parsed = json.loads(r.stdout.decode("utf-8", errors="replace") or "[]")
    except ValueError as exc:
        raise DecodeError("exiftool printed invalid JSON") from exc
    tags = parsed[0] if parsed else {}

    errors = [v for k, v in tags.items() if k.rsplit(":", 1)[-1] == "Error"]
    if errors:
        raise DecodeError(str(errors[0]))
    if r.returncode != 0 and not tags:
        raise DecodeError(r.stderr.decode("utf-8", errors="replace").strip() or "exiftool failed")
    return tags


def exiftool_decoder(fh: BinaryIO) -> Dict[str, object]:
    """Decoder for :func:`reorganizer.exif.read_date` backed by exiftool.

    Only EXIF group tags are kept; a file without any is a decode failure,
    matching the exifread decoder.
    """
    tags = read_all_tags(fh.read())
    exif_tags = {k: v for k, v in tags.items() if k.startswith("EXIF:")}
    if not exif_tags:
        raise DecodeError("no EXIF data found")
    return {TAG_ALIASES.get(k, k): v for k, v in exif_tags.items()}
