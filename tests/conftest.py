import struct

import pytest


def _jpeg(tiff: bytes) -> bytes:
    payload = b"Exif\x00\x00" + tiff
    app1 = b"\xff\xe1" + struct.pack(">H", len(payload) + 2) + payload
    return b"\xff\xd8" + app1 + b"\xff\xd9"


def jpeg_with_date(value: str) -> bytes:
    """Minimal big-endian EXIF JPEG carrying only ``DateTimeOriginal``."""
    header = b"MM\x00\x2a" + struct.pack(">I", 8)
    # IFD0 at 8 holds one entry pointing at the Exif IFD at 26
    ifd0 = struct.pack(">H", 1) + struct.pack(">HHII", 0x8769, 4, 1, 26) + struct.pack(">I", 0)
    # Exif IFD at 26 holds DateTimeOriginal whose text sits at 44
    exif_ifd = struct.pack(">H", 1) + struct.pack(">HHII", 0x9003, 2, 20, 44) + struct.pack(">I", 0)
    text = value.encode("ascii")[:19].ljust(19, b" ") + b"\x00"
    return _jpeg(header + ifd0 + exif_ifd + text)


def jpeg_without_date() -> bytes:
    """Minimal EXIF JPEG with a camera make but no date tags."""
    header = b"MM\x00\x2a" + struct.pack(">I", 8)
    ifd0 = struct.pack(">H", 1) + struct.pack(">HHI", 0x010F, 2, 4) + b"Cam\x00" + struct.pack(">I", 0)
    return _jpeg(header + ifd0)


@pytest.fixture
def make_jpeg():
    """Return a writer ``(path, date=None) -> path`` for tiny EXIF JPEGs."""

    def _write(path, date=None):
        path.write_bytes(jpeg_with_date(date) if date else jpeg_without_date())
        return path

    return _write
