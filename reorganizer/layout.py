"""Destination planning and directory creation.

Every file ends up in exactly one destination directory under the input
root::

    {root}/{year}/{month}/{day}   dated images
    {root}/unknown_dates          images without a capture date
    {root}/error_files            images whose metadata did not decode
    {root}/others                 everything that is not an image

Destinations are kept as a root plus a tuple of path segments and only
joined into a :class:`~pathlib.Path` at the filesystem boundary.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Tuple
import errno
import logging

from .errors import FatalIOError
from .exif import DateOutcome

logger = logging.getLogger(__name__)

UNKNOWN_DATES_DIR = "unknown_dates"
ERROR_FILES_DIR = "error_files"
OTHERS_DIR = "others"


class Category(Enum):
    BY_DATE = "by_date"
    UNKNOWN_DATES = UNKNOWN_DATES_DIR
    ERROR_FILES = ERROR_FILES_DIR
    OTHERS = OTHERS_DIR


@dataclass(frozen=True)
class Destination:
    root: Path
    category: Category
    segments: Tuple[str, ...]

    @property
    def path(self) -> Path:
        return self.root.joinpath(*self.segments)

    def levels(self) -> List[Path]:
        """Return each directory from the first segment down to the leaf."""
        out = []
        current = self.root
        for seg in self.segments:
            current = current / seg
            out.append(current)
        return out


def categorize(image: bool, outcome: DateOutcome | None = None) -> Category:
    """Map a classification and date outcome to a destination category.

    Sentinel years are checked before anything is treated as a date, so
    ``(0, 0, 0)`` and ``(-1, -1, -1)`` never become folders named ``0``
    or ``-1``.
    """
    if not image:
        return Category.OTHERS
    if outcome is None or outcome.is_error:
        return Category.ERROR_FILES
    if outcome.is_unknown or not outcome.is_known:
        return Category.UNKNOWN_DATES
    return Category.BY_DATE


def plan(root: Path, category: Category, outcome: DateOutcome | None = None) -> Destination:
    """Return the destination for ``category`` under ``root`` (no I/O)."""
    root = Path(root)
    match category:
        case Category.BY_DATE:
            if outcome is None or not outcome.is_known:
                raise ValueError(f"dated destination needs a known date, got {outcome!r}")
            segments = (str(outcome.year), str(outcome.month), str(outcome.day))
        case Category.UNKNOWN_DATES | Category.ERROR_FILES | Category.OTHERS:
            segments = (category.value,)
    return Destination(root=root, category=category, segments=segments)


def plan_for(root: Path, image: bool, outcome: DateOutcome | None = None) -> Destination:
    return plan(root, categorize(image, outcome), outcome)


def ensure(destination: Destination) -> List[Path]:
    """Create every missing level of ``destination``, top down.

    Levels are checked and created one at a time (year, then month, then
    day for dated destinations). A level that already exists as a
    directory, including one created between the check and the ``mkdir``,
    counts as success.

    Returns:
        The directories that were created by this call.

    Raises:
        FatalIOError: when a level cannot be created for any other reason,
            for example a permission error or a regular file in the way.
    """
    created = []
    for level in destination.levels():
        if level.is_dir():
            continue
        try:
            level.mkdir()
        except FileExistsError as exc:
            if level.is_dir():
                continue
            raise FatalIOError(f"cannot create directory {level}: a file is in the way", level) from exc
        except OSError as exc:
            reason = exc.strerror or errno.errorcode.get(exc.errno, str(exc))
            raise FatalIOError(f"cannot create directory {level}: {reason}", level) from exc
        logger.debug("Created directory %s", level)
        created.append(level)
    return created
