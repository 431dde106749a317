"""Move the files of one directory into a dated folder layout.

:func:`organize_directory` lists the input directory once, splits the
entries into images and everything else, and places each file in turn:

- images: read the capture date, plan the destination, create it, move
- other files: move into ``others``

Fatal I/O errors (listing the directory, opening an image, creating a
directory) stop the run. Failed moves are logged, counted as skipped and
the run carries on.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple
import logging
import shutil

from . import layout
from .errors import FatalIOError, MoveError
from .exif import DateOutcome, read_date
from .utils import is_image

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]
DateReader = Callable[[Path], DateOutcome]


class ErrorPolicy(Enum):
    FAIL_FAST = "fail-fast"
    CONTINUE = "continue"


@dataclass(frozen=True)
class Entry:
    path: Path
    name: str


@dataclass(frozen=True)
class PlaceResult:
    source: Path
    target: Path
    destination: layout.Destination


@dataclass(frozen=True)
class Progress:
    """Running totals for one run; each step returns a new instance."""

    total: int
    count: int = 0
    moved: int = 0
    skipped: int = 0
    by_category: Dict[str, int] = field(default_factory=dict)
    errors: Tuple[str, ...] = ()


def advance(progress: Progress, category: layout.Category | None = None, error: str | None = None) -> Progress:
    """Return ``progress`` with one more file accounted for.

    A file with an ``error`` counts as skipped, otherwise as moved into
    ``category``.
    """
    if error is not None:
        return replace(
            progress,
            count=progress.count + 1,
            skipped=progress.skipped + 1,
            errors=progress.errors + (error,),
        )
    by_category = dict(progress.by_category)
    if category is not None:
        by_category[category.value] = by_category.get(category.value, 0) + 1
    return replace(progress, count=progress.count + 1, moved=progress.moved + 1, by_category=by_category)


def scan_directory(root: Path) -> List[Entry]:
    """Return the files directly inside ``root``, sorted by name.

    Subdirectories are skipped and never descended into.

    Raises:
        FatalIOError: if ``root`` cannot be listed.
    """
    root = Path(root)
    try:
        children = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise FatalIOError(f"cannot list {root}: {exc.strerror or exc}", root) from exc

    entries = []
    for p in children:
        if p.is_dir():
            continue
        entries.append(Entry(path=p, name=p.name))
    return entries


def partition(entries: List[Entry]) -> Tuple[List[Entry], List[Entry]]:
    """Split entries into ``(images, others)`` keeping their order."""
    images, others = [], []
    for e in entries:
        (images if is_image(e.name) else others).append(e)
    return images, others


def place(source: Path, destination: layout.Destination) -> PlaceResult:
    """Move ``source`` into ``destination`` keeping its file name.

    The destination is created first when missing. A file of the same
    name already at the destination is replaced.

    Raises:
        MoveError: if the move itself fails.
        FatalIOError: if the destination cannot be created.
    """
    source = Path(source)
    dest_dir = destination.path
    if not dest_dir.is_dir():
        layout.ensure(destination)
    target = dest_dir / source.name
    if target.is_dir():
        raise MoveError(source, target, "a directory is in the way")
    try:
        shutil.move(str(source), str(target))
    except OSError as exc:
        raise MoveError(source, target, exc.strerror or str(exc)) from exc
    logger.debug("Moved %s -> %s", source, target)
    return PlaceResult(source=source, target=target, destination=destination)


def _place_counted(progress: Progress, entry: Entry, destination: layout.Destination) -> Progress:
    try:
        place(entry.path, destination)
    except MoveError as exc:
        logger.warning("Skipping %s: %s", entry.name, exc)
        return advance(progress, error=str(exc))
    return advance(progress, destination.category)


def organize_directory(
    root: Path,
    reader: Optional[DateReader] = None,
    progress_cb: Optional[ProgressCallback] = None,
    policy: ErrorPolicy = ErrorPolicy.FAIL_FAST,
) -> Progress:
    """Organize every file directly inside ``root``.

    Args:
        root: Directory to reorganize in place.
        reader: Callable returning the :class:`DateOutcome` of an image.
            Defaults to :func:`reorganizer.exif.read_date`.
        progress_cb: Called with ``(0, total)`` once the directory is listed
            and with ``(count, total)`` after each file.
        policy: With ``ErrorPolicy.CONTINUE`` an image that cannot be
            opened is skipped instead of ending the run.

    Returns:
        The final :class:`Progress`.
    """
    root = Path(root)
    reader = reader or read_date
    images, others = partition(scan_directory(root))
    progress = Progress(total=len(images) + len(others))
    logger.info("Organizing %d files in %s", progress.total, root)

    def report(p: Progress) -> None:
        if progress_cb:
            progress_cb(p.count, p.total)

    report(progress)

    for entry in images:
        try:
            outcome = reader(entry.path)
        except FatalIOError as exc:
            if policy is not ErrorPolicy.CONTINUE:
                raise
            logger.warning("Skipping %s: %s", entry.name, exc)
            progress = advance(progress, error=str(exc))
            report(progress)
            continue
        progress = _place_counted(progress, entry, layout.plan_for(root, True, outcome))
        report(progress)

    # planned once from root, not from any entry
    others_dest = layout.plan(root, layout.Category.OTHERS)
    for entry in others:
        progress = _place_counted(progress, entry, others_dest)
        report(progress)

    return progress
