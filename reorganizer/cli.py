"""Command-line interface for the ``reorganizer`` package.

This module exposes the entrypoint used by the ``reorganizer`` console
script. It is a thin adapter: it checks the arguments, wires the chosen
metadata decoder and a tqdm progress bar into
:func:`reorganizer.organize.organize_directory` and turns fatal errors
into an exit status.
"""
import argparse
import functools
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from tqdm import tqdm

from . import exif, exiftool
from . import organize as organize_mod
from .errors import FatalIOError, UsageError

try:
    __version__ = version("reorganizer")
except PackageNotFoundError:
    __version__ = "0.0.0"

USAGE_MESSAGE = (
    "ERROR: Needed only the input of the directory to reorganize.\n"
    "Example: 'reorganizer {PATH}'"
)


def build_parser():
    parser = argparse.ArgumentParser(
        prog="reorganizer",
        description="Move the files of a directory into YEAR/MONTH/DAY folders based on EXIF capture dates.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=__version__
    )
    parser.add_argument(
        "directory",
        nargs="*",
        help="Directory to reorganize in place (exactly one)",
    )
    parser.add_argument(
        "--reader",
        choices=["exifread", "exiftool"],
        default="exifread",
        help="Metadata decoder: the built-in exifread reader (default) or the external exiftool binary",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help=(
            "Skip images that cannot be opened instead of stopping the run. "
            "Directory listing and creation failures still stop the run."
        ),
    )
    parser.add_argument(
        "--no-progress",
        dest="progress",
        action="store_false",
        help="Do not show the progress bar",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every directory created and file moved",
    )
    return parser


def _single_directory(args) -> Path:
    dirs = getattr(args, "directory", None) or []
    if len(dirs) != 1:
        raise UsageError(USAGE_MESSAGE)
    return Path(dirs[0])


def _make_reader(name: str):
    if name == "exiftool":
        if not exiftool.has_exiftool():
            raise FatalIOError("exiftool not found on PATH")
        return functools.partial(exif.read_date, decoder=exiftool.exiftool_decoder)
    return exif.read_date


def cmd_organize(args) -> int:
    """Run the organizer for parsed ``args`` and return the exit status."""
    try:
        root = _single_directory(args)
    except UsageError as exc:
        print(exc)
        return 0

    policy = organize_mod.ErrorPolicy.CONTINUE if args.keep_going else organize_mod.ErrorPolicy.FAIL_FAST
    bar = None

    def _update(count, total):
        nonlocal bar
        if bar is None:
            print(f"Starting to organize. {total} files to organize.")
            bar = tqdm(total=total, disable=not args.progress, unit="file")
        bar.update(count - bar.n)

    try:
        reader = _make_reader(args.reader)
        progress = organize_mod.organize_directory(
            root,
            reader=reader,
            progress_cb=_update,
            policy=policy,
        )
    except FatalIOError as exc:
        print(f"\nERROR: {exc}", file=sys.stderr)
        return 1
    finally:
        if bar is not None:
            bar.close()

    print(f"Organized {progress.moved} files ({progress.skipped} skipped).")
    for name, n in sorted(progress.by_category.items()):
        print(f"  {name}: {n}")
    for err in progress.errors:
        print(f"SKIPPED {err}")
    return 0


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    raise SystemExit(cmd_organize(args))
