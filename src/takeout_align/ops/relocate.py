"""Move takeout JSON records next to their originals.

Google Photos takeout writes one JSON record per media item, naming the
media file in its ``title`` field::

    {"title": "IMG_20171231_160253871.mp4", ...}

PhotoPrism renames originals on import (``20180101_000253_2C6CF514.mp4``)
but keeps the old name in the sidecar. Using the sidecar index, each
record is renamed to ``<original base>.json`` inside the originals tree.
"""

import json
import os
from pathlib import Path

from loguru import logger

from ..errors import MetadataParseError, wrap_os_error
from ..models import JSON_EXTENSION, Location, MoveOutcome, PassReport
from ..paths import location_path, strip_ext
from ..walk import iter_files

log = logger.bind(stage="relocate")

TITLE_FIELD = "title"


def read_title(json_file: Path) -> str:
    """Return the title of a takeout JSON record, or "" if it has none."""
    try:
        with open(json_file, encoding="utf-8") as handle:
            document = json.load(handle)
    except OSError as e:
        raise wrap_os_error(json_file, "read", e) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MetadataParseError(json_file, str(e)) from e

    if not isinstance(document, dict):
        raise MetadataParseError(
            json_file, f"expected a JSON object, got {type(document).__name__}"
        )

    title = document.get(TITLE_FIELD)
    if title is None:
        # Missing or JSON null
        return ""
    if not isinstance(title, str):
        raise MetadataParseError(
            json_file, f"{TITLE_FIELD} must be a string, got {type(title).__name__}"
        )
    return title


def move_file(source: Path, destination: Path) -> None:
    """Rename source to destination with a single rename call.

    Cross-filesystem moves raise CrossDeviceMoveError rather than
    falling back to copy + delete.
    """
    try:
        os.rename(source, destination)
    except OSError as e:
        raise wrap_os_error(source, f"rename to {destination}", e) from e


def destination_exists(path: Path) -> bool:
    """True if anything, including a dangling symlink, occupies path."""
    return os.path.lexists(path)


def relocate_one(
    json_file: Path,
    index: dict[str, Location],
    original_root: Path,
    dry_run: bool = False,
) -> tuple[Path | None, MoveOutcome]:
    """Place one takeout record beside its original, if it has a match."""
    title = read_title(json_file)
    base = strip_ext(title)
    log.debug(f"Title: {title!r} -> base: {base!r}")

    location = index.get(base)
    if location is None:
        log.debug(f"No sidecar for '{base}'")
        return None, MoveOutcome.SKIPPED_NO_MATCH

    destination = location_path(original_root, location, JSON_EXTENSION)
    exists = destination_exists(destination)
    log.debug(f"Move to (exists: {exists}): {destination}")
    if exists:
        return destination, MoveOutcome.SKIPPED_EXISTS

    if dry_run:
        log.info(f"[DRY-RUN] Would move {json_file} -> {destination}")
        return destination, MoveOutcome.WOULD_MOVE

    log.info(f"Move {json_file} -> {destination}")
    move_file(json_file, destination)
    return destination, MoveOutcome.MOVED


def relocate(
    import_root: Path,
    index: dict[str, Location],
    original_root: Path,
    dry_run: bool = False,
) -> PassReport:
    """Relocate every matching JSON record under import_root.

    Stops at the first read, parse, or rename failure; files already
    moved stay moved.
    """
    report = PassReport()
    for json_file in list(iter_files(import_root, JSON_EXTENSION)):
        log.debug(f"json found {json_file}")
        destination, outcome = relocate_one(json_file, index, original_root, dry_run)
        report.add(json_file, destination, outcome)

    log.info(f"Relocation complete: {report.summary()}")
    return report
