"""Strip media extensions that takeout leaves inside JSON record names.

Takeout names records after the media file, extension included
(``photo.heic.json``). PhotoPrism expects ``photo.json``, so the inner
extension is dropped when it looks like a real one.
"""

from pathlib import Path

from loguru import logger

from ..models import DEFAULT_MAX_EXT_LEN, JSON_EXTENSION, PassReport, RenameOutcome
from ..paths import split_ext
from ..walk import iter_files
from .relocate import destination_exists, move_file

log = logger.bind(stage="align")


def second_extension(filename: str) -> str:
    """Extension left after removing the trailing .json ("" if none)."""
    name = filename.removesuffix(JSON_EXTENSION)
    return split_ext(name)[1]


def aligned_name(filename: str, max_ext_len: int = DEFAULT_MAX_EXT_LEN) -> str | None:
    """Target name for filename, or None if it should stay as is.

    >>> aligned_name("photo.heic.json")
    'photo.json'
    >>> aligned_name("photo.json") is None
    True
    """
    second_ext = second_extension(filename)
    if not second_ext or len(second_ext) > max_ext_len:
        return None
    name = filename.removesuffix(JSON_EXTENSION)
    return name[: len(name) - len(second_ext)] + JSON_EXTENSION


def align_one(
    json_file: Path,
    dry_run: bool = False,
    max_ext_len: int = DEFAULT_MAX_EXT_LEN,
) -> tuple[Path | None, RenameOutcome]:
    second_ext = second_extension(json_file.name)
    if not second_ext:
        return None, RenameOutcome.SKIPPED_NO_SECOND_EXT
    if len(second_ext) > max_ext_len:
        log.debug(f"Second ext too long {second_ext!r}: {json_file}")
        return None, RenameOutcome.SKIPPED_EXT_TOO_LONG

    target = json_file.with_name(aligned_name(json_file.name, max_ext_len))
    exists = destination_exists(target)
    log.debug(f"Move to (exists: {exists}): {target}")
    if exists:
        return target, RenameOutcome.SKIPPED_EXISTS

    if dry_run:
        log.info(f"[DRY-RUN] Would rename {json_file} -> {target.name}")
        return target, RenameOutcome.WOULD_RENAME

    log.info(f"Rename {json_file} -> {target.name}")
    move_file(json_file, target)
    return target, RenameOutcome.RENAMED


def normalize(
    root: Path,
    dry_run: bool = False,
    max_ext_len: int = DEFAULT_MAX_EXT_LEN,
) -> PassReport:
    """Rename every ``name.ext.json`` under root to ``name.json`` in place."""
    report = PassReport()
    for json_file in list(iter_files(root, JSON_EXTENSION)):
        log.debug(f"json found {json_file}")
        target, outcome = align_one(json_file, dry_run, max_ext_len)
        report.add(json_file, target, outcome)

    log.info(f"Alignment complete: {report.summary()}")
    return report
