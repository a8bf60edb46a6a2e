"""Extension splitting and root-relative Location computation."""

import os
from pathlib import Path

from .errors import PathOutsideRootError
from .models import Location


def split_ext(name: str) -> tuple[str, str]:
    """Split name into (stem, ext) at the last '.' of its final segment.

    The extension keeps its dot and is "" when the final segment has no
    dot. A leading dot counts: ".heic" -> ("", ".heic").
    """
    segment = name.rsplit("/", 1)[-1]
    dot = segment.rfind(".")
    if dot == -1:
        return name, ""
    ext = segment[dot:]
    return name[: len(name) - len(ext)], ext


def strip_ext(name: str) -> str:
    return split_ext(name)[0]


class PathSplitter:
    """Computes Locations for paths under a fixed root.

    The root is made absolute once (symlinks are not resolved); every
    path passed to split() is made absolute the same way before the
    containment check.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(os.path.abspath(root))

    def split(self, path: Path | str) -> Location:
        absolute = Path(os.path.abspath(path))
        try:
            relative = absolute.relative_to(self.root)
        except ValueError:
            raise PathOutsideRootError(absolute, self.root) from None

        parts = relative.parts
        if not parts:
            return Location(path="", base="")
        directory = "".join(f"{part}/" for part in parts[:-1])
        return Location(path=directory, base=strip_ext(parts[-1]))


def split_location(root: Path | str, path: Path | str) -> Location:
    """One-shot form of PathSplitter(root).split(path)."""
    return PathSplitter(root).split(path)


def location_path(root: Path, location: Location, suffix: str) -> Path:
    """Rebuild an absolute file path from a Location under root."""
    directory = root.joinpath(*[p for p in location.path.split("/") if p])
    return directory / f"{location.base}{suffix}"
