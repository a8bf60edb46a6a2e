"""Core enums, constants, and value types for takeout alignment.

Types:
    Location      -- Root-relative directory + extensionless basename.
    MoveOutcome   -- Per-file result of the JSON relocation pass.
    RenameOutcome -- Per-file result of the extension normalization pass.
    PassReport    -- Ordered per-file results with outcome counts.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

SIDECAR_EXTENSION = ".yml"
JSON_EXTENSION = ".json"

# Longest "second extension" still treated as a real format suffix
# (".heic", ".jpeg", ".mp4"); longer dotted tails are part of the name.
DEFAULT_MAX_EXT_LEN = 9


@dataclass(frozen=True)
class Location:
    """Where a file sits relative to a root, without its extension.

    path is "/"-separated with a trailing "/" ("2018/01/"), or "" for
    files directly under the root.
    """

    path: str
    base: str


class MoveOutcome(StrEnum):
    MOVED = "moved"
    WOULD_MOVE = "would_move"
    SKIPPED_NO_MATCH = "skipped_no_match"
    SKIPPED_EXISTS = "skipped_exists"


class RenameOutcome(StrEnum):
    RENAMED = "renamed"
    WOULD_RENAME = "would_rename"
    SKIPPED_NO_SECOND_EXT = "skipped_no_second_ext"
    SKIPPED_EXT_TOO_LONG = "skipped_ext_too_long"
    SKIPPED_EXISTS = "skipped_exists"


@dataclass
class FileResult:
    """Outcome for a single visited file."""

    source: Path
    destination: Path | None
    outcome: MoveOutcome | RenameOutcome


@dataclass
class PassReport:
    """Result summary from one relocation or normalization pass."""

    results: list[FileResult] = field(default_factory=list)

    def add(
        self,
        source: Path,
        destination: Path | None,
        outcome: MoveOutcome | RenameOutcome,
    ) -> None:
        self.results.append(FileResult(source, destination, outcome))

    @property
    def counts(self) -> Counter:
        return Counter(r.outcome for r in self.results)

    @property
    def total(self) -> int:
        return len(self.results)

    def by_outcome(self, outcome: MoveOutcome | RenameOutcome) -> list[FileResult]:
        return [r for r in self.results if r.outcome == outcome]

    def summary(self) -> str:
        """One-line 'outcome=count' summary in first-seen order."""
        parts = [f"{outcome}={count}" for outcome, count in self.counts.items()]
        return f"{self.total} files: " + (", ".join(parts) if parts else "none")
