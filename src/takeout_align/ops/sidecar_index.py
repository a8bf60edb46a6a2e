"""Index PhotoPrism sidecar files by the original capture filename.

A sidecar (``2018/01/20180101_000253_2C6CF514.yml``) records the name the
file had before import::

    TakenAt: 2018-01-01T00:02:53Z
    UID: pr2x3k1...
    Type: image
    OriginalName: IMG_20171231_160253871

The index maps that OriginalName to the sidecar's Location so a takeout
JSON titled ``IMG_20171231_160253871.mp4`` can be placed next to
``2018/01/20180101_000253_2C6CF514.*`` in the originals tree.
"""

import re
from pathlib import Path

import yaml
from loguru import logger

from ..errors import MetadataParseError, wrap_os_error
from ..models import SIDECAR_EXTENSION, Location
from ..paths import PathSplitter
from ..walk import iter_files

log = logger.bind(stage="index")

ORIGINAL_NAME_FIELD = "OriginalName"


class SidecarLoader(yaml.BaseLoader):
    """BaseLoader that keeps scalars as written except YAML nulls, which load as "".

    A numeric name stays its literal text instead of becoming an int,
    while `OriginalName: ~` or `OriginalName: null` reads as unset.
    Quoted "null" is still the string "null".
    """


SidecarLoader.add_implicit_resolver(
    "tag:yaml.org,2002:null",
    re.compile(r"^(?:~|null|Null|NULL|)$"),
    ["~", "n", "N", ""],
)
SidecarLoader.add_constructor("tag:yaml.org,2002:null", lambda loader, node: "")


def read_original_name(sidecar_file: Path) -> str:
    """Return the OriginalName recorded in a sidecar, or "" if unset.

    Only the first YAML document is read; anything after a `---`
    separator is ignored.
    """
    try:
        with open(sidecar_file, encoding="utf-8") as handle:
            document = next(yaml.load_all(handle, Loader=SidecarLoader), None)
    except OSError as e:
        raise wrap_os_error(sidecar_file, "read", e) from e
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        raise MetadataParseError(sidecar_file, str(e)) from e

    if document is None:
        raise MetadataParseError(sidecar_file, "empty document")
    if not isinstance(document, dict):
        raise MetadataParseError(
            sidecar_file, f"expected a mapping, got {type(document).__name__}"
        )

    value = document.get(ORIGINAL_NAME_FIELD, "")
    if not isinstance(value, str):
        raise MetadataParseError(
            sidecar_file,
            f"{ORIGINAL_NAME_FIELD} must be a string, got {type(value).__name__}",
        )
    return value


def build_index(
    sidecar_root: Path,
    extension: str = SIDECAR_EXTENSION,
) -> dict[str, Location]:
    """Walk sidecar_root and map each OriginalName to its sidecar Location.

    Sidecars with an empty OriginalName are skipped. A later sidecar with
    the same OriginalName replaces the earlier entry. Any read or parse
    failure aborts the whole build.
    """
    splitter = PathSplitter(sidecar_root)
    index: dict[str, Location] = {}
    skipped = 0

    for sidecar_file in iter_files(sidecar_root, extension):
        log.debug(f"sidecar found {sidecar_file}")
        location = splitter.split(sidecar_file)
        original_name = read_original_name(sidecar_file)

        if not original_name:
            log.debug(f"No {ORIGINAL_NAME_FIELD}, skip: {location}")
            skipped += 1
            continue

        previous = index.get(original_name)
        if previous is not None:
            log.debug(
                f"Duplicate {ORIGINAL_NAME_FIELD} '{original_name}': "
                f"{previous} replaced by {location}"
            )
        log.debug(f"Index '{original_name}' as {location}")
        index[original_name] = location

    log.info(
        f"Sidecar index built: {len(index)} names, "
        f"{skipped} without {ORIGINAL_NAME_FIELD} under {sidecar_root}"
    )
    return index
