"""Batch passes over takeout and archive trees.

Submodules:
    sidecar_index -- Walks a PhotoPrism sidecar tree (*.yml) and maps each
                     OriginalName to the sidecar's root-relative Location.
                     Empty names are skipped; duplicates are last-write-wins.
    relocate      -- Reads the title of each takeout JSON record, looks up its
                     extensionless base in the sidecar index, and renames the
                     record to <original base>.json beside the original. Never
                     overwrites; cross-device moves fail with
                     CrossDeviceMoveError.
    align         -- Renames name.ext.json to name.json in place when the inner
                     extension is non-empty and at most max_ext_len characters.
                     Never overwrites; dry run reports only.
"""
