"""Takeout Align -- reconcile Google Photos takeout JSON with a PhotoPrism archive.

Core modules:
    config  -- Configuration via pydantic-settings (TAKEOUT_* env vars) and
               loguru sink setup.
    cli     -- Click CLI entry point with the movejson and alignjson commands.
               CLI flags passed as kwargs to AlignConfig (no env pollution).
    paths   -- Extension splitting and root-relative Location computation.
    walk    -- Sorted recursive file traversal with wrapped OS errors.
    models  -- Location value type, per-file outcome enums, PassReport.
    errors  -- Exception hierarchy (PathOutsideRoot, FileOperation, MetadataParse).

Subpackages:
    ops -- The two batch passes (sidecar indexing + JSON relocation, and
           double-extension normalization).
"""
