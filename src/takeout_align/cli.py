"""CLI entry point for takeout alignment."""

import os
from pathlib import Path

import click
from loguru import logger

from .config import AlignConfig
from .errors import AlignError
from .ops.align import normalize
from .ops.relocate import relocate
from .ops.sidecar_index import build_index

log = logger.bind(stage="cli")

_DIR = click.Path(exists=True, file_okay=False, path_type=Path)


def _find_config_file() -> Path | None:
    """Look for .env next to the package or in cwd."""
    pkg_dir = Path(__file__).resolve().parent
    for candidate in [
        pkg_dir.parent.parent / ".env",  # dev: src/../.env
        Path.cwd() / ".env",
    ]:
        if candidate.is_file():
            return candidate
    return None


def _load_env_file(env_file: Path) -> None:
    """Load a shell-style .env file into os.environ (without overriding)."""
    for line in env_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.removeprefix("export ").strip()
        value = value.strip()
        if (value.startswith('"') and value.endswith('"')) or (
            value.startswith("'") and value.endswith("'")
        ):
            value = value[1:-1]
        # Skip bash variable expansions like ${VAR:-default}
        if "${" in value:
            continue
        # Don't override existing env vars (CLI > env > file)
        if key not in os.environ:
            os.environ[key] = value


def _build_config(ctx: click.Context, dry_run: bool) -> AlignConfig:
    """Create and activate the run config from group and command flags."""
    verbose = ctx.obj["verbose"]
    config_file = ctx.obj["config_file"]

    env_file = Path(config_file) if config_file else _find_config_file()
    if env_file and env_file.is_file():
        _load_env_file(env_file)

    # Pass CLI flags as kwargs to avoid env pollution
    config_kwargs: dict[str, bool | str] = {}
    if dry_run:
        config_kwargs["dry_run"] = True
    if verbose:
        config_kwargs["verbose"] = True
        config_kwargs["log_level"] = "DEBUG"

    config = AlignConfig(**config_kwargs)  # type: ignore[arg-type]
    config.setup_logging()
    if env_file and env_file.is_file():
        log.debug(f"Loaded env from {env_file}")
    try:
        config.validate_settings()
    except AlignError as e:
        raise click.UsageError(str(e)) from e
    return config


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to .env file.",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, config_file: str | None) -> None:
    """Line up Google Photos takeout JSON records with a PhotoPrism archive."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_file"] = config_file


@main.command("movejson")
@click.option("--import", "import_dir", type=_DIR, required=True, help="Import Folder")
@click.option("--sidecar", "sidecar_dir", type=_DIR, required=True, help="Sidecar Folder")
@click.option(
    "--original", "original_dir", type=_DIR, required=True, help="Original Folder"
)
@click.option("--dry", "dry_run", is_flag=True, help="Dry run. Do nothing.")
@click.pass_context
def movejson(
    ctx: click.Context,
    import_dir: Path,
    sidecar_dir: Path,
    original_dir: Path,
    dry_run: bool,
) -> None:
    """Move takeout JSON files next to their originals, matched by sidecar OriginalName."""
    config = _build_config(ctx, dry_run)
    log.info(
        f"movejson: import={import_dir} sidecar={sidecar_dir} "
        f"original={original_dir} dry_run={config.dry_run}"
    )
    try:
        index = build_index(sidecar_dir, config.sidecar_extension)
        report = relocate(import_dir, index, original_dir, dry_run=config.dry_run)
    except AlignError as e:
        raise click.ClickException(str(e)) from e
    click.echo(report.summary())


@main.command("alignjson")
@click.option("--import", "import_dir", type=_DIR, required=True, help="Import Folder")
@click.option("--dry", "dry_run", is_flag=True, help="Dry run. Do nothing.")
@click.pass_context
def alignjson(ctx: click.Context, import_dir: Path, dry_run: bool) -> None:
    """Run on extracted google takeout folder, prior to import into photoprism."""
    config = _build_config(ctx, dry_run)
    log.info(f"alignjson: import={import_dir} dry_run={config.dry_run}")
    try:
        report = normalize(import_dir, dry_run=config.dry_run, max_ext_len=config.max_ext_len)
    except AlignError as e:
        raise click.ClickException(str(e)) from e
    click.echo(report.summary())
