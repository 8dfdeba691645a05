"""Main CLI entry point for sharpscaffold."""

import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console

from .. import __version__
from ..adapters.io.enhanced_logging import (
    LoggerManager,
    get_operation_logger,
    setup_enhanced_logging,
)
from ..adapters.io.file_discovery import FileDiscoveryError, FileDiscoveryService
from ..adapters.io.rich_cli import SHARPSCAFFOLD_THEME, RichCliComponents
from ..adapters.rendering.csharp_renderer import CSharpRenderer
from ..application.generate_usecase import TestsGenerator
from ..config.loader import ConfigLoader, ConfigurationError
from ..config.models import SharpScaffoldConfig
from ..domain.models import PipelineError


class ClickContext:
    """Context object for Click commands."""

    def __init__(self) -> None:
        self.config_path: Path | None = None
        self.rich_cli: RichCliComponents | None = None
        self.verbose: bool = False
        self.quiet: bool = False
        self.dry_run: bool = False

    def load_config(self, cli_overrides: dict | None = None) -> SharpScaffoldConfig:
        config = ConfigLoader(self.config_path).load_config(cli_overrides=cli_overrides)
        LoggerManager.set_log_level(
            verbose=self.verbose,
            quiet=self.quiet,
            suppress_modules=config.logging.suppress_modules,
        )
        return config


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Reduce output: set log level to WARNING and hide INFO",
)
@click.option(
    "--dry-run", "--dry", is_flag=True, help="Render test classes without writing them"
)
@click.version_option(__version__, prog_name="sharpscaffold")
@click.pass_context
def app(
    ctx: click.Context,
    config: Path | None,
    verbose: bool,
    quiet: bool,
    dry_run: bool,
) -> None:
    """sharpscaffold - xUnit/Moq test scaffolding for C# classes."""
    ctx.ensure_object(ClickContext)
    ctx.obj.config_path = config
    ctx.obj.verbose = verbose
    ctx.obj.quiet = quiet
    ctx.obj.dry_run = dry_run

    setup_enhanced_logging(Console(theme=SHARPSCAFFOLD_THEME, stderr=True))
    LoggerManager.set_log_level(verbose=verbose, quiet=quiet)
    ctx.obj.rich_cli = RichCliComponents(Console(theme=SHARPSCAFFOLD_THEME))


@app.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory receiving generated test classes (default from config)",
)
@click.option(
    "--read-workers",
    type=click.IntRange(min=1),
    help="Maximum files read in parallel",
)
@click.option(
    "--generate-workers",
    type=click.IntRange(min=1),
    help="Maximum test classes generated in parallel",
)
@click.option(
    "--write-workers",
    type=click.IntRange(min=1),
    help="Maximum files written in parallel",
)
@click.option(
    "--on-collision",
    type=click.Choice(["overwrite", "error"], case_sensitive=False),
    help="What to do when two classes produce the same test class name",
)
@click.pass_context
def generate(
    ctx: click.Context,
    paths: tuple[Path, ...],
    output: Path | None,
    read_workers: int | None,
    generate_workers: int | None,
    write_workers: int | None,
    on_collision: str | None,
) -> None:
    """Generate test scaffolds for C# source files and directories."""
    operation_logger = get_operation_logger("generate")
    rich_cli: RichCliComponents = ctx.obj.rich_cli

    cli_overrides = {
        "pipeline": {
            "max_files_reading_parallel": read_workers,
            "max_test_classes_generating_parallel": generate_workers,
            "max_files_writing_parallel": write_workers,
        },
        "output": {
            "save_path": str(output) if output else None,
            "collision_policy": on_collision.lower() if on_collision else None,
        },
    }

    try:
        config = ctx.obj.load_config(cli_overrides)
        files = FileDiscoveryService(config.discovery).discover(paths)
        if not files:
            rich_cli.display_error("No C# source files found", "Nothing to do")
            sys.exit(1)

        pipeline_config = config.build_pipeline_config(files, dry_run=ctx.obj.dry_run)
        if ctx.obj.dry_run:
            rich_cli.display_info("DRY RUN: no files will be written", "Dry Run Mode")

        operation_logger.debug(
            "Generating for %d file(s) into %s", len(files), pipeline_config.save_path
        )
        generator = TestsGenerator(
            pipeline_config, renderer=CSharpRenderer(newline=config.output.newline)
        )
        report = asyncio.run(generator.generate())
        rich_cli.display_report(report)

    except (ConfigurationError, ValidationError) as e:
        rich_cli.display_error(f"Configuration error: {e}", "Configuration Failed")
        operation_logger.error(f"Configuration failed: {e}")
        sys.exit(1)
    except FileDiscoveryError as e:
        rich_cli.display_error(str(e), "Discovery Failed")
        sys.exit(1)
    except PipelineError as e:
        rich_cli.display_errors(e.errors)
        operation_logger.error(f"Generation failed with {len(e.errors)} error(s)")
        sys.exit(1)


@app.command("init-config")
@click.argument(
    "path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=".sharpscaffold.yml",
)
@click.option("--force", "-f", is_flag=True, help="Overwrite an existing file")
@click.pass_context
def init_config(ctx: click.Context, path: Path, force: bool) -> None:
    """Write a sample configuration file (YAML, or TOML for a .toml path)."""
    rich_cli: RichCliComponents = ctx.obj.rich_cli
    if path.exists() and not force:
        rich_cli.display_error(
            f"{path} already exists (use --force to overwrite)", "Init Failed"
        )
        sys.exit(1)

    try:
        created = ConfigLoader().create_sample_config(path)
    except ConfigurationError as e:
        rich_cli.display_error(str(e), "Init Failed")
        sys.exit(1)
    rich_cli.display_success(f"Configuration written to {created}", "Init Complete")


def main() -> None:
    """Console script entry point."""
    app(obj=ClickContext())


if __name__ == "__main__":
    main()
