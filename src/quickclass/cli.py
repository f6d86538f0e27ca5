"""CLI entry point for Quick Class Selector."""

import asyncio
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from quickclass.config.loader import load_config
from quickclass.models.config import Config
from quickclass.services.backend import BackendGateway, create_backend
from quickclass.services.exceptions import QuickClassError
from quickclass.tui.widgets.class_row import render_swatch
from quickclass.utils.logging import configure_logging, get_logger
from quickclass.utils.text import render_changelog


logger = get_logger(__name__)
console = Console()


def _load_config(config_path: Optional[Path]) -> Config:
    """
    Load configuration, turning failures into click errors.

    Raises:
        click.ClickException: If the config file is malformed or invalid
    """
    try:
        config = load_config(config_path)
        logger.info("config_loaded", path=str(config_path) if config_path else "default")
        return config
    except Exception as e:
        logger.error("config_validation_error", error=str(e))
        raise click.ClickException(f"Configuration validation failed:\n{e}")


def _gateway(ctx: click.Context) -> tuple[Config, BackendGateway]:
    config = _load_config(ctx.obj.get("config_path"))
    return config, create_backend(config.backend)


def _load_classes(gateway: BackendGateway):
    try:
        return asyncio.run(gateway.load_initial())
    except QuickClassError as e:
        logger.error("initial_load_failed", error=str(e))
        raise click.ClickException(f"Could not load classes: {e}")


@click.group()
@click.version_option(version="1.2.0", prog_name="quickclass")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file (default: ~/.config/quickclass/config.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path]):
    """Quick Class Selector: curate predefined CSS classes and attach them to blocks."""
    configure_logging()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@cli.command()
@click.pass_context
def manage(ctx: click.Context):
    """Edit, reorder, import and save the predefined class list."""
    from quickclass.tui.app import QuickClassApp

    config, gateway = _gateway(ctx)
    classes = _load_classes(gateway)

    logger.info("manage_started", num_classes=len(classes))
    QuickClassApp(classes, config, gateway=gateway, mode="manage").run()


@cli.command()
@click.option("--classes", "class_string", default="", help="Current class string of the block")
@click.pass_context
def select(ctx: click.Context, class_string: str):
    """Pick predefined classes for a block and print the resulting class string."""
    from quickclass.tui.app import QuickClassApp

    config, gateway = _gateway(ctx)
    classes = _load_classes(gateway)

    result = QuickClassApp(
        classes,
        config,
        gateway=gateway,
        mode="select",
        class_string=class_string,
    ).run()

    # Quitting without confirming keeps the original value
    click.echo(class_string if result is None else result)


@cli.command(name="list")
@click.pass_context
def list_classes(ctx: click.Context):
    """Show the stored classes."""
    _, gateway = _gateway(ctx)
    classes = _load_classes(gateway)

    if not classes:
        console.print("[dim]No classes defined.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Class")
    table.add_column("", width=2)
    table.add_column("Description")

    for index, entry in enumerate(classes, start=1):
        table.add_row(
            str(index),
            Text(f".{entry.class_name}", style="bold"),
            render_swatch(entry.description),
            entry.description,
        )

    console.print(table)


@cli.command(name="import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.pass_context
def import_classes(ctx: click.Context, source):
    """Batch-import classes from a text file ('-' for stdin).

    One class per line: class<TAB>description (| ; or , also separate).
    """
    _, gateway = _gateway(ctx)
    raw_text = source.read()

    try:
        message, classes = asyncio.run(gateway.batch_import(raw_text))
    except QuickClassError as e:
        logger.error("cli_import_failed", error=str(e))
        raise click.ClickException(f"Import failed: {e}")

    logger.info("cli_import_succeeded", total=len(classes))
    click.echo(message or f"{len(classes)} classes stored")


@cli.command()
@click.argument("source", type=click.File("r", encoding="utf-8"))
def changelog(source):
    """Render release notes (markdown subset) to HTML."""
    click.echo(render_changelog(source.read()))


def main():
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
