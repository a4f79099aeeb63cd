"""
alternative-finder CLI - drive the scanner workflow from a terminal.
"""

import asyncio
import base64
import mimetypes
from functools import wraps
from pathlib import Path

import click

from alternative_finder.client.controller import ScannerController
from alternative_finder.client.notify import Notifier
from alternative_finder.core.config import settings
from alternative_finder.core.logs import configure_logging

_NOTICE_COLORS = {"info": "blue", "success": "green", "error": "red"}


def coro(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))

    return wrapper


def image_to_data_url(path: Path) -> str:
    """Encode a file the way a webcam screenshot arrives: a base64 data URL."""
    mime = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    return f"data:{mime};base64,{base64.b64encode(path.read_bytes()).decode('ascii')}"


def echo_notices(notifier: Notifier) -> None:
    for notice in notifier.notices:
        click.secho(f"[{notice.level}] {notice.message}", fg=_NOTICE_COLORS.get(notice.level))


def echo_catalog(controller: ScannerController) -> None:
    view = controller.render()
    click.secho(view.savings, fg="green", bold=True)
    for card in view.cards:
        click.echo(f"- {card.name} ({card.price}) [{card.badge}]")
        if card.description:
            click.echo(f"    {card.description}")


@click.group()
@click.option("--debug", is_flag=True, help="Enable verbose logging", default=False)
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """AlternativeFinder - spot American products, find local alternatives."""
    configure_logging("DEBUG" if debug else settings.LOG_LEVEL)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@coro
async def catalog():
    """Load the product catalog and print it."""
    notifier = Notifier()
    controller = ScannerController.from_settings(settings, notifier=notifier)
    await controller.load_catalog()
    echo_notices(notifier)
    echo_catalog(controller)


@cli.command()
@click.argument("image_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@coro
async def scan(image_path: Path):
    """Scan IMAGE_PATH as if it had been captured by the camera."""
    notifier = Notifier()
    controller = ScannerController.from_settings(settings, notifier=notifier)
    await controller.load_catalog()

    controller.open_camera()
    controller.camera_ready()
    await controller.capture(image_to_data_url(image_path))

    echo_notices(notifier)
    click.echo(f"state: {controller.phase.value}")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
@click.option("--reload", is_flag=True, default=False)
def serve(host: str, port: int, reload: bool):
    """Run the detect-product service."""
    import uvicorn

    uvicorn.run("alternative_finder.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
