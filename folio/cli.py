"""CLI commands for Folio."""

import click

from folio.lib.colors import decode_hex, decode_rgba, parse_packed
from folio.lib.resolver import MediaKind, resolve


@click.group()
@click.version_option(package_name="folio")
def cli():
    """Folio - portfolio asset resolution and delivery."""
    pass


@cli.command()
@click.option("--host", default="127.0.0.1", help="Host to bind to")
@click.option("--port", default=3001, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, help="Number of worker processes")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Logging level",
)
def serve(host, port, reload, workers, log_level):
    """Run the asset proxy server."""
    import asyncio
    import signal

    from hypercorn.asyncio import serve as hypercorn_serve
    from hypercorn.config import Config

    config = Config()
    config.application_path = "folio.asgi:app"
    config.bind = [f"{host}:{port}"]
    config.workers = 1 if reload else workers
    config.loglevel = log_level.upper()
    config.include_server_header = False

    if reload:
        config.use_reloader = True
        from hypercorn.run import run
        run(config)
        return

    from folio.asgi import app

    shutdown_event = asyncio.Event()

    loop = asyncio.new_event_loop()
    loop.add_signal_handler(signal.SIGINT, shutdown_event.set)
    loop.add_signal_handler(signal.SIGTERM, shutdown_event.set)
    try:
        loop.run_until_complete(
            hypercorn_serve(app, config, shutdown_trigger=shutdown_event.wait)
        )
    finally:
        loop.close()


@cli.command(name="resolve")
@click.argument("identifier")
@click.option(
    "--kind",
    default=MediaKind.IMAGE.value,
    type=click.Choice([kind.value for kind in MediaKind]),
    help="Media kind of the asset",
)
def resolve_command(identifier, kind):
    """Print the candidate URLs for IDENTIFIER, best first."""
    from folio.config import get_settings

    templates = get_settings().upstream.url_templates()
    candidates = resolve(identifier, MediaKind(kind), templates)
    if not candidates:
        click.echo("No asset.", err=True)
        raise SystemExit(1)
    for url in candidates:
        click.echo(url)


@cli.command()
@click.argument("packed")
def color(packed):
    """Decode a PACKED ARGB color (decimal or 0x hex)."""
    try:
        value = parse_packed(packed)
    except ValueError:
        raise click.BadParameter(f"Not a packed color: {packed}", param_hint="PACKED")
    click.echo(decode_hex(value))
    click.echo(decode_rgba(value))


if __name__ == "__main__":
    cli()
