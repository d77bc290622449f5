import logging
import sys
from pathlib import Path
from typing import Annotated, NoReturn

import cyclopts
from rich.console import Console
from rich.markup import escape
from rich.traceback import install as install_rich_traceback

from . import cache, config, flags, fonts
from .server import main as server

error_console = Console(stderr=True)
install_rich_traceback(console=error_console)

app = cyclopts.App(
    name="data-analyzer",
    help="Data Analyzer dashboard",
    error_console=error_console,
)

cache_app = cyclopts.App(name="cache", help="Manage the local font cache")
app.command(cache_app)


@app.default
@app.command(name="serve")
async def serve(
    *,
    server_flags: flags.ServerFlags = flags.ServerFlags(),
    no_cache: flags.NoCacheFlag = False,
    log_level: flags.LogLevelFlag = flags.DEFAULT_LOG_LEVEL,
) -> None:
    """Serve the dashboard"""
    _setup_logging(log_level)
    settings = _get_settings(server_flags)
    resolver = _get_font_resolver(no_cache)
    await _resolve_font(resolver)
    await server.serve(settings, resolver, log_level.lower())


@app.command(name="render")
async def render(
    *,
    output: Annotated[
        Path | None,
        cyclopts.Parameter(
            name=["--output", "-o"],
            help="File to write the page to. Defaults to stdout.",
        ),
    ] = None,
    no_cache: flags.NoCacheFlag = False,
    log_level: flags.LogLevelFlag = flags.DEFAULT_LOG_LEVEL,
) -> None:
    """Render the home page to static HTML"""
    _setup_logging(log_level)
    font = await _resolve_font(_get_font_resolver(no_cache))
    document = server.render_home(font)
    if output is None:
        sys.stdout.write(document)
    else:
        output.write_text(document, encoding="utf-8")
        Console().print(f"[green]Wrote[/green] {escape(str(output))}")


@cache_app.command(name="size")
def cache_size(
    *,
    log_level: flags.LogLevelFlag = flags.DEFAULT_LOG_LEVEL,
) -> None:
    """Show total font cache size"""
    _setup_logging(log_level)
    size_bytes = cache.DiskcacheCache().size()
    console = Console()
    if size_bytes < 1024:
        console.print(f"{size_bytes} B")
    elif size_bytes < 1024 * 1024:
        console.print(f"{size_bytes / 1024:.1f} KB")
    else:
        console.print(f"{size_bytes / (1024 * 1024):.1f} MB")


@cache_app.command(name="prune")
def cache_prune(
    *,
    log_level: flags.LogLevelFlag = flags.DEFAULT_LOG_LEVEL,
) -> None:
    """Proactively remove expired font stylesheets"""
    _setup_logging(log_level)
    removed = cache.DiskcacheCache().prune()
    Console().print(f"Pruned {removed} expired cache entries")


@cache_app.command(name="clear")
def cache_clear(
    *,
    log_level: flags.LogLevelFlag = flags.DEFAULT_LOG_LEVEL,
) -> None:
    """Clear all items from the font cache"""
    _setup_logging(log_level)
    cache_ = cache.DiskcacheCache()
    removed = cache_.clear()
    Console().print(
        f"Cleared {removed} entries from {escape(str(cache_.directory))}"
    )


def _setup_logging(log_level: str) -> None:
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s [%(name)s] %(message)s",
    )


def _fail(message: str) -> NoReturn:
    error_console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(1)


def _get_settings(server_flags: flags.ServerFlags) -> config.Settings:
    try:
        return config.get_settings(server_flags)
    except config.ConfigError as e:
        _fail(f"Invalid configuration: {escape(str(e))}")


async def _resolve_font(resolver: fonts.FontResolver) -> fonts.ResolvedFont:
    try:
        return await resolver.resolve(fonts.COURIER_PRIME)
    except fonts.FontError as e:
        _fail(f"Could not load font: {escape(str(e))}")


def _get_font_resolver(no_cache: bool) -> fonts.FontResolver:
    cache_: cache.Cache = cache.NullCache() if no_cache else cache.DiskcacheCache()
    return fonts.FontResolver(client=fonts.FontClient(), cache=cache_)


def main() -> None:
    app()
