import contextlib
import logging
import pathlib
import webbrowser

import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from .. import config, fonts
from .components.layout import layout
from .pages.home import home

logger = logging.getLogger(__name__)

STATIC_DIR = pathlib.Path(__file__).parent / "static"


def render_home(font: fonts.ResolvedFont) -> str:
    return str(layout(font=font)[home()])


async def home_page(request: Request) -> HTMLResponse:
    return HTMLResponse(render_home(request.app.state.font))


def create_app(
    settings: config.Settings, font_resolver: fonts.FontResolver
) -> Starlette:
    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        # Fatal on failure: the dashboard is never served without its font.
        app.state.font = await font_resolver.resolve(fonts.COURIER_PRIME)
        logger.info(
            "Resolved font %s as .%s",
            fonts.COURIER_PRIME.family,
            app.state.font.class_name,
        )
        yield

    return Starlette(
        debug=settings.debug,
        routes=[
            Route("/", home_page),
            Mount("/static", app=StaticFiles(directory=STATIC_DIR), name="static"),
        ],
        lifespan=lifespan,
    )


async def serve(
    settings: config.Settings,
    font_resolver: fonts.FontResolver,
    log_level: str,
) -> None:
    app = create_app(settings, font_resolver)
    server = uvicorn.Server(
        uvicorn.Config(
            app, host=settings.host, port=settings.port, log_level=log_level
        )
    )
    if settings.open_browser:
        webbrowser.open(settings.url)
    logger.info("Serving on %s", settings.url)
    await server.serve()
