"""Sam FastAPI application."""

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from samwiki.config import Settings
from samwiki.core.errors import ScanError
from samwiki.core.provider import HistoryProvider
from samwiki.core.redirects import load_redirects
from samwiki.core.registry import WikiRegistry, join_url, redirect_endpoint
from samwiki.core.scanner import read_dir

logger = logging.getLogger(__name__)

templates_path = Path(__file__).parent / "templates"
assets_path = Path(__file__).parent / "assets"
favicon_path = assets_path / "images" / "favicon.ico"


def create_templates(root: Path) -> Jinja2Templates:
    """Templates from ``<root>/templates`` override the packaged ones."""
    directories = [templates_path]
    custom = root / "templates"
    if custom.is_dir():
        logger.info("Custom templates found in %s", custom)
        directories.insert(0, custom)
    return Jinja2Templates(directory=directories)


def create_app(
    settings: Settings | None = None,
    history: HistoryProvider | None = None,
) -> FastAPI:
    """Scan the wiki and build an application serving it.

    Every route is installed here, before the server accepts a connection.

    Raises:
        WikiError: the wiki root, a page or ``redirects.conf`` could not
            be read.
    """
    settings = settings or Settings()
    root = settings.dir
    logger.info("Starting %s...", settings.app_title)

    if not root.is_dir():
        raise ScanError(f"Error opening {root}: not a directory")

    app = FastAPI(
        title=settings.app_title,
        debug=settings.debug,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        client = request.client.host if request.client else "-"
        logger.info("%s %s %s", client, request.method, request.url)
        return await call_next(request)

    home = join_url(settings.base, settings.home)

    @app.get("/", include_in_schema=False)
    def index():
        return RedirectResponse(url=home, status_code=301)

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon():
        return FileResponse(favicon_path, media_type="image/x-icon")

    logger.info("Register assets handler")
    app.mount("/assets", StaticFiles(directory=assets_path), name="assets")

    if history is None:
        from samwiki.core.history import GitHistoryProvider

        history = GitHistoryProvider()

    registry = WikiRegistry(settings, create_templates(root), history)
    if settings.base != "/":
        registry.table.add(settings.base, redirect_endpoint(home))

    registry.register_redirects(load_redirects(root))

    logger.info("Reading directory %s...", root)
    pages = read_dir(root)
    logger.info("Found %d pages", len(pages))
    if settings.hide_drafts:
        pages = [p for p in pages if not p.meta.draft]

    logger.info("Registering pages...")
    for page in pages:
        registry.register_page(page)
    logger.info("Registering tags...")
    registry.register_tags(pages)

    app.include_router(registry.table.build())
    app.state.registry = registry

    static_dir = root / "static"
    if static_dir.is_dir():
        logger.info("Serving static files from %s", static_dir)
        app.mount("/", StaticFiles(directory=static_dir), name="static")

    return app
