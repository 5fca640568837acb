"""Route registration for pages, tags and redirects.

All routes are collected in a ``RouteTable`` while the wiki starts up and
turned into a FastAPI router once registration is complete. Nothing is
added afterwards; picking up filesystem changes needs a restart.
"""

import logging
import posixpath
import re
from dataclasses import dataclass
from typing import Callable

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import TemplateError

from samwiki.config import Settings
from samwiki.core.errors import HistoryError, RenderError
from samwiki.core.models import Page, Tag
from samwiki.core.provider import HistoryProvider
from samwiki.core.renderer import render_page
from samwiki.core.tags import Tags, page_links

logger = logging.getLogger(__name__)

Endpoint = Callable[[Request], Response]


def join_url(base: str, *parts: str) -> str:
    """Join URL path segments under ``base`` and normalise the result."""
    joined = "/".join(p.strip("/") for p in (base, *parts) if p.strip("/"))
    return posixpath.normpath("/" + joined)


def alias_uri(page: Page) -> str:
    """The page URI with its last segment lowercased."""
    head, _, name = page.uri.rpartition("/")
    return f"{head}/{name.lower()}"


def server_error() -> Response:
    return PlainTextResponse("Internal server error", status_code=500)


class LiteralRoute(APIRoute):
    """Route matching its path verbatim.

    Page and tag names may contain braces, which Starlette would otherwise
    read as path parameters.
    """

    def __init__(self, path: str, endpoint: Endpoint, **kwargs):
        super().__init__(path.replace("{", "(").replace("}", ")"), endpoint, **kwargs)
        self.path = self.path_format = path
        self.path_regex = re.compile("^" + re.escape(path) + "$")
        self.param_convertors = {}


@dataclass
class _Route:
    endpoint: Endpoint
    alias: bool


class RouteTable:
    """Ordered map of request paths to GET endpoints."""

    def __init__(self) -> None:
        self._routes: dict[str, _Route] = {}

    def __contains__(self, path: str) -> bool:
        return path in self._routes

    def __len__(self) -> int:
        return len(self._routes)

    def paths(self) -> list[str]:
        return list(self._routes)

    def is_alias(self, path: str) -> bool:
        return self._routes[path].alias

    def add(self, path: str, endpoint: Endpoint) -> None:
        """Install a canonical route. A later one for the same path wins."""
        existing = self._routes.get(path)
        if existing is not None and not existing.alias:
            logger.warning("Route %s registered twice, replacing previous handler", path)
        self._routes[path] = _Route(endpoint, alias=False)

    def add_alias(self, path: str, endpoint: Endpoint) -> bool:
        """Install a redirect alias unless a canonical route holds the path."""
        existing = self._routes.get(path)
        if existing is not None and not existing.alias:
            return False
        self._routes[path] = _Route(endpoint, alias=True)
        return True

    def build(self) -> APIRouter:
        """Create the FastAPI router holding every registered route."""
        router = APIRouter()
        for path, route in self._routes.items():
            router.add_api_route(
                path,
                route.endpoint,
                methods=["GET"],
                response_class=HTMLResponse,
                include_in_schema=False,
                route_class_override=LiteralRoute,
            )
        return router


class WikiRegistry:
    """Installs page, tag and redirect routes into a ``RouteTable``."""

    def __init__(
        self,
        settings: Settings,
        templates: Jinja2Templates,
        history: HistoryProvider,
        table: RouteTable | None = None,
    ):
        self.settings = settings
        self.templates = templates
        self.history = history
        self.table = table or RouteTable()
        self.tags = Tags()

    @property
    def base(self) -> str:
        return self.settings.base

    @property
    def tags_uri(self) -> str:
        return join_url(self.base, "tags")

    def url(self, *parts: str) -> str:
        return join_url(self.base, *parts)

    def context(self, **kwargs) -> dict:
        """Create base context for templates."""
        return {
            "app_title": self.settings.app_title,
            "home_uri": self.url(self.settings.home),
            "tags_uri": self.tags_uri if len(self.tags) else None,
            **kwargs,
        }

    def _render(self, request: Request, template: str, label: str, **kwargs) -> Response:
        try:
            return self.templates.TemplateResponse(
                request, template, self.context(**kwargs)
            )
        except TemplateError:
            logger.exception("error execute template %s for %s", template, label)
            return server_error()

    # ========== Pages ==========

    def article(self, request: Request, page: Page) -> Response:
        try:
            html = render_page(page)
        except RenderError:
            logger.exception("error read HTML for %s", page.name)
            return server_error()
        return self._render(
            request, "article.html", page.name, title=page.name, page=page, content=html
        )

    def page_history(self, request: Request, page: Page) -> Response:
        try:
            history = self.history.history(page.file_path)
        except HistoryError:
            logger.exception("error read git history for %s", page.file_path)
            return server_error()
        return self._render(
            request,
            "history.html",
            page.name,
            title=f"History - {page.name}",
            page=page,
            history=history,
            page_uri=self.url(page.uri),
        )

    def page_endpoint(self, page: Page) -> Endpoint:
        def endpoint(request: Request) -> Response:
            if "history" in request.query_params:
                return self.page_history(request, page)
            return self.article(request, page)

        return endpoint

    def register_page(self, page: Page) -> None:
        """Install the canonical route and the lowercase redirect of a page."""
        canonical = self.url(page.uri)
        logger.info("Registering page %s", page.uri)
        self.table.add(canonical, self.page_endpoint(page))

        alias = self.url(alias_uri(page))
        if alias == canonical:
            return
        if not self.table.add_alias(alias, redirect_endpoint(canonical)):
            logger.debug("Alias %s shadowed by a page, skipped", alias)

    # ========== Tags ==========

    def tags_endpoint(self) -> Endpoint:
        def endpoint(request: Request) -> Response:
            return self._render(
                request,
                "tags.html",
                "tags",
                title="Tags",
                links=self.tags.links(self.tags_uri),
            )

        return endpoint

    def tag_endpoint(self, tag: Tag) -> Endpoint:
        def endpoint(request: Request) -> Response:
            return self._render(
                request,
                "tags.html",
                tag.name,
                title=tag.name,
                links=page_links(tag, self.base),
            )

        return endpoint

    def register_tags(self, pages: list[Page]) -> None:
        """Index page tags and install their routes, if there are any."""
        self.tags.index(pages)
        if not len(self.tags):
            return
        logger.info("Registering root for tags...")
        self.table.add(self.tags_uri, self.tags_endpoint())
        for tag in self.tags:
            logger.info("Registering tag %s...", tag.name)
            self.table.add(join_url(self.tags_uri, tag.name), self.tag_endpoint(tag))

    # ========== Redirects ==========

    def register_redirects(self, redirects: dict[str, str]) -> None:
        for src, dst in redirects.items():
            source, target = self.url(src), self.url(dst)
            logger.info("Registering redirect %s -> %s", source, target)
            self.table.add(source, redirect_endpoint(target))


def redirect_endpoint(target: str) -> Endpoint:
    """Endpoint answering with a permanent redirect to ``target``."""

    def endpoint(request: Request) -> Response:
        return RedirectResponse(url=target, status_code=301)

    return endpoint
