"""In-memory tag index built from page front matter."""

from samwiki.core.errors import TagAlreadyExists, TagNotFound
from samwiki.core.models import Link, Page, Tag


class Tags:
    """Registry mapping tag names to the pages carrying them.

    Written once during startup and read-only afterwards. Tags keep their
    insertion order, and so do the pages of each tag.
    """

    def __init__(self) -> None:
        self._tags: dict[str, Tag] = {}

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self):
        return iter(self._tags.values())

    def __contains__(self, name: str) -> bool:
        return name in self._tags

    def add(self, name: str) -> Tag:
        """Add an empty tag. Raises TagAlreadyExists for a known name."""
        if name in self._tags:
            raise TagAlreadyExists(f"tag {name} already exists")
        tag = Tag(name=name)
        self._tags[name] = tag
        return tag

    def get(self, name: str) -> Tag | None:
        """Get a tag by name. Returns None if not found."""
        return self._tags.get(name)

    def update(self, name: str, page: Page) -> None:
        """Append a page to a tag. Raises TagNotFound if never added."""
        tag = self.get(name)
        if tag is None:
            raise TagNotFound(f"tag {name} not found")
        tag.pages.append(page)

    def index(self, pages: list[Page]) -> None:
        """Index every tag of every page, in page order."""
        for page in pages:
            for name in page.meta.tags:
                if name not in self:
                    self.add(name)
                self.update(name, page)

    def links(self, tags_uri: str) -> list[Link]:
        """Links to each tag page under ``tags_uri``."""
        return [Link(name=t.name, uri=f"{tags_uri}/{t.name}") for t in self]


def page_links(tag: Tag, base: str) -> list[Link]:
    """Links to the pages of one tag."""
    prefix = "" if base == "/" else base
    return [Link(name=p.name, uri=prefix + p.uri) for p in tag.pages]
