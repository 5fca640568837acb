"""Exceptions raised while building and serving the wiki."""


class WikiError(Exception):
    """Base class for wiki errors."""


class MetadataNotFound(WikiError):
    """The file has no front-matter block. Callers use empty metadata."""


class MetadataError(WikiError):
    """A front-matter block exists but cannot be parsed."""


class ScanError(WikiError):
    """A directory or page file could not be read during the scan."""


class RedirectsError(WikiError):
    """``redirects.conf`` could not be read or decoded."""


class TagAlreadyExists(WikiError):
    """Raised by ``Tags.add`` for a name that is already indexed."""


class TagNotFound(WikiError):
    """Raised by ``Tags.update`` for a name that was never added."""


class RenderError(WikiError):
    """A page could not be read or converted to HTML."""


class HistoryError(WikiError):
    """The repository could not be opened or its log could not be read."""
