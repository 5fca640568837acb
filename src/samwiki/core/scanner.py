"""Directory scanner building the page set of a wiki."""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator

from samwiki.core.errors import MetadataError, MetadataNotFound, ScanError
from samwiki.core.metadata import parse_meta, read_meta
from samwiki.core.models import Page, PageMeta

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


def page_uri(root: Path, path: Path) -> str:
    """Return the route key of a page: its path under root, without extension.

    ``/home/wiki/docs/Setup.md`` under ``/home/wiki`` gives ``/docs/Setup``.
    """
    relative = path.relative_to(root).with_suffix("")
    return "/" + relative.as_posix()


def decode_lines(stream: Iterable[bytes]) -> Iterator[str]:
    """Decode raw lines as UTF-8, replacing undecodable bytes."""
    for line in stream:
        yield line.decode("utf-8", errors="replace")


def load_page(root: Path, path: Path) -> Page:
    """Create a Page for one Markdown file, reading its front matter."""
    try:
        with path.open("rb") as fp:
            lines = read_meta(decode_lines(fp))
    except MetadataNotFound:
        logger.warning("Metadata for %s not found", path.name)
        meta = PageMeta()
    except OSError as e:
        raise ScanError(f"Error reading {path}: {e}") from e
    else:
        try:
            meta = parse_meta(lines)
        except MetadataError as e:
            raise ScanError(f"Error reading meta for {path}: {e}") from e

    return Page(name=path.stem, file_path=path, uri=page_uri(root, path), meta=meta)


def read_dir(root: Path, directory: Path | None = None) -> list[Page]:
    """Recursively collect a Page for every Markdown file below ``root``.

    Entries are visited in name order so the result is stable for an
    unchanged tree. Any unreadable directory or file aborts the scan.
    """
    directory = root if directory is None else directory
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise ScanError(f"Error opening {directory}: {e}") from e

    pages: list[Page] = []
    for entry in entries:
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            raise ScanError(f"Error reading {path}: {e}") from e
        if is_dir:
            pages.extend(read_dir(root, path))
            continue
        if path.suffix == MARKDOWN_SUFFIX:
            pages.append(load_page(root, path))
    return pages
