"""Front-matter extraction for wiki pages."""

from typing import Iterable

import yaml
from pydantic import ValidationError

from samwiki.core.errors import MetadataError, MetadataNotFound
from samwiki.core.models import PageMeta

DELIMITER = "---"


def read_meta(lines: Iterable[str]) -> list[str]:
    """Collect the lines of the front-matter block at the top of a file.

    Blank lines before the opening delimiter are skipped. Everything up to
    the closing delimiter is returned verbatim, delimiters excluded.

    Raises:
        MetadataNotFound: the first non-blank line is not ``---``, or the
            block is never closed.
        OSError: reading the stream failed.
    """
    found = False
    meta: list[str] = []
    for raw in lines:
        line = raw.rstrip("\r\n")
        if not found:
            if line == "":
                continue
            if line == DELIMITER:
                found = True
                continue
            raise MetadataNotFound("first line is not a front-matter delimiter")
        if line == DELIMITER:
            return meta
        meta.append(line)
    raise MetadataNotFound("front-matter block not found")


def parse_meta(lines: list[str]) -> PageMeta:
    """Parse front-matter lines into ``PageMeta``."""
    try:
        data = yaml.safe_load("\n".join(lines))
    except yaml.YAMLError as e:
        raise MetadataError(f"invalid YAML: {e}") from e
    if data is None:
        return PageMeta()
    if not isinstance(data, dict):
        raise MetadataError("front matter must be a mapping")
    try:
        return PageMeta(**{str(k): v for k, v in data.items()})
    except ValidationError as e:
        raise MetadataError(str(e)) from e


def split_front_matter(text: str) -> tuple[list[str] | None, str]:
    """Separate a closed front-matter block from the document body.

    Returns ``(meta_lines, body)``; ``meta_lines`` is None when the text
    carries no front matter, in which case body is the text unchanged.
    """
    lines = text.splitlines(keepends=True)
    start = 0
    while start < len(lines) and lines[start].strip("\r\n") == "":
        start += 1
    if start == len(lines) or lines[start].rstrip("\r\n") != DELIMITER:
        return None, text
    for end in range(start + 1, len(lines)):
        if lines[end].rstrip("\r\n") == DELIMITER:
            meta = [line.rstrip("\r\n") for line in lines[start + 1 : end]]
            return meta, "".join(lines[end + 1 :])
    return None, text
