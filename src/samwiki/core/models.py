"""Data models for Sam."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class PageMeta(BaseModel):
    """Metadata extracted from page front matter."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    tags: list[str] = Field(default_factory=list)
    draft: bool = False

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_tags(cls, value):
        if value is None:
            return []
        if isinstance(value, (str, int, float)):
            value = [value]
        # Blank and null entries are dropped
        return [str(v).strip() for v in value if v is not None and str(v).strip()]


class Page(BaseModel):
    """Represents one Markdown file of the wiki."""

    model_config = ConfigDict(frozen=True)

    name: str
    file_path: Path
    uri: str
    meta: PageMeta = Field(default_factory=PageMeta)

    def markdown(self) -> str:
        """Read the raw Markdown source from disk."""
        return self.file_path.read_bytes().decode("utf-8", errors="replace")


class Tag(BaseModel):
    """A tag and the pages carrying it, in scan order."""

    name: str
    pages: list[Page] = Field(default_factory=list)


class Link(BaseModel):
    """A named link rendered on tag listings."""

    name: str
    uri: str


class HistoryEntry(BaseModel):
    """One commit that touched a page."""

    model_config = ConfigDict(frozen=True)

    sha: str
    author_name: str
    author_email: str
    email_hash: str
    timestamp: datetime
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:7]
