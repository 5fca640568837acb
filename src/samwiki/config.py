"""Application configuration."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Command-line flags are applied on top by passing them as keyword
    arguments, which pydantic-settings gives priority over the environment.
    """

    addr: str = "127.0.0.1:6250"
    dir: Path = Path("./")
    base: str = "/"
    home: str = "Home"
    debug: bool = False
    hide_drafts: bool = False
    app_title: str = "Sam"

    model_config = SettingsConfigDict(
        env_prefix="SAM_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @field_validator("dir", mode="before")
    @classmethod
    def expand_home(cls, value):
        """Expand a leading ``~/`` to the user's home directory."""
        text = str(value)
        if text.startswith("~/"):
            return Path.home() / text[2:]
        return value

    @field_validator("base")
    @classmethod
    def normalize_base(cls, value: str) -> str:
        """Base prefix always starts with ``/`` and never ends with one."""
        value = "/" + value.strip().strip("/")
        return value

    @field_validator("addr")
    @classmethod
    def check_addr(cls, value: str) -> str:
        _, sep, port = value.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"listen address must be host:port, got {value!r}")
        return value

    @property
    def host(self) -> str:
        host = self.addr.rpartition(":")[0].strip("[]")
        return host or "0.0.0.0"

    @property
    def port(self) -> int:
        return int(self.addr.rpartition(":")[2])
