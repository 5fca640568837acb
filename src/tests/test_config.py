"""Unit tests for application configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from samwiki.config import Settings


class TestSettings:
    def test_defaults(self):
        with patch.dict("os.environ", {}, clear=True):
            s = Settings(_env_file=None)
            assert s.addr == "127.0.0.1:6250"
            assert s.dir == Path("./")
            assert s.base == "/"
            assert s.home == "Home"
            assert s.debug is False
            assert s.hide_drafts is False

    def test_from_env(self):
        env = {
            "SAM_ADDR": "0.0.0.0:8080",
            "SAM_DIR": "/tmp/wiki",
            "SAM_BASE": "/wiki",
            "SAM_DEBUG": "true",
        }
        with patch.dict("os.environ", env, clear=True):
            s = Settings(_env_file=None)
            assert s.addr == "0.0.0.0:8080"
            assert s.dir == Path("/tmp/wiki")
            assert s.base == "/wiki"
            assert s.debug is True

    def test_keyword_overrides_env(self):
        with patch.dict("os.environ", {"SAM_BASE": "/env"}, clear=True):
            s = Settings(_env_file=None, base="/flag")
            assert s.base == "/flag"


class TestDirExpansion:
    def test_tilde_expanded(self):
        s = Settings(_env_file=None, dir="~/notes")
        assert s.dir == Path.home() / "notes"

    def test_plain_path_untouched(self):
        s = Settings(_env_file=None, dir="notes/wiki")
        assert s.dir == Path("notes/wiki")


class TestBase:
    @pytest.mark.parametrize(
        "raw, expected",
        [("/", "/"), ("", "/"), ("wiki", "/wiki"), ("/wiki/", "/wiki"), ("/a/b", "/a/b")],
    )
    def test_normalized(self, raw, expected):
        assert Settings(_env_file=None, base=raw).base == expected


class TestAddr:
    def test_host_and_port(self):
        s = Settings(_env_file=None, addr="127.0.0.1:9000")
        assert s.host == "127.0.0.1"
        assert s.port == 9000

    def test_empty_host_binds_all(self):
        s = Settings(_env_file=None, addr=":9000")
        assert s.host == "0.0.0.0"

    def test_invalid_addr(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, addr="localhost")
