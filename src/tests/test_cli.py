"""Unit tests for the command-line entry point."""

from pathlib import Path
from unittest.mock import patch

import pytest

from samwiki import cli


class TestLoadSettings:
    def test_flags_override_env(self):
        args = cli.build_parser().parse_args(["--addr", "0.0.0.0:9000", "--base", "/wiki"])
        with patch.dict("os.environ", {"SAM_ADDR": "1.2.3.4:1"}, clear=True):
            settings = cli.load_settings(args)
        assert settings.addr == "0.0.0.0:9000"
        assert settings.base == "/wiki"

    def test_env_used_without_flags(self):
        args = cli.build_parser().parse_args([])
        with patch.dict("os.environ", {"SAM_DIR": "/srv/wiki"}, clear=True):
            settings = cli.load_settings(args)
        assert settings.dir == Path("/srv/wiki")
        assert settings.debug is False

    def test_boolean_flags(self):
        args = cli.build_parser().parse_args(["--debug", "--hide-drafts"])
        with patch.dict("os.environ", {}, clear=True):
            settings = cli.load_settings(args)
        assert settings.debug is True
        assert settings.hide_drafts is True


class TestMain:
    def test_runs_uvicorn(self, tmp_path):
        (tmp_path / "Home.md").write_text("# Hi\n", encoding="utf-8")
        with patch.object(cli.uvicorn, "run") as run, patch.dict("os.environ", {}, clear=True):
            cli.main(["--dir", str(tmp_path), "--addr", "127.0.0.1:7000"])
        run.assert_called_once()
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 7000

    def test_startup_error_exits(self, tmp_path):
        with patch.object(cli.uvicorn, "run") as run, patch.dict("os.environ", {}, clear=True):
            with pytest.raises(SystemExit) as exc:
                cli.main(["--dir", str(tmp_path / "missing")])
        assert exc.value.code == 1
        run.assert_not_called()

    def test_invalid_addr_exits(self):
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(SystemExit) as exc:
                cli.main(["--addr", "nope"])
        assert exc.value.code == 2
