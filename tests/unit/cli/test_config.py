"""Unit tests for the config commands."""

from pathlib import Path

from reclaim.cli.main import app
from reclaim.core.config import ReclaimConfig, load_config
from typer.testing import CliRunner

runner = CliRunner()


def _config_path(isolated_xdg: Path) -> Path:
    return isolated_xdg / "config" / "reclaim" / "config.toml"


class TestConfigInit:
    """Tests for reclaim config init."""

    def test_writes_defaults(self, isolated_xdg: Path) -> None:
        """init writes a default config file."""
        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0, result.output
        assert "Config written to" in result.output
        assert load_config(_config_path(isolated_xdg)) == ReclaimConfig()

    def test_keeps_existing(self, isolated_xdg: Path) -> None:
        """init does not overwrite without --force."""
        path = _config_path(isolated_xdg)
        path.parent.mkdir(parents=True)
        path.write_text("hash_workers = 9\n")

        result = runner.invoke(app, ["config", "init"])

        assert result.exit_code == 0
        assert "Config already exists" in result.output
        assert load_config(path).hash_workers == 9

    def test_force_overwrites(self, isolated_xdg: Path) -> None:
        """init --force resets the file to defaults."""
        path = _config_path(isolated_xdg)
        path.parent.mkdir(parents=True)
        path.write_text("hash_workers = 9\n")

        result = runner.invoke(app, ["config", "init", "--force"])

        assert result.exit_code == 0, result.output
        assert load_config(path).hash_workers == 4


class TestConfigShow:
    """Tests for reclaim config show."""

    def test_shows_settings(self) -> None:
        """show lists every setting."""
        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0, result.output
        assert "hash_workers" in result.output
        assert "wipe_limit_bytes" in result.output
        assert "1048576" in result.output

    def test_invalid_toml(self, isolated_xdg: Path) -> None:
        """A malformed config file is reported."""
        path = _config_path(isolated_xdg)
        path.parent.mkdir(parents=True)
        path.write_text("hash_workers = [")

        result = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 1
        assert "Invalid TOML syntax" in result.output
