"""Unit tests for the merkledag CLI."""

import hashlib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from merkledag.cli.main import app
from merkledag.constants import STORE_ENV_VAR

runner = CliRunner()


@pytest.fixture
def cli_store(tmp_path: Path) -> Path:
    store = tmp_path / "store"
    result = runner.invoke(app, ["init", "--store", str(store), "--quiet"])
    assert result.exit_code == 0
    return store


class TestInitCommand:
    def test_init_creates_layout(self, tmp_path: Path) -> None:
        store = tmp_path / "store"
        result = runner.invoke(app, ["init", "--store", str(store)])

        assert result.exit_code == 0
        assert (store / "objects").is_dir()
        assert "Initialized" in result.output

    def test_init_quiet(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["init", "--store", str(tmp_path / "s"), "-q"])
        assert result.exit_code == 0
        assert result.output == ""

    def test_init_twice(self, cli_store: Path) -> None:
        result = runner.invoke(app, ["init", "--store", str(cli_store), "-q"])
        assert result.exit_code == 0


class TestAddCommand:
    def test_add_file_prints_digest(self, cli_store: Path, tmp_path: Path) -> None:
        target = tmp_path / "hello.txt"
        target.write_bytes(b"hello")

        result = runner.invoke(app, ["add", str(target), "--store", str(cli_store)])

        assert result.exit_code == 0
        assert result.stdout.strip() == hashlib.sha256(b"hello").hexdigest()

    def test_add_directory(self, cli_store: Path, sample_tree: Path) -> None:
        result = runner.invoke(app, ["add", str(sample_tree), "--store", str(cli_store)])
        assert result.exit_code == 0
        assert len(result.stdout.strip()) == 64

    def test_add_missing_path(self, cli_store: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["add", str(tmp_path / "nope"), "--store", str(cli_store)])
        assert result.exit_code == 1
        assert "Path not found" in result.output

    def test_add_without_store(self, tmp_path: Path, sample_tree: Path) -> None:
        result = runner.invoke(app, ["add", str(sample_tree), "--store", str(tmp_path / "none")])
        assert result.exit_code == 1
        assert "Not a merkledag store" in result.output

    def test_errors_go_to_stderr(self, tmp_path: Path, sample_tree: Path) -> None:
        result = runner.invoke(app, ["add", str(sample_tree), "--store", str(tmp_path / "none")])
        assert result.exit_code == 1
        assert "Not a merkledag store" in result.stderr
        assert result.stdout == ""

    def test_store_from_environment(self, cli_store: Path, sample_tree: Path) -> None:
        result = runner.invoke(app, ["add", str(sample_tree)], env={STORE_ENV_VAR: str(cli_store)})
        assert result.exit_code == 0

    def test_add_verbose(self, cli_store: Path, sample_tree: Path) -> None:
        result = runner.invoke(app, ["add", str(sample_tree), "--store", str(cli_store), "-v"])
        assert result.exit_code == 0
        assert len(result.stdout.strip()) == 64


class TestCatCommand:
    @pytest.fixture
    def root(self, cli_store: Path, sample_tree: Path) -> str:
        result = runner.invoke(app, ["add", str(sample_tree), "--store", str(cli_store)])
        return result.stdout.strip()

    def test_cat_file(self, cli_store: Path, root: str) -> None:
        result = runner.invoke(app, ["cat", root, "a.txt", "--store", str(cli_store)])
        assert result.exit_code == 0
        assert result.stdout_bytes == b"hello"

    def test_cat_nested(self, cli_store: Path, root: str) -> None:
        result = runner.invoke(app, ["cat", root, "docs/readme.md", "--store", str(cli_store)])
        assert result.exit_code == 0
        assert result.stdout_bytes == b"# readme\n"

    def test_cat_missing(self, cli_store: Path, root: str) -> None:
        result = runner.invoke(app, ["cat", root, "missing", "--store", str(cli_store)])
        assert result.exit_code == 1
        assert "Not found" in result.output
        assert result.stdout_bytes == b""

    def test_cat_bad_digest(self, cli_store: Path) -> None:
        result = runner.invoke(app, ["cat", "xyz", "a.txt", "--store", str(cli_store)])
        assert result.exit_code == 1
        assert "64 hex characters" in result.output

    def test_cat_non_hex_digest(self, cli_store: Path) -> None:
        result = runner.invoke(app, ["cat", "g" * 64, "a.txt", "--store", str(cli_store)])
        assert result.exit_code == 1
        assert "not hexadecimal" in result.output

    def test_cat_unknown_root(self, cli_store: Path) -> None:
        result = runner.invoke(app, ["cat", "ab" * 32, "a.txt", "--store", str(cli_store)])
        assert result.exit_code == 1
        assert "Blob not found" in result.output

    def test_cat_under_file(self, cli_store: Path, root: str) -> None:
        result = runner.invoke(app, ["cat", root, "a.txt/x", "--store", str(cli_store)])
        assert result.exit_code == 3
        assert "Failed to decode tree" in result.stderr
        assert result.stdout == ""


class TestLsCommand:
    def test_ls(self, cli_store: Path, sample_tree: Path) -> None:
        root = runner.invoke(app, ["add", str(sample_tree), "--store", str(cli_store)]).stdout.strip()
        result = runner.invoke(app, ["ls", root, "--store", str(cli_store)])

        assert result.exit_code == 0
        assert "a.txt" in result.output
        assert "docs" in result.output


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output
