"""Tests for the command-line interface."""

import io
import json

import pytest

import tinylink.cli as cli_module
from tinylink.cli import TinyLinkCLI, build_parser, main
from tinylink.database import InMemoryLinkStore
from tinylink.errors import StorageError


@pytest.fixture
def cli():
    cli = TinyLinkCLI(db_url="memory://", out=io.StringIO(), err=io.StringIO())
    return cli


def _output(stream):
    return json.loads(stream.getvalue())


class TestCLI:
    """Each command runs against an in-memory store."""

    async def test_shorten(self, cli):
        await cli.initialize()

        assert await cli.shorten("example.com", "mylink1") == 0

        data = _output(cli.out)
        assert data["success"] is True
        assert data["code"] == "mylink1"
        assert data["url"] == "https://example.com"

    async def test_shorten_then_get_and_list(self, cli):
        await cli.initialize()
        await cli.service.create_link("https://example.com", "abcdef")

        assert await cli.get("abcdef") == 0
        assert _output(cli.out)["clicks"] == 0

        cli.out = io.StringIO()
        assert await cli.list_links() == 0
        assert _output(cli.out)["count"] == 1

    async def test_delete(self, cli):
        await cli.initialize()
        await cli.service.create_link("https://example.com", "abcdef")

        assert await cli.delete("abcdef") == 0
        assert await cli.store.get_link("abcdef") is None

    async def test_run_reports_errors(self, cli):
        args = build_parser().parse_args(["--db-url", "memory://", "get", "nothere"])

        assert await cli.run(args) == 1
        assert _output(cli.err) == {"success": False, "error": "Not found"}

    async def test_run_invalid_url(self, cli):
        args = build_parser().parse_args(["--db-url", "memory://", "shorten", "http"])

        assert await cli.run(args) == 1
        assert _output(cli.err)["error"] == "Invalid URL"

    async def test_init_db_noop_for_memory(self, cli):
        args = build_parser().parse_args(["--db-url", "memory://", "init-db"])

        assert await cli.run(args) == 0
        assert _output(cli.out)["success"] is True


def test_main_without_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_main_shorten(capsys):
    assert main(["--db-url", "memory://", "shorten", "https://example.com/x"]) == 0
    assert json.loads(capsys.readouterr().out)["url"] == "https://example.com/x"


async def test_run_unsupported_db_url():
    cli = TinyLinkCLI(db_url="mysql://localhost/db", out=io.StringIO(), err=io.StringIO())
    args = build_parser().parse_args(["--db-url", "mysql://localhost/db", "list"])

    assert await cli.run(args) == 1
    assert "Unsupported" in _output(cli.err)["error"]


async def test_run_closes_store_when_connect_fails(cli, monkeypatch):
    closed = []

    class UnreachableStore(InMemoryLinkStore):
        async def connect(self):
            raise StorageError("connection refused")

        async def close(self):
            closed.append(True)

    monkeypatch.setattr(cli_module, "create_store", lambda *args, **kwargs: UnreachableStore())

    assert await cli.run(build_parser().parse_args(["list"])) == 1
    assert _output(cli.err)["error"] == "connection refused"
    assert closed == [True]
