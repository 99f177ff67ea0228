from __future__ import annotations

import json
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError
from typer.testing import CliRunner

from result_ingest.cli import app as cli_app

runner = CliRunner()


def test_root_help_shows_commands():
    result = runner.invoke(cli_app, ["--help"])

    assert result.exit_code == 0
    for command in ("serve", "recent", "ping"):
        assert command in result.stdout


def test_serve_runs_uvicorn(mocker):
    run = mocker.patch("uvicorn.run")

    result = runner.invoke(cli_app, ["serve", "--host", "0.0.0.0", "--port", "9000"])

    assert result.exit_code == 0
    run.assert_called_once_with(
        "result_ingest.main:app", host="0.0.0.0", port=9000, reload=False, log_config=None
    )


def test_recent_prints_json(mocker):
    oid = ObjectId()
    created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    repo_cls = mocker.patch("result_ingest.cli.ResultRepository")
    repo_cls.return_value.list_recent = AsyncMock(
        return_value=[{"_id": oid, "project": "alpha", "createdAt": created}]
    )

    result = runner.invoke(cli_app, ["recent", "--limit", "3"])

    assert result.exit_code == 0
    assert json.loads(result.stdout) == [
        {"_id": str(oid), "project": "alpha", "createdAt": created.isoformat()}
    ]
    repo_cls.return_value.list_recent.assert_awaited_once_with(3)


def test_ping_ok(mocker):
    mocker.patch("result_ingest.cli.get_mongo_client", AsyncMock())

    result = runner.invoke(cli_app, ["ping"])

    assert result.exit_code == 0
    assert "MongoDB reachable" in result.output


def test_ping_unreachable(mocker):
    mocker.patch(
        "result_ingest.cli.get_mongo_client",
        AsyncMock(side_effect=ServerSelectionTimeoutError("no servers")),
    )

    result = runner.invoke(cli_app, ["ping"])

    assert result.exit_code == 1
    assert "MongoDB unreachable: no servers" in result.output
