from __future__ import annotations

import asyncio
import json

import typer

from result_ingest.db.nosql.mongo.client import dispose_mongo, get_mongo_client
from result_ingest.db.nosql.repository import RECENT_LIMIT, ResultRepository
from result_ingest.documents import to_jsonable

app = typer.Typer(no_args_is_help=True, add_completion=False, help="result-ingest service tools")


@app.command("serve")
def serve(
        host: str = typer.Option("127.0.0.1", help="Bind address"),
        port: int = typer.Option(8000, help="Bind port"),
        reload: bool = typer.Option(False, help="Reload on code changes (development only)"),
):
    """Run the HTTP service with uvicorn."""
    import uvicorn

    uvicorn.run("result_ingest.main:app", host=host, port=port, reload=reload, log_config=None)


async def _recent(limit: int) -> list[dict]:
    try:
        return await ResultRepository().list_recent(limit)
    finally:
        await dispose_mongo()


@app.command("recent")
def recent(
        limit: int = typer.Option(RECENT_LIMIT, min=1, help="How many documents to print"),
):
    """Print the most recent stored documents as JSON, newest first."""
    documents = asyncio.run(_recent(limit))
    typer.echo(json.dumps(to_jsonable(documents), indent=2, ensure_ascii=False))


async def _ping() -> None:
    try:
        await get_mongo_client()
    finally:
        await dispose_mongo()


@app.command("ping")
def ping():
    """Check that MongoDB is reachable."""
    try:
        asyncio.run(_ping())
    except Exception as exc:
        typer.secho(f"MongoDB unreachable: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho("MongoDB reachable", fg=typer.colors.GREEN)


def main():
    app()


if __name__ == "__main__":
    main()
