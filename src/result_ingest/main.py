"""ASGI entrypoint: ``uvicorn result_ingest.main:app``."""

from result_ingest.api.fastapi import create_app
from result_ingest.app import setup_logging

setup_logging()

app = create_app()
