"""ASGI entrypoint for the dairy ledger API."""

from dairy_ledger.api.app import create_app
from dairy_ledger.containers import build_container

app = create_app(build_container())
