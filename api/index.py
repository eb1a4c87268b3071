"""Serverless handler exposing the dairy ledger ASGI app."""

import sys
from pathlib import Path

_SRC = Path(__file__).resolve().parent.parent / "src"
if _SRC.is_dir() and str(_SRC) not in sys.path:
    sys.path.append(str(_SRC))

from dairy_ledger.api.app import create_app  # noqa: E402
from dairy_ledger.containers import build_container  # noqa: E402

app = create_app(build_container())
