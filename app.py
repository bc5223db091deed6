"""
App assembly entry point.

Re-exports the FastAPI `app` from `grc.api.main` so `uvicorn app:app` works
from the repository root.
"""

from grc.api.main import app  # noqa: F401
