"""Serverless function serving ``/api/photos``.

The platform routes ``/api/photos`` here; the full FastAPI app handles it so
routing, CORS and error mapping match the standalone server.
"""

import sys
from pathlib import Path

_SRC_DIR = Path(__file__).resolve().parent.parent / "src"
if _SRC_DIR.is_dir() and str(_SRC_DIR) not in sys.path:
    sys.path.append(str(_SRC_DIR))

from photo_gallery.api.asgi import app  # noqa: E402

__all__ = ["app"]
