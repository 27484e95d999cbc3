"""runstream API module.

Provides:
- FastAPI application (app, create_app)
- Routers (threads_router)
"""

from runstream.api.main import app, create_app
from runstream.api.routers.threads import init_threads

__all__ = [
    "app",
    "create_app",
    "init_threads",
]
