"""Reading navigation and progress engine for the shelfkeeper library server."""

from .environment import load_environment

# Load environment variables from .env-style files as soon as the package is
# imported so DATABASE_URL and friends are visible to every entry point.
load_environment()

__all__ = ["load_environment"]
