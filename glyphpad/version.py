from __future__ import annotations

import importlib.metadata


def get_version() -> str:
    """Installed distribution version, or "unknown" when running from a checkout."""
    try:
        return importlib.metadata.version("glyphpad")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    return f"glyphpad editor -- version {get_version()}"
