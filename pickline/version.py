from __future__ import annotations

import importlib.metadata


def get_version() -> str:
    try:
        return importlib.metadata.version("pickline")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_version_string() -> str:
    return f"pickline {get_version()}"
