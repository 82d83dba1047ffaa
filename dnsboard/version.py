"""Version discovery for dnsboard"""

import os
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Optional

DEFAULT_VERSION = "dev"
VERSION_ENV = "DNSBOARD_VERSION"
VERSION_FILE = Path(__file__).resolve().parent.parent / "VERSION"


def _from_file(path: Path) -> Optional[str]:
    try:
        return path.read_text().strip() or None
    except OSError:
        return None


def _from_metadata() -> Optional[str]:
    try:
        return metadata.version("dnsboard")
    except metadata.PackageNotFoundError:
        return None


@lru_cache(maxsize=1)
def get_version() -> str:
    """
    Resolve the running version, first hit wins:
    DNSBOARD_VERSION, the VERSION file next to the package, the installed
    distribution's metadata, then "dev".
    """
    env_version = os.environ.get(VERSION_ENV, "").strip()
    return env_version or _from_file(VERSION_FILE) or _from_metadata() or DEFAULT_VERSION


def get_user_agent() -> str:
    """User-Agent header sent to the resolver API"""
    return f"dnsboard/{get_version()}"
