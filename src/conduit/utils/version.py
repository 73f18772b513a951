"""Version utility module for Conduit."""

from importlib.metadata import PackageNotFoundError, version

from loguru import logger
from pydantic import BaseModel

DEV_VERSION = "0.1.0-dev"


class VersionInfo(BaseModel):
    """Version information model."""

    name: str
    version: str


def get_version() -> VersionInfo:
    """Get the installed package version with a fallback for source checkouts.

    Returns:
        VersionInfo model containing the distribution name and version string
    """
    try:
        installed = version("conduit")
    except PackageNotFoundError:
        logger.debug(f"Package metadata not found, using {DEV_VERSION}")
        installed = DEV_VERSION

    return VersionInfo(name="conduit", version=installed)
