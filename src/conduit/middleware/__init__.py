"""Reusable middleware for the Conduit router."""

from .cors import cors
from .flash import flash_middleware
from .layout import with_layout
from .logging import logging_middleware, simple_logger
from .static import static_files

__all__ = ["cors", "flash_middleware", "logging_middleware", "simple_logger", "static_files", "with_layout"]
