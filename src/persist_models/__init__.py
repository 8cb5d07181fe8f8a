"""
persist-models - parser for persistent entity model definitions.

Turns model definition files, or model blocks embedded in host source files,
into an immutable, order-preserving AST.
"""

from __future__ import annotations

import re
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import ConfigError, ParseError, PersistModelsError
from .core.parser_impl import parse_embedded_models_block, parse_models_file


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    # In editable mode, read directly from pyproject.toml for live updates
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    # Fall back to installed metadata
    try:
        return _metadata_version("persist-models")
    except Exception:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "ConfigError",
    "ParseError",
    "PersistModelsError",
    "parse_embedded_models_block",
    "parse_models_file",
]
