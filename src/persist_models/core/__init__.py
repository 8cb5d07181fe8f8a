"""
Core persist-models functionality: IR, parser, errors, manifest and loader.
"""

from .errors import (
    ConfigError,
    IntegerLiteralError,
    MarkerNotFoundError,
    ParseError,
    PersistModelsError,
    StructuralMismatchError,
    UnterminatedLineError,
)
from .parser_impl import parse_embedded_models_block, parse_models_file

__all__ = [
    "ConfigError",
    "IntegerLiteralError",
    "MarkerNotFoundError",
    "ParseError",
    "PersistModelsError",
    "StructuralMismatchError",
    "UnterminatedLineError",
    "parse_embedded_models_block",
    "parse_models_file",
]
