"""
Lossless line tokens for the persist-models IR.

Blank lines and comment lines are kept in the tree so the item sequence
accounts for every source line; their text is opaque.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class WhiteSpaceLine(BaseModel):
    """A blank or whitespace-only line, stored with a trailing newline."""

    kind: Literal["whitespace"] = "whitespace"
    text: str

    model_config = ConfigDict(frozen=True)


class CommentLine(BaseModel):
    """A ``--`` comment line, stored with its marker and a trailing newline."""

    kind: Literal["comment"] = "comment"
    text: str

    model_config = ConfigDict(frozen=True)
