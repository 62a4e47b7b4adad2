from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ContextKind(Enum):
    """Syntactic contexts a completion request can be in."""

    BLOCK_START = "block_start"         # prefix ends with "{-", "{:" or "{<"
    PATH = "path"                       # {- include "...   /   {- extends "...
    DOT_ACCESS = "dot_access"           # site.param.   inside an open block
    COMMAND_BODY = "command_body"       # inside {- ... (not yet closed)
    EXPRESSION_BODY = "expression_body" # inside {: ... (not yet closed)
    SHORTCODE = "shortcode"             # inside {< ... or {</ ...


# Opener characters following "{"
COMMAND_OPENER = "-"
EXPRESSION_OPENER = ":"
SHORTCODE_OPENER = "<"

BLOCK_OPENERS = (COMMAND_OPENER, EXPRESSION_OPENER, SHORTCODE_OPENER)


@dataclass(frozen=True)
class LineContext:
    """
    Every context kind matched by a line prefix.

    Several kinds commonly coexist: a prefix that is exactly "{-" is both
    BLOCK_START and COMMAND_BODY.
    """

    kinds: frozenset[ContextKind] = field(default_factory=frozenset)
    opener: str | None = None       # set for BLOCK_START
    path_prefix: str | None = None  # set for PATH, text typed after the quote
    root_path: str | None = None    # set for DOT_ACCESS, e.g. "site.param"

    def has(self, kind: ContextKind) -> bool:
        return kind in self.kinds

    @property
    def is_empty(self) -> bool:
        return not self.kinds


@dataclass(frozen=True)
class DocumentSnapshot:
    """Full document text plus the cursor, copied once per request."""

    text: str
    line: int
    character: int
    trigger_character: str | None = None

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")

    @property
    def current_line(self) -> str:
        lines = self.lines
        if self.line < 0 or self.line >= len(lines):
            return ""
        return lines[self.line].rstrip("\r")

    @property
    def line_prefix(self) -> str:
        """Current line from its start up to the cursor."""
        return self.current_line[: max(self.character, 0)]

    @property
    def next_char(self) -> str:
        """Character right after the cursor, or "" at end of line."""
        line = self.current_line
        if 0 <= self.character < len(line):
            return line[self.character]
        return ""
