"""
Line prefix classifier.

Decides which completion contexts apply at the cursor by looking only at
the current line up to the cursor. The prefix is tokenized in a single
left-to-right pass that tracks which blocks are still open:

- "{-" opens a command block, "{:" an expression block, "{<" a shortcode
- "}" closes every open block (all closers end with "}")
- ">" additionally closes an open shortcode

Context that spans several lines is not tracked.
"""

from __future__ import annotations

import re

from allayls.context.types import (
    BLOCK_OPENERS,
    COMMAND_OPENER,
    EXPRESSION_OPENER,
    SHORTCODE_OPENER,
    ContextKind,
    LineContext,
)

# Remainder of a command block after "{-": include "partial/path
INCLUDE_PATTERN = re.compile(r'\s*(?:include|extends)\s+"([^"]*)')

# Identifier/dot run right before the trailing dot: site.param.
DOT_ROOT_PATTERN = re.compile(r"([a-zA-Z0-9_.]*)\.$")

BLOCK_STARTS = tuple("{" + opener for opener in BLOCK_OPENERS)


class LinePrefixClassifier:
    """
    Classifies a line prefix into the set of matching context kinds.

    Usage:
        classifier = LinePrefixClassifier()
        context = classifier.classify('{- include "par')

        context.has(ContextKind.PATH)          # True
        context.has(ContextKind.COMMAND_BODY)  # True
        context.path_prefix                    # "par"
    """

    def classify(self, prefix: str) -> LineContext:
        open_blocks: set[str] = set()
        shortcode_open = False
        # Offsets right after each "{-" opener, for the include look-back
        command_bodies: list[int] = []

        i = 0
        length = len(prefix)
        while i < length:
            char = prefix[i]

            if char == "{" and i + 1 < length and prefix[i + 1] in BLOCK_OPENERS:
                opener = prefix[i + 1]
                if opener == SHORTCODE_OPENER:
                    shortcode_open = True
                else:
                    open_blocks.add(opener)
                if opener == COMMAND_OPENER:
                    command_bodies.append(i + 2)
                i += 2
                continue

            if char == "}":
                open_blocks.clear()
                shortcode_open = False
            elif char == ">":
                shortcode_open = False
            i += 1

        kinds: set[ContextKind] = set()
        opener = None
        path_prefix = None
        root_path = None

        if prefix.endswith(BLOCK_STARTS):
            kinds.add(ContextKind.BLOCK_START)
            opener = prefix[-1]

        for start in command_bodies:
            match = INCLUDE_PATTERN.fullmatch(prefix, start)
            if match:
                kinds.add(ContextKind.PATH)
                path_prefix = match.group(1)
                break

        if COMMAND_OPENER in open_blocks:
            kinds.add(ContextKind.COMMAND_BODY)
        if EXPRESSION_OPENER in open_blocks:
            kinds.add(ContextKind.EXPRESSION_BODY)
        if shortcode_open:
            kinds.add(ContextKind.SHORTCODE)

        if open_blocks and prefix.endswith("."):
            match = DOT_ROOT_PATTERN.search(prefix)
            if match:
                kinds.add(ContextKind.DOT_ACCESS)
                root_path = match.group(1)

        return LineContext(
            kinds=frozenset(kinds),
            opener=opener,
            path_prefix=path_prefix,
            root_path=root_path,
        )
