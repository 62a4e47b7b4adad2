"""
Document scanning.

Pulls dynamic names out of the raw text of the current document:
- variables bound by `set` / `for` statements in command blocks
- keys of the leading front-matter block

Scanning is regex based and always covers the whole document.
"""

from __future__ import annotations

import re

from allayls.context.vocabulary import VARIABLE_SIGIL

# {- set $a = ...   /   {- for $key, $value : ...
BINDING_PATTERN = re.compile(r"\{-\s*(?:set|for)\s+([\$a-zA-Z0-9_,\s]+)(?:=|:)")

# "---" block at the very start of the document
FRONT_MATTER_PATTERN = re.compile(r"^---\s*([\s\S]*?)\s*---")

# "key:" at the start of a line
FRONT_MATTER_KEY_PATTERN = re.compile(r"^\s*([a-zA-Z0-9_-]+):", re.MULTILINE)


def scan_bound_variables(text: str) -> list[str]:
    """
    Return every sigil-prefixed name bound by a set/for statement.

    Names are returned once each, in order of first appearance.
    """
    names: list[str] = []
    seen: set[str] = set()

    for match in BINDING_PATTERN.finditer(text):
        for part in match.group(1).split(","):
            name = part.strip()
            if not name.startswith(VARIABLE_SIGIL) or name in seen:
                continue
            seen.add(name)
            names.append(name)

    return names


def front_matter_block(text: str) -> str | None:
    """Return the content of the leading front-matter block, if any."""
    match = FRONT_MATTER_PATTERN.match(text)
    if not match:
        return None
    return match.group(1)


def scan_front_matter_keys(text: str) -> list[str]:
    """Return keys declared in the document's front matter, first seen wins."""
    block = front_matter_block(text)
    if block is None:
        return []

    keys: list[str] = []
    for key in FRONT_MATTER_KEY_PATTERN.findall(block):
        if key not in keys:
            keys.append(key)
    return keys
