"""
Parsing helpers for the Allay project config file (allay.toml).

Only section keys are surfaced; values are never interpreted.
"""

import re

# "key =" at the start of a line
CONFIG_KEY_PATTERN = re.compile(r"^\s*([a-zA-Z0-9_-]+)\s*=", re.MULTILINE)


def section_body(text: str, section: str) -> str | None:
    """
    Return the raw text of ``[section]``, matched case-insensitively.

    The section ends at the next '[' character or at the end of the file.
    Returns None if the section header is absent.
    """
    pattern = re.compile(
        r"\[" + re.escape(section) + r"\]([\s\S]*?)(?:\[|$)",
        re.IGNORECASE,
    )
    match = pattern.search(text)
    if not match:
        return None
    return match.group(1)


def section_keys(text: str, section: str) -> list[str]:
    """
    List the keys defined under ``[section]``, first occurrence wins.
    """
    body = section_body(text, section)
    if body is None:
        return []

    keys: list[str] = []
    for key in CONFIG_KEY_PATTERN.findall(body):
        if key not in keys:
            keys.append(key)
    return keys
