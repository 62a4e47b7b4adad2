"""Fixed Allay vocabularies used by the completion capabilities."""

# Control flow keywords, valid inside {- ... -}
COMMAND_KEYWORDS: list[str] = [
    "set", "for", "with", "if", "else if", "else", "end",
    "include", "extends", "get", "param",
]

# Output keywords, valid inside {: ... :}
EXPRESSION_KEYWORDS: dict[str, str] = {
    "block": 'Define a block for template inheritance: `{: block "name" :}`',
}

BUILTIN_VARIABLES: list[str] = ["this", "site", "pages", "param"]

CONSTANTS: list[str] = ["null"]

BUILTIN_FUNCTIONS: list[str] = [
    "len", "slice", "append", "list", "format_date", "truncate",
]

# Valid in both block kinds; offered alongside the functions
BLOCK_KEYWORDS: list[str] = ["end"]

# Fields every page has, whether or not its front matter sets them
STANDARD_PAGE_FIELDS: list[str] = [
    "title", "date", "description", "tags", "template", "url", "head", "content",
]

SITE_FIELDS: dict[str, str] = {
    "param": "Global configurations from allay.toml",
    "pages": "List of all markdown pages",
}

# Characters that make editors ask for completions
TRIGGER_CHARACTERS: list[str] = [" ", "-", ":", "<", "/", "%", ".", '"', "$"]

# Sigil marking user variables
VARIABLE_SIGIL = "$"
