"""
Block-related LSP capabilities.

Provides completion for:
- block skeletons right after "{-", "{:" or "{<" is typed
- keywords, builtins and user variables inside command blocks {- ... -}
- keywords, builtins and user variables inside expression blocks {: ... :}
"""

from lsprotocol.types import (
    Command,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    InsertTextFormat,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    TextEdit,
)

from allayls.context.document_scanner import scan_bound_variables
from allayls.context.types import (
    COMMAND_OPENER,
    EXPRESSION_OPENER,
    SHORTCODE_OPENER,
    ContextKind,
    DocumentSnapshot,
)
from allayls.context.vocabulary import (
    BLOCK_KEYWORDS,
    BUILTIN_FUNCTIONS,
    BUILTIN_VARIABLES,
    COMMAND_KEYWORDS,
    CONSTANTS,
    EXPRESSION_KEYWORDS,
)
from allayls.lsp.capabilities.capabilities import (
    CompletionCapability,
    CompletionRequest,
)

# Ask the editor to open the suggestion list again once a snippet is in
RETRIGGER_SUGGEST = Command(
    title="Re-trigger suggestions",
    command="editor.action.triggerSuggest",
)

# (label, insert text, detail, preselect) per opener character.
# The "{" is already on screen, so every snippet starts with the opener.
BLOCK_SNIPPETS: dict[str, list[tuple[str, str, str, bool]]] = {
    COMMAND_OPENER: [
        ("{- command -}", "- $0 -}", "Allay Command Block", True),
    ],
    EXPRESSION_OPENER: [
        ("{: expression :}", ": $0 :}", "Allay Expression Block", True),
    ],
    SHORTCODE_OPENER: [
        ("{< shortcode >}", "< $1 >}$0", "Shortcode Call", False),
        ("{< shortcode />}", "< $1 />}", "Self-closing Shortcode", False),
        (
            "{< pair >}...{</ pair >}",
            "< $1 >}\n\t$0\n{</ $1 >}",
            "Shortcode Block Pair",
            False,
        ),
    ],
}


def snippet_replace_range(snapshot: DocumentSnapshot) -> Range:
    """
    Range covering the opener character just typed.

    If the editor auto-inserted a closing "}" right after the cursor, the
    range swallows it too, since every snippet brings its own closer.
    """
    start = Position(line=snapshot.line, character=snapshot.character - 1)
    end_character = snapshot.character
    if snapshot.next_char == "}":
        end_character += 1
    return Range(start=start, end=Position(line=snapshot.line, character=end_character))


def common_expression_items(text: str) -> list[CompletionItem]:
    """
    Items valid in both command and expression blocks.

    Builtin variables, constants and functions, then every user variable
    bound by set/for anywhere in the document.
    """
    items: list[CompletionItem] = []

    for name in BUILTIN_VARIABLES:
        items.append(
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Variable,
                detail="Allay Built-in Variable",
            )
        )

    for name in CONSTANTS:
        items.append(
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Constant,
                detail="Allay Constant",
            )
        )

    # Used both as {: len x :} and {- if len(x) -}
    for name in BUILTIN_FUNCTIONS:
        items.append(
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Function,
                detail="Allay Built-in Function",
            )
        )

    for name in BLOCK_KEYWORDS:
        items.append(
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Function,
                detail="Allay Keyword",
            )
        )

    existing_labels = {item.label for item in items}
    for name in scan_bound_variables(text):
        if name in existing_labels:
            continue
        existing_labels.add(name)
        items.append(
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Variable,
                detail="User Defined Variable",
            )
        )

    return items


class BlockSnippetCompletionCapability(CompletionCapability):
    """Completes a freshly typed block opener into a full block skeleton."""

    @property
    def name(self) -> str:
        return "block_snippet"

    @property
    def description(self) -> str:
        return "Insert the rest of a block after typing {-, {: or {<"

    async def can_handle(self, request: CompletionRequest) -> bool:
        return request.context.has(ContextKind.BLOCK_START)

    async def complete(self, request: CompletionRequest) -> CompletionList:
        opener = request.context.opener
        replace_range = snippet_replace_range(request.snapshot)

        items = []
        for index, (label, snippet, detail, preselect) in enumerate(
            BLOCK_SNIPPETS.get(opener, []), start=1
        ):
            items.append(
                CompletionItem(
                    label=label,
                    kind=CompletionItemKind.Snippet,
                    detail=detail,
                    insert_text_format=InsertTextFormat.Snippet,
                    text_edit=TextEdit(range=replace_range, new_text=snippet),
                    filter_text=opener,
                    sort_text=f"{index:03d}",
                    preselect=preselect or None,
                    command=RETRIGGER_SUGGEST,
                )
            )

        return CompletionList(is_incomplete=False, items=items)


class CommandCompletionCapability(CompletionCapability):
    """Provides control keywords and expressions inside {- ... -}."""

    @property
    def name(self) -> str:
        return "command_completion"

    @property
    def description(self) -> str:
        return "Autocomplete control keywords, builtins and variables in command blocks"

    async def can_handle(self, request: CompletionRequest) -> bool:
        return request.context.has(ContextKind.COMMAND_BODY)

    async def complete(self, request: CompletionRequest) -> CompletionList:
        items = [
            CompletionItem(
                label=keyword,
                kind=CompletionItemKind.Keyword,
                detail="Allay Command",
            )
            for keyword in COMMAND_KEYWORDS
        ]
        items.extend(common_expression_items(request.snapshot.text))

        return CompletionList(is_incomplete=False, items=items)


class ExpressionCompletionCapability(CompletionCapability):
    """Provides output keywords and expressions inside {: ... :}."""

    @property
    def name(self) -> str:
        return "expression_completion"

    @property
    def description(self) -> str:
        return "Autocomplete output keywords, builtins and variables in expression blocks"

    async def can_handle(self, request: CompletionRequest) -> bool:
        return request.context.has(ContextKind.EXPRESSION_BODY)

    async def complete(self, request: CompletionRequest) -> CompletionList:
        items = [
            CompletionItem(
                label=keyword,
                kind=CompletionItemKind.Keyword,
                detail="Allay Block Definition",
                documentation=MarkupContent(kind=MarkupKind.Markdown, value=doc),
            )
            for keyword, doc in EXPRESSION_KEYWORDS.items()
        ]
        items.extend(common_expression_items(request.snapshot.text))

        return CompletionList(is_incomplete=False, items=items)
