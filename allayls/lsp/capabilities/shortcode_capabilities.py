"""
Shortcode LSP capabilities.

Provides completion for shortcode names inside {< ... >} and {</ ... >}.
"""

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    MarkupContent,
    MarkupKind,
)

from allayls.context.types import ContextKind
from allayls.lsp.capabilities.capabilities import (
    CompletionCapability,
    CompletionRequest,
)


class ShortcodeCompletionCapability(CompletionCapability):
    """Provides completion for shortcodes defined in shortcodes directories."""

    @property
    def name(self) -> str:
        return "shortcode_completion"

    @property
    def description(self) -> str:
        return "Autocomplete shortcode names in shortcode tags"

    async def can_handle(self, request: CompletionRequest) -> bool:
        return request.context.has(ContextKind.SHORTCODE)

    async def complete(self, request: CompletionRequest) -> CompletionList:
        if not self.project:
            return CompletionList(is_incomplete=False, items=[])

        settings = self.project.settings
        files = await self.project.find_files(settings.shortcodes_dir)

        # page.html and page.md define the same shortcode
        shortcode_names: list[str] = []
        for project_file in files:
            if project_file.name not in shortcode_names:
                shortcode_names.append(project_file.name)

        extensions = "|".join(sorted(settings.extensions, reverse=True))
        items = []
        for name in shortcode_names:
            items.append(
                CompletionItem(
                    label=name,
                    kind=CompletionItemKind.Snippet,
                    detail="Allay Shortcode",
                    documentation=MarkupContent(
                        kind=MarkupKind.Markdown,
                        value=f"Shortcode defined in **{settings.shortcodes_dir}/{name}.({extensions})**",
                    ),
                )
            )

        return CompletionList(is_incomplete=False, items=items)
