"""
Path and field access LSP capabilities.

Provides completion for:
- template names in {- include "..." -} and {- extends "..." -}
- page fields after "page." or a bare "."
- site fields after "site."
- config keys from the [Param] section of allay.toml after "site.param."

Both capabilities are exclusive: when they apply, the generic block
completions are not offered.
"""

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    LogMessageParams,
    MarkupContent,
    MarkupKind,
    MessageType,
)

from allayls.context.document_scanner import scan_front_matter_keys
from allayls.context.types import ContextKind
from allayls.context.vocabulary import SITE_FIELDS, STANDARD_PAGE_FIELDS
from allayls.lsp.capabilities.capabilities import (
    CompletionCapability,
    CompletionRequest,
)
from allayls.workspace.config_file import section_keys


def _field_item(label: str, detail: str) -> CompletionItem:
    return CompletionItem(
        label=label,
        kind=CompletionItemKind.Field,
        detail=detail,
    )


class TemplatePathCompletionCapability(CompletionCapability):
    """Provides template file names inside include/extends paths."""

    exclusive = True

    @property
    def name(self) -> str:
        return "template_path_completion"

    @property
    def description(self) -> str:
        return "Autocomplete template names in include and extends commands"

    async def can_handle(self, request: CompletionRequest) -> bool:
        return request.context.has(ContextKind.PATH)

    async def complete(self, request: CompletionRequest) -> CompletionList:
        """
        One item per file directly inside any templates directory.

        Files sharing a name in different directories each get an item.
        """
        if not self.project:
            return CompletionList(is_incomplete=False, items=[])

        files = await self.project.find_files(self.project.settings.templates_dir)

        items = []
        for project_file in files:
            items.append(
                CompletionItem(
                    label=project_file.name,
                    kind=CompletionItemKind.File,
                    detail="Template File",
                    documentation=MarkupContent(
                        kind=MarkupKind.Markdown,
                        value=f"Located at: `{project_file.relative_path}`",
                    ),
                )
            )

        return CompletionList(is_incomplete=False, items=items)


class FieldAccessCompletionCapability(CompletionCapability):
    """Provides fields after a dot inside an open command or expression block."""

    exclusive = True

    @property
    def name(self) -> str:
        return "field_access_completion"

    @property
    def description(self) -> str:
        return "Autocomplete page, site and config fields after a dot"

    async def can_handle(self, request: CompletionRequest) -> bool:
        return request.context.has(ContextKind.DOT_ACCESS)

    async def complete(self, request: CompletionRequest) -> CompletionList:
        root = request.context.root_path or ""

        if root == "site":
            items = [
                _field_item(field, detail) for field, detail in SITE_FIELDS.items()
            ]
        elif root == "site.param":
            items = await self._config_key_items()
        elif root == "" or root.endswith("page"):
            items = self._page_field_items(request.snapshot.text)
        else:
            items = []

        return CompletionList(is_incomplete=False, items=items)

    def _page_field_items(self, text: str) -> list[CompletionItem]:
        """Standard front-matter fields, then custom keys from this document."""
        items = [
            _field_item(field, "Standard Page Metadata")
            for field in STANDARD_PAGE_FIELDS
        ]

        existing_keys = set(STANDARD_PAGE_FIELDS)
        for key in scan_front_matter_keys(text):
            if key in existing_keys:
                continue
            existing_keys.add(key)
            items.append(
                _field_item(key, "Front-matter variable from current file")
            )

        return items

    async def _config_key_items(self) -> list[CompletionItem]:
        """
        Keys of the [Param] section in the project config file.

        A missing or unreadable file, or a file without the section,
        yields no items.
        """
        if not self.project:
            return []

        settings = self.project.settings
        try:
            text = await self.project.read_config_text()
        except Exception as e:
            self.server.window_log_message(
                LogMessageParams(
                    type=MessageType.Warning,
                    message=f"Error parsing {settings.config_file}: {e}",
                )
            )
            return []

        if text is None:
            return []

        return [
            _field_item(key, f"Config from {settings.config_file}")
            for key in section_keys(text, settings.param_section)
        ]
