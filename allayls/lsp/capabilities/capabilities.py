"""
LSP Capabilities Manager

This module manages completion handlers using a plugin architecture.

Design Principles:
1. Plugin-based (add capabilities without modifying core)
2. Type-safe (abstract base class)
3. Ordered (registration order is priority order)
4. Testable (isolated capability handlers)

Every request is classified once; all capabilities see the same
immutable CompletionRequest. An *exclusive* capability that can handle
the request ends the aggregation: the result is whatever was collected
before it plus its own items.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from lsprotocol.types import (
    CompletionList,
    CompletionParams,
    LogMessageParams,
    MessageType,
)

from allayls.context.line_classifier import LinePrefixClassifier
from allayls.context.types import DocumentSnapshot, LineContext

if TYPE_CHECKING:
    from allayls.lsp.allay_language_server import AllayLanguageServer


@dataclass(frozen=True)
class CompletionRequest:
    """One completion request: the document snapshot and its context."""

    uri: str
    snapshot: DocumentSnapshot
    context: LineContext


class Capability(ABC):
    """
    Base class for all LSP capability handlers.

    Each capability decides whether it can handle a specific request
    based on its context.
    """

    def __init__(self, server: AllayLanguageServer) -> None:
        self.server = server

    @property
    def project(self):
        return self.server.project

    def register(self) -> None:
        """
        Register extra LSP feature handlers with the server.

        Called once during server initialization.
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique name for this capability."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this capability does."""
        pass

    @abstractmethod
    async def can_handle(self, request) -> bool:
        """Check if the capability can handle the request."""
        pass


class CompletionCapability(Capability):
    """Base class for completion capabilities."""

    # Stop aggregating once this capability handled the request
    exclusive: bool = False

    @abstractmethod
    async def can_handle(self, request: CompletionRequest) -> bool:
        """
        Check if this capability can handle the completion request.

        Returns True if this capability should provide completions
        for the current context.
        """
        pass

    @abstractmethod
    async def complete(self, request: CompletionRequest) -> CompletionList:
        """
        Provide completion items.

        Only called if can_handle() returns True.
        """
        pass


class CapabilityManager:
    """
    Central manager for all LSP capabilities.

    Usage:
        # In server initialization
        manager = CapabilityManager(server)
        manager.register_all()

        # In the completion handler
        result = await manager.handle_completion(params)
    """

    def __init__(
        self,
        server: AllayLanguageServer,
        capabilities: dict[str, Capability] | None = None,
    ):
        self.server = server
        self.classifier = LinePrefixClassifier()

        # Default capabilities, in priority order
        if capabilities is None:
            from allayls.lsp.capabilities.block_capabilities import (
                BlockSnippetCompletionCapability,
                CommandCompletionCapability,
                ExpressionCompletionCapability,
            )
            from allayls.lsp.capabilities.path_capabilities import (
                FieldAccessCompletionCapability,
                TemplatePathCompletionCapability,
            )
            from allayls.lsp.capabilities.shortcode_capabilities import (
                ShortcodeCompletionCapability,
            )

            capabilities = {
                "block_snippet": BlockSnippetCompletionCapability(server),
                "template_path": TemplatePathCompletionCapability(server),
                "field_access": FieldAccessCompletionCapability(server),
                "command": CommandCompletionCapability(server),
                "expression": ExpressionCompletionCapability(server),
                "shortcode": ShortcodeCompletionCapability(server),
            }

        self.capabilities = capabilities
        self._registered = False

    def register_all(self) -> None:
        """Register all capabilities with the server."""
        if self._registered:
            return

        for capability in self.capabilities.values():
            capability.register()

        self._registered = True

    def get_capability(self, name: str) -> Capability | None:
        """Get a specific capability by name"""
        return self.capabilities.get(name)

    def get_capabilities_by_type(self, capability_type: type) -> list[Capability]:
        """Get all capabilities of a specific type (e.g., all CompletionCapability)."""
        return [
            cap
            for cap in self.capabilities.values()
            if isinstance(cap, capability_type)
        ]

    def build_request(self, params: CompletionParams) -> CompletionRequest:
        """Snapshot the document and classify the text before the cursor."""
        doc = self.server.workspace.get_text_document(params.text_document.uri)
        trigger_character = (
            params.context.trigger_character if params.context else None
        )

        snapshot = DocumentSnapshot(
            text=doc.source,
            line=params.position.line,
            character=params.position.character,
            trigger_character=trigger_character,
        )
        return self.classify(params.text_document.uri, snapshot)

    def classify(self, uri: str, snapshot: DocumentSnapshot) -> CompletionRequest:
        context = self.classifier.classify(snapshot.line_prefix)
        return CompletionRequest(uri=uri, snapshot=snapshot, context=context)

    async def handle_completion(
        self, params: CompletionParams
    ) -> CompletionList | None:
        """
        Handle completion requests by delegating to capable handlers.

        Returns None ("no opinion") when no capability contributed an
        item, so the editor can still offer its own word completions.
        """
        request = self.build_request(params)
        return await self.complete_request(request)

    async def complete_request(
        self, request: CompletionRequest
    ) -> CompletionList | None:
        all_items = []

        for capability in self.get_capabilities_by_type(CompletionCapability):
            try:
                if not await capability.can_handle(request):
                    continue
            except Exception as e:
                self._log_error(capability, e)
                continue

            try:
                result = await capability.complete(request)  # pyright: ignore
                all_items.extend(result.items)
            except Exception as e:
                self._log_error(capability, e)

            if capability.exclusive:  # pyright: ignore
                break

        if not all_items:
            return None

        return CompletionList(is_incomplete=False, items=all_items)

    def _log_error(self, capability: Capability, error: Exception) -> None:
        self.server.window_log_message(
            LogMessageParams(
                type=MessageType.Error,
                message=f"Completion error in {capability.name}: "
                        f"{type(error).__name__}: {error}"
            )
        )
