from __future__ import annotations

from typing import TYPE_CHECKING

from pygls.lsp.server import LanguageServer

from allayls.settings import AllaySettings

if TYPE_CHECKING:
    from allayls.lsp.capabilities.capabilities import CapabilityManager
    from allayls.workspace.project import ProjectWorkspace


class AllayLanguageServer(LanguageServer):
    """
    Custom Language Server with Allay-specific attributes.

    The server object is the session: it outlives single requests and
    holds the handles they need. Completion requests themselves keep no
    state between calls.

    Attributes:
        settings: Project layout settings from initializationOptions
        project: Read-only view of the Allay project on disk
        capability_manager: Dispatches completion requests to capabilities
    """

    def __init__(self, name: str, version: str):
        super().__init__(name, version)

        self.settings: AllaySettings = AllaySettings()
        self.project: ProjectWorkspace | None = None
        self.capability_manager: CapabilityManager | None = None
