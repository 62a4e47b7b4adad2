from pathlib import Path

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    InitializeParams,
    LogMessageParams,
    MessageType,
)
from pygls.uris import to_fs_path

from allayls import __version__
from allayls.context.vocabulary import TRIGGER_CHARACTERS
from allayls.lsp.allay_language_server import AllayLanguageServer
from allayls.lsp.capabilities.capabilities import CapabilityManager
from allayls.settings import AllaySettings
from allayls.utils.find_files import find_allay_root
from allayls.workspace.project import ProjectWorkspace


def _workspace_root(params: InitializeParams) -> Path | None:
    """Pick the workspace root from root_uri, falling back to the first folder."""
    uri = params.root_uri
    if not uri and params.workspace_folders:
        uri = params.workspace_folders[0].uri
    if uri:
        fs_path = to_fs_path(uri)
        if fs_path:
            return Path(fs_path)
    if params.root_path:
        return Path(params.root_path)
    return None


def create_server() -> AllayLanguageServer:
    """
    Creates and returns a configured Language Server instance.

    The LanguageServer class from pygls handles:
    - JSON-RPC communication with clients (editors)
    - Request/response lifecycle
    - Document synchronization (open/change/close)
    """
    server = AllayLanguageServer("allayls", __version__)

    @server.feature(INITIALIZE)
    async def initialize(ls: AllayLanguageServer, params: InitializeParams):
        """
        Initialize the server and set up any necessary state.
        """
        ls.settings = AllaySettings.from_initialization_options(
            params.initialization_options
        )

        workspace_root = _workspace_root(params)
        allay_root = None
        if workspace_root is not None:
            allay_root = find_allay_root(
                workspace_root, ls.settings.config_file, ls.settings.exclude_dirs
            )

        if allay_root is None:
            ls.window_log_message(
                LogMessageParams(
                    MessageType.Info,
                    f"{ls.settings.config_file} not found in workspace",
                )
            )
        else:
            ls.window_log_message(
                LogMessageParams(MessageType.Info, f"Allay root detected: {allay_root}")
            )

        # Template and shortcode files are looked up in the whole workspace
        ls.project = ProjectWorkspace(workspace_root, ls.settings, allay_root)

        # Initialize capability manager
        ls.capability_manager = CapabilityManager(ls)
        ls.capability_manager.register_all()

    @server.feature(
        TEXT_DOCUMENT_COMPLETION,
        CompletionOptions(trigger_characters=TRIGGER_CHARACTERS),
    )
    async def completion(
        ls: AllayLanguageServer, params: CompletionParams
    ) -> CompletionList | None:
        if ls.capability_manager:
            return await ls.capability_manager.handle_completion(params)
        return None

    return server
