"""
Project Workspace for AllayLS

This module is the boundary between the completion engine and the
project on disk. It answers two questions:
- Which template/shortcode files exist? (file-tree enumeration)
- What does the project config file say? (single file read)

Design Principles:
1. Nothing is cached (every request sees the current file system)
2. A missing project root is normal input, not an error
3. Read errors propagate to the caller, which decides how to degrade
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from allayls.settings import AllaySettings
from allayls.utils.find_files import find_files_pathlib


@dataclass(frozen=True)
class ProjectFile:
    """A file found by the enumerator, relative to the project root."""

    path: Path
    relative_path: str

    @property
    def name(self) -> str:
        """File name without its extension."""
        return self.path.stem


class ProjectWorkspace:
    """
    Read-only view of an Allay project.

    Usage:
        project = ProjectWorkspace(project_root, settings)

        # Files directly inside any 'templates' directory
        files = await project.find_files("templates")

        # Raw text of allay.toml, or None when it does not exist
        text = await project.read_config_text()
    """

    def __init__(
        self,
        project_root: Path | None,
        settings: AllaySettings | None = None,
        config_root: Path | None = None,
    ) -> None:
        # Files are enumerated under project_root; the config file is read
        # from config_root when it lives in a subdirectory
        self.project_root = project_root
        self.config_root = config_root or project_root
        self.settings = settings or AllaySettings()

    @property
    def config_path(self) -> Path | None:
        if self.config_root is None:
            return None
        return self.config_root / self.settings.config_file

    async def find_files(
        self,
        directory_name: str,
        extensions: tuple[str, ...] | None = None,
    ) -> list[ProjectFile]:
        """
        Enumerate files directly inside any directory named ``directory_name``.

        Equivalent to the glob ``**/<directory_name>/*.{ext,...}``. Results
        are sorted by relative path; equal file names found in different
        directories are all returned.
        """
        if self.project_root is None:
            return []

        if extensions is None:
            extensions = self.settings.extensions

        patterns = tuple(f"{directory_name}/*.{ext}" for ext in extensions)
        files = [
            ProjectFile(path=file_path, relative_path=self._relative(file_path))
            for file_path in find_files_pathlib(
                patterns, self.project_root, self.settings.exclude_dirs
            )
        ]

        return sorted(files, key=lambda f: f.relative_path)

    async def read_config_text(self) -> str | None:
        """
        Return the text of the project config file.

        Returns None when there is no project root or no config file.
        Raises OSError / UnicodeDecodeError when the file exists but
        cannot be read.
        """
        config_path = self.config_path
        if config_path is None or not config_path.is_file():
            return None

        return config_path.read_text(encoding="utf-8")

    def _relative(self, file_path: Path) -> str:
        try:
            return file_path.relative_to(self.project_root).as_posix()
        except ValueError:
            return file_path.as_posix()
