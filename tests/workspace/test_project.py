"""
Tests for the project workspace lookups: file enumeration, config reading
and project root detection.
"""

import os
from pathlib import Path

import pytest

from allayls.settings import AllaySettings
from allayls.utils.find_files import find_allay_root, find_files_pathlib
from allayls.workspace.config_file import section_body, section_keys
from allayls.workspace.project import ProjectWorkspace


def _touch(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def allay_project(tmp_path):
    """A small Allay project tree."""
    _touch(tmp_path / "allay.toml", "[Param]\nauthor = 'me'\n")
    _touch(tmp_path / "templates" / "base.html")
    _touch(tmp_path / "templates" / "post.md")
    _touch(tmp_path / "templates" / "notes.txt")
    _touch(tmp_path / "templates" / "partials" / "header.html")
    _touch(tmp_path / "themes" / "dark" / "templates" / "base.html")
    _touch(tmp_path / "node_modules" / "pkg" / "templates" / "vendor.html")
    _touch(tmp_path / "shortcodes" / "youtube.html")
    return tmp_path


# ============================================================================
# File enumeration
# ============================================================================


@pytest.mark.asyncio
async def test_find_files_directly_inside_named_directories(allay_project):
    project = ProjectWorkspace(allay_project)

    files = await project.find_files("templates")

    assert [f.relative_path for f in files] == [
        "templates/base.html",
        "templates/post.md",
        "themes/dark/templates/base.html",
    ]
    assert [f.name for f in files] == ["base", "post", "base"]


@pytest.mark.asyncio
async def test_find_files_with_custom_extensions(allay_project):
    project = ProjectWorkspace(allay_project)

    files = await project.find_files("templates", extensions=("txt",))

    assert [f.relative_path for f in files] == ["templates/notes.txt"]


@pytest.mark.asyncio
async def test_find_files_respects_exclude_dirs(allay_project):
    settings = AllaySettings(exclude_dirs=frozenset({"themes"}))
    project = ProjectWorkspace(allay_project, settings)

    files = await project.find_files("templates")

    assert "themes/dark/templates/base.html" not in [f.relative_path for f in files]
    assert "node_modules/pkg/templates/vendor.html" in [f.relative_path for f in files]


@pytest.mark.asyncio
async def test_find_files_without_project_root():
    project = ProjectWorkspace(None)

    assert await project.find_files("templates") == []


def test_find_files_pathlib_missing_directory(tmp_path):
    assert find_files_pathlib("*.html", tmp_path / "missing") == []


@pytest.mark.asyncio
async def test_find_files_does_not_follow_symlink_loops(tmp_path):
    _touch(tmp_path / "templates" / "a.html")
    os.symlink(tmp_path, tmp_path / "loop")
    os.symlink(tmp_path / "templates", tmp_path / "templates" / "again")

    files = await ProjectWorkspace(tmp_path).find_files("templates")

    assert [f.relative_path for f in files] == ["templates/a.html"]


@pytest.mark.asyncio
async def test_find_files_skips_hidden_directories(allay_project):
    _touch(allay_project / ".venv" / "templates" / "hidden.html")

    files = await ProjectWorkspace(allay_project).find_files("templates")

    assert "hidden" not in [f.name for f in files]


def test_find_files_pathlib_matches_any_pattern(allay_project):
    found = find_files_pathlib(
        ("templates/*.html", "templates/*.txt"), allay_project / "templates"
    )

    assert [p.name for p in found] == ["base.html", "notes.txt"]


# ============================================================================
# Config file
# ============================================================================


@pytest.mark.asyncio
async def test_read_config_text(allay_project):
    project = ProjectWorkspace(allay_project)

    assert await project.read_config_text() == "[Param]\nauthor = 'me'\n"


@pytest.mark.asyncio
async def test_read_config_text_missing_file(tmp_path):
    assert await ProjectWorkspace(tmp_path).read_config_text() is None
    assert await ProjectWorkspace(None).read_config_text() is None


@pytest.mark.asyncio
async def test_read_config_text_custom_name(tmp_path):
    _touch(tmp_path / "site.toml", "[Param]\n")
    project = ProjectWorkspace(tmp_path, AllaySettings(config_file="site.toml"))

    assert await project.read_config_text() == "[Param]\n"


@pytest.mark.asyncio
async def test_config_root_separate_from_project_root(allay_project):
    _touch(allay_project / "site" / "allay.toml", "[Param]\nlogo = 1\n")
    project = ProjectWorkspace(allay_project, config_root=allay_project / "site")

    assert await project.read_config_text() == "[Param]\nlogo = 1\n"
    assert len(await project.find_files("templates")) == 3


def test_section_keys_case_insensitive_header():
    text = (
        "[Site]\n"
        "name = 'blog'\n"
        "[param]\n"
        "author = 'me'\n"
        "theme-color = 'dark'\n"
        "\n"
        "[Other]\n"
        "foo = 1\n"
    )

    assert section_keys(text, "Param") == ["author", "theme-color"]


def test_section_runs_to_end_of_file():
    text = "[Param]\nauthor = 'me'\nlogo = 'logo.png'"

    assert section_keys(text, "Param") == ["author", "logo"]


def test_section_ends_at_next_bracket():
    text = "[Param]\nbefore = 1\ncolors = ['red']\nafter = 2\n"

    assert section_keys(text, "Param") == ["before", "colors"]


def test_section_values_are_discarded_and_keys_unique():
    text = "[Param]\nauthor = 'a'\nauthor = 'b'\n  indented = 3\nnot a key\n"

    assert section_keys(text, "Param") == ["author", "indented"]


def test_missing_section():
    assert section_body("[Site]\nname = 1\n", "Param") is None
    assert section_keys("[Site]\nname = 1\n", "Param") == []


# ============================================================================
# Project root detection
# ============================================================================


def test_find_allay_root_at_workspace_root(tmp_path):
    _touch(tmp_path / "allay.toml")

    assert find_allay_root(tmp_path) == tmp_path


def test_find_allay_root_in_common_location(tmp_path):
    _touch(tmp_path / "docs" / "allay.toml")

    assert find_allay_root(tmp_path) == tmp_path / "docs"


def test_find_allay_root_in_nested_directory(tmp_path):
    _touch(tmp_path / "projects" / "blog" / "allay.toml")

    assert find_allay_root(tmp_path) == tmp_path / "projects" / "blog"


def test_find_allay_root_skips_excluded_directories(tmp_path):
    _touch(tmp_path / "node_modules" / "pkg" / "allay.toml")

    assert find_allay_root(tmp_path) is None


def test_find_allay_root_not_found(tmp_path):
    _touch(tmp_path / "README.md")

    assert find_allay_root(tmp_path) is None
