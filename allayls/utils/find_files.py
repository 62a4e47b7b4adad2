from pathlib import Path

from allayls.settings import DEFAULT_EXCLUDE_DIRS


def find_files_pathlib(
    pattern,
    directory=".",
    exclude_dirs=DEFAULT_EXCLUDE_DIRS,
    _visited=None,
) -> list[Path]:
    """
    Finds all files matching a pattern in the given directory and its subfolders.

    Hidden directories are skipped, and a directory reached twice (through a
    symlink) is only walked once.

    Args:
        pattern (str | tuple): The path pattern(s) to match (e.g., '*.txt', 'templates/*.html').
        directory (str): The starting directory for the search. Defaults to the current directory ('.').
        exclude_dirs: Directory names that are never descended into.

    Returns:
        list: A list of Path objects for all matching files, sorted by path.
    """
    patterns = (pattern,) if isinstance(pattern, str) else tuple(pattern)
    base_path = Path(directory)

    results = []

    if _visited is None:
        _visited = set()
    try:
        real_path = base_path.resolve()
        if real_path in _visited:
            return results
        _visited.add(real_path)
        items = sorted(base_path.iterdir())
    except (OSError, RuntimeError):
        # RuntimeError: symlink loop before Python 3.13
        return results

    for item in items:
        if item.is_dir():
            if item.name not in exclude_dirs and not item.name.startswith("."):
                results.extend(
                    find_files_pathlib(patterns, item, exclude_dirs, _visited)
                )
        elif any(item.match(p) for p in patterns):
            results.append(item)

    return results


def find_allay_root(
    workspace_root: Path,
    config_file: str = "allay.toml",
    exclude_dirs=DEFAULT_EXCLUDE_DIRS,
) -> Path | None:
    """
    Find the Allay project root directory within a workspace.

    Searches for the directory containing the project config file.

    Args:
        workspace_root: The workspace root path
        config_file: Name of the project config file
        exclude_dirs: Directory names that are never searched

    Returns:
        Path to the project root, or None if not found
    """
    # Check workspace root itself
    if is_allay_root(workspace_root, config_file):
        return workspace_root

    # Check common locations first
    common_locations = ["site", "docs", "website", "www", "blog"]

    for location in common_locations:
        candidate = workspace_root / location
        if is_allay_root(candidate, config_file):
            return candidate

    # Fallback: search subdirectories (max depth 3)
    for candidate in _search_subdirectories(workspace_root, 3, exclude_dirs):
        if is_allay_root(candidate, config_file):
            return candidate

    return None


def is_allay_root(path: Path, config_file: str = "allay.toml") -> bool:
    """Check if a path is an Allay project root (holds the config file)."""
    if not path.is_dir():
        return False

    return (path / config_file).is_file()


def _search_subdirectories(
    root: Path, max_depth: int = 3, exclude_dirs=DEFAULT_EXCLUDE_DIRS
) -> list[Path]:
    """
    Recursively search subdirectories up to max_depth.

    Returns list of candidate directories.
    """
    candidates = []

    def _recurse(path: Path, depth: int):
        if depth > max_depth:
            return

        try:
            for item in sorted(path.iterdir()):
                if item.name.startswith('.') or item.name in exclude_dirs:
                    continue
                if item.is_dir():
                    candidates.append(item)
                    _recurse(item, depth + 1)
        except OSError:
            pass

    _recurse(root, 1)
    return candidates
