"""
File system traversal: walk directories and collect C# source files.

Generated sources (``*.g.cs``, ``*.Designer.cs``, ...) are skipped by default
so that a second run does not analyze the output of the first one. Build
output directories of the usual .NET layout (``bin``, ``obj``) are ignored.

Typical usage:
    from pathlib import Path
    from disposegen.traversal import find_cs_files

    files = find_cs_files(Path("./MySolution"))
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Set

logger = logging.getLogger(__name__)

CS_SUFFIX = ".cs"

# Suffixes written by source generators and designers
GENERATED_SUFFIXES: tuple[str, ...] = (
    ".g.cs",
    ".g.i.cs",
    ".designer.cs",
    ".generated.cs",
)

DEFAULT_IGNORE_DIRS: Set[str] = {
    # .NET build output
    "bin",
    "obj",
    "artifacts",
    "TestResults",
    "packages",

    # Version control
    ".git",
    ".svn",
    ".hg",

    # IDE and editor directories
    ".vs",
    ".vscode",
    ".idea",

    # Tooling caches
    "node_modules",
    "__pycache__",
    ".cache",
}


def is_cs_file(path: Path) -> bool:
    """
    Check if a file is a C# source file (.cs extension, case-insensitive).

    Examples:
        >>> is_cs_file(Path("Program.cs"))
        True
        >>> is_cs_file(Path("Program.csproj"))
        False
    """
    return path.suffix.lower() == CS_SUFFIX


def is_generated_file(path: Path) -> bool:
    """
    Check if a C# file looks like generator or designer output.

    Examples:
        >>> is_generated_file(Path("Ns.Foo.Dispose.g.cs"))
        True
        >>> is_generated_file(Path("Form1.Designer.cs"))
        True
        >>> is_generated_file(Path("Foo.cs"))
        False
    """
    name = path.name.lower()
    return any(name.endswith(suffix) for suffix in GENERATED_SUFFIXES)


def should_ignore_directory(dir_path: Path, ignore_dirs: Set[str]) -> bool:
    """Return True if the directory's name is in ignore_dirs (case-sensitive)."""
    return dir_path.name in ignore_dirs


def find_source_files(
    root: Path,
    include_generated: bool = False,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
    filter_fn: Optional[Callable[[Path], bool]] = None,
) -> list[Path]:
    """
    Recursively find C# source files under root.

    Args:
        root: Root directory to start traversal from.
        include_generated: If True, also collect generated sources (*.g.cs etc).
        ignore_dirs: Directory names to skip. If None, uses DEFAULT_IGNORE_DIRS.
        follow_symlinks: If True, follow symbolic links during traversal.
        filter_fn: Optional extra predicate; only paths for which it returns
                   True are collected.

    Returns:
        Sorted list of matching paths.

    Raises:
        FileNotFoundError: If root does not exist.
        NotADirectoryError: If root is not a directory.

    Notes:
        Permission errors on subdirectories are logged and skipped.
    """
    if ignore_dirs is None:
        ignore_dirs = DEFAULT_IGNORE_DIRS

    root = root.resolve()

    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        raise FileNotFoundError(f"Root directory does not exist: {root}")

    if not root.is_dir():
        logger.error("Root path is not a directory: %s", root)
        raise NotADirectoryError(f"Root path is not a directory: {root}")

    logger.info("Starting traversal from: %s", root)
    logger.debug(
        "Traversal config: include_generated=%s, follow_symlinks=%s, ignore_dirs=%s",
        include_generated,
        follow_symlinks,
        ignore_dirs,
    )

    collected: list[Path] = []

    def _wants(entry: Path) -> bool:
        if not is_cs_file(entry):
            return False
        if not include_generated and is_generated_file(entry):
            logger.debug("Skipping generated file: %s", entry)
            return False
        if filter_fn is not None and not filter_fn(entry):
            logger.debug("Filtered out by custom filter: %s", entry)
            return False
        return True

    def _walk_directory(current_dir: Path) -> None:
        try:
            for entry in current_dir.iterdir():
                if entry.is_symlink() and not follow_symlinks:
                    logger.debug("Skipping symlink: %s", entry)
                    continue

                if entry.is_dir():
                    if should_ignore_directory(entry, ignore_dirs):
                        logger.debug("Ignoring directory: %s", entry)
                        continue
                    _walk_directory(entry)
                elif entry.is_file() and _wants(entry):
                    logger.debug("Found source file: %s", entry)
                    collected.append(entry)

        except PermissionError as e:
            logger.warning("Permission denied accessing directory %s: %s", current_dir, e)
        except OSError as e:
            logger.warning("Error accessing directory %s: %s", current_dir, e)

    _walk_directory(root)

    # Sort for deterministic ordering
    collected.sort()

    logger.info(
        "Traversal complete: found %d source file(s) in %s",
        len(collected),
        root,
    )

    return collected


def find_cs_files(
    root: Path,
    ignore_dirs: Optional[Set[str]] = None,
    follow_symlinks: bool = False,
) -> list[Path]:
    """
    Recursively find hand-written .cs files in a directory tree.

    Convenience wrapper around find_source_files() that leaves generated
    sources out. This is what the CLI uses for directory targets.
    """
    return find_source_files(
        root=root,
        include_generated=False,
        ignore_dirs=ignore_dirs,
        follow_symlinks=follow_symlinks,
    )
