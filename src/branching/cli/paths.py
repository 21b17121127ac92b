from __future__ import annotations

"""Utilities for resolving output paths."""

from pathlib import Path

from branching.io.export import with_csv_suffix

DEFAULT_TREE_NAME = "current"


def outputs_dir() -> Path:
    return Path.cwd() / "outputs"


def trees_dir() -> Path:
    return outputs_dir() / "trees"


def exports_dir() -> Path:
    return outputs_dir() / "exports"


def stats_dir() -> Path:
    return outputs_dir() / "stats"


def ensure_output_dirs() -> None:
    trees_dir().mkdir(parents=True, exist_ok=True)
    exports_dir().mkdir(parents=True, exist_ok=True)
    stats_dir().mkdir(parents=True, exist_ok=True)


def last_stats_path() -> str:
    ensure_output_dirs()
    return str(stats_dir() / "last.yaml")


def resolve_tree_path(name: str) -> str:
    """Resolve a saved-tree filename under outputs/trees.

    Only the base name is used; ``.yaml`` is added when missing.
    """
    ensure_output_dirs()
    base = Path(name).name
    if not base.endswith(".yaml"):
        base = f"{base}.yaml"
    return str(trees_dir() / base)


def resolve_export_path(name: str) -> str:
    """Resolve an export filename under outputs/exports, adding ``.csv`` when missing."""
    ensure_output_dirs()
    return str(exports_dir() / with_csv_suffix(Path(name).name))


def find_tree_file(name_or_path: str) -> str:
    """
    Find a saved tree.

    1. If path exists as-is, use it
    2. If path exists with .yaml extension, use it
    3. Otherwise, look in outputs/trees/

    Raises:
        FileNotFoundError: If file cannot be found
    """
    p = Path(name_or_path)
    if p.is_file():
        return str(p)

    if not str(name_or_path).endswith(".yaml"):
        p_with_yaml = Path(f"{name_or_path}.yaml")
        if p_with_yaml.is_file():
            return str(p_with_yaml)

    base_name = p.name
    if not base_name.endswith(".yaml"):
        base_name = f"{base_name}.yaml"

    tree_file = trees_dir() / base_name
    if tree_file.is_file():
        return str(tree_file)

    raise FileNotFoundError(
        f"Tree file not found: '{name_or_path}'\nLooked in:\n  - {name_or_path}\n  - {tree_file}\n"
        "Run 'branching generate' first."
    )


__all__ = [
    "DEFAULT_TREE_NAME",
    "outputs_dir",
    "trees_dir",
    "exports_dir",
    "stats_dir",
    "ensure_output_dirs",
    "last_stats_path",
    "resolve_tree_path",
    "resolve_export_path",
    "find_tree_file",
]
