# src/dumpcode/core/ignore.py
from pathlib import Path
from typing import Iterable

import pathspec

from dumpcode.models import FilterConfig

GLOB_CHARS = set("*?[]\\")


def _escape(name: str) -> str:
    """Backslash-escapes every character gitignore syntax would treat specially."""
    escaped = "".join(f"\\{ch}" if ch in GLOB_CHARS else ch for ch in name)
    if escaped[0] in "!#":
        escaped = "\\" + escaped
    return escaped


def build_exclude_spec(names: Iterable[str]) -> pathspec.GitIgnoreSpec:
    """
    Compiles directory exclusions into a gitignore-style spec.
    Every entry becomes an escaped, directory-only pattern ('venv' -> 'venv/'), so an
    entry matches a directory of exactly that name and never a file or a look-alike.
    """
    lines = []
    for name in sorted(names):
        name = name.strip().rstrip("/")
        if not name:
            continue
        lines.append(f"{_escape(name)}/")
    return pathspec.GitIgnoreSpec.from_lines(lines)


class PathFilter:
    """Decides whether a directory is pruned and whether a file is eligible."""

    def __init__(self, config: FilterConfig):
        self.config = config
        self.exclude_spec = build_exclude_spec(config.exclude_dirs)
        self.match_all = not config.extensions

    def is_dir_excluded(self, name: str) -> bool:
        return self.exclude_spec.match_file(f"{name}/")

    def extension_allowed(self, name: str) -> bool:
        if self.match_all:
            return True
        # Case-insensitive: 'Main.PY' passes an allow-list containing 'py'
        ext = Path(name).suffix.lower().lstrip(".")
        return bool(ext) and ext in self.config.extensions

    def size_allowed(self, size: int) -> bool:
        return size <= self.config.max_size_bytes
