# src/dumpcode/core/scanner.py
import os
import logging
from pathlib import Path
from typing import List

from dumpcode.errors import InvalidRootError
from dumpcode.models import FileEntry, FilterConfig, NodeKind, ScanResult, TreeNode
from dumpcode.core.ignore import PathFilter

logger = logging.getLogger(__name__)


def display_name(name: str) -> str:
    """Undecodable bytes in a file name come back from os.scandir as surrogates; show them as \\xNN."""
    return os.fsencode(name).decode("utf-8", "backslashreplace")


class ProjectScanner:
    def __init__(self, root_dir: Path, config: FilterConfig):
        self.root_dir = Path(root_dir)
        self.config = config
        self.path_filter = PathFilter(config)

    def _list_dir(self, path: Path) -> List[os.DirEntry]:
        """Directory entries sorted by name so every run walks the same order."""
        with os.scandir(path) as it:
            return sorted(it, key=lambda e: e.name)

    def _device(self, entry: os.DirEntry) -> int:
        return entry.stat(follow_symlinks=False).st_dev

    def scan(self) -> ScanResult:
        """
        Walks the tree depth-first, pruning excluded directories before descending,
        and numbers eligible files in the same order the tree is rendered.

        Once max_files entries are collected, later eligible files stay in the
        tree (marked as not included) so the truncation is visible.
        """
        root = self._resolve_root()
        try:
            top_level = self._list_dir(root)
        except OSError as e:
            raise InvalidRootError(f"Cannot read directory '{root}': {e}")

        root_dev = root.stat().st_dev
        root_node = TreeNode(name=display_name(root.name or str(root)), kind=NodeKind.DIRECTORY)
        entries: List[FileEntry] = []
        truncated = 0

        # --- Iterative DFS; the stack holds (children still to visit, parent node, rel prefix) ---
        stack = [(iter(top_level), root_node, "")]
        while stack:
            children, parent, prefix = stack[-1]
            entry = next(children, None)
            if entry is None:
                stack.pop()
                continue

            name = display_name(entry.name)
            rel_path = f"{prefix}{name}"

            if entry.is_symlink():
                logger.debug("Skipping symlink: %s", rel_path)
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = entry.is_file(follow_symlinks=False)
            except OSError as e:
                logger.warning("Cannot inspect %s: %s", rel_path, e)
                continue

            # --- 1. Directories: prune, then descend ---
            if is_dir:
                if self.path_filter.is_dir_excluded(entry.name):
                    logger.debug("Pruning directory: %s", rel_path)
                    continue
                try:
                    other_fs = self._device(entry) != root_dev
                except OSError as e:
                    logger.warning("Cannot inspect %s: %s", rel_path, e)
                    continue
                if other_fs:
                    logger.debug("Not crossing into another file system: %s", rel_path)
                    continue
                node = TreeNode(name=name, kind=NodeKind.DIRECTORY)
                parent.children.append(node)
                try:
                    sub_entries = self._list_dir(Path(entry.path))
                except OSError as e:
                    logger.warning("Skipping unreadable directory %s: %s", rel_path, e)
                    node.unreadable = True
                    continue
                stack.append((iter(sub_entries), node, f"{rel_path}/"))
                continue

            # --- 2. Files: extension, then size from metadata ---
            if not is_file:
                continue
            if not self.path_filter.extension_allowed(entry.name):
                continue
            try:
                size = entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                logger.warning("Cannot stat %s: %s", rel_path, e)
                continue
            if not self.path_filter.size_allowed(size):
                logger.debug("Too large (%d bytes): %s", size, rel_path)
                continue

            included = len(entries) < self.config.max_files
            parent.children.append(
                TreeNode(name=name, kind=NodeKind.FILE, size=size, included=included)
            )
            if included:
                entries.append(FileEntry(index=len(entries), path=Path(entry.path), rel_path=rel_path))
            else:
                truncated += 1

        if truncated:
            logger.warning(
                "File limit of %d reached; %d more file(s) listed in the tree without content",
                self.config.max_files,
                truncated,
            )

        return ScanResult(root=root_node, entries=entries, truncated=truncated)

    def _resolve_root(self) -> Path:
        try:
            root = self.root_dir.resolve()
        except (OSError, RuntimeError) as e:
            raise InvalidRootError(f"Could not resolve root path '{self.root_dir}': {e}")
        if not root.exists():
            raise InvalidRootError(f"Root directory '{root}' does not exist")
        if not root.is_dir():
            raise InvalidRootError(f"Root path '{root}' is not a directory")
        return root
