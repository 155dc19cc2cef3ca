# src/dumpcode/models.py
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, List, Optional

from dumpcode.config import DEFAULT_MAX_FILES, DEFAULT_MAX_SIZE_KB
from dumpcode.errors import ConfigError


class NodeKind(Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class FilterConfig:
    """Immutable filter settings shared by the whole run."""
    extensions: FrozenSet[str] = frozenset()
    exclude_dirs: FrozenSet[str] = frozenset()
    max_size_kb: int = DEFAULT_MAX_SIZE_KB
    max_files: int = DEFAULT_MAX_FILES

    def __post_init__(self):
        if self.max_size_kb < 0:
            raise ConfigError(f"max size must be >= 0 (got {self.max_size_kb})")
        if self.max_files < 0:
            raise ConfigError(f"max files must be >= 0 (got {self.max_files})")

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_kb * 1024


@dataclass
class TreeNode:
    name: str
    kind: NodeKind
    children: List["TreeNode"] = field(default_factory=list)
    size: int = 0
    included: bool = True
    unreadable: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


@dataclass(frozen=True)
class FileEntry:
    """An eligible file and its slot in the final output."""
    index: int
    path: Path
    rel_path: str


@dataclass(frozen=True)
class ContentBlock:
    rel_path: str
    language: str = ""
    content: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class ScanResult:
    root: TreeNode
    entries: List[FileEntry]
    truncated: int = 0
