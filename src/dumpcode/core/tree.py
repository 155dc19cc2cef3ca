# src/dumpcode/core/tree.py
from typing import List

from dumpcode.models import TreeNode


def _label(node: TreeNode) -> str:
    if node.is_dir:
        return f"{node.name}/ (unreadable)" if node.unreadable else f"{node.name}/"
    label = f"{node.name} [{node.size // 1024}kb]"
    if not node.included:
        label += " (omitted)"
    return label


def render_tree(root: TreeNode) -> str:
    """Generates a string representation of the project tree."""
    # A filesystem root such as "/" already ends in a separator
    header = root.name if root.name.endswith(("/", "\\")) else f"{root.name}/"
    lines: List[str] = [header]

    def _generate_lines_recursive(node: TreeNode, prefix: str):
        entries = node.children
        for i, child in enumerate(entries):
            is_last = (i == len(entries) - 1)
            connector = "└── " if is_last else "├── "
            lines.append(f"{prefix}{connector}{_label(child)}")

            if child.children:
                new_prefix = prefix + ("    " if is_last else "│   ")
                _generate_lines_recursive(child, new_prefix)

    _generate_lines_recursive(root, "")
    return "\n".join(lines) + "\n"
