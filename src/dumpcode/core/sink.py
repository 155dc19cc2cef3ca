# src/dumpcode/core/sink.py
import sys
import time
import logging
from typing import Callable, List, Optional, TextIO

import pyperclip

from dumpcode.config import CLIPBOARD_ATTEMPTS, CLIPBOARD_RETRY_DELAY
from dumpcode.errors import OutputError
from dumpcode.models import ContentBlock

logger = logging.getLogger(__name__)


def render_block(block: ContentBlock) -> str:
    header = f"# file: {block.rel_path}\n\n"
    if not block.ok:
        return f"{header}> [{block.error}]\n\n"
    body = block.content
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{header}```{block.language}\n{body}```\n\n"


def build_document(tree_text: str, blocks: List[ContentBlock]) -> str:
    """The whole artifact, assembled in memory before anything is emitted."""
    parts = ["# project structure\n\n", tree_text, "\n"]
    parts.extend(render_block(b) for b in blocks)
    return "".join(parts)


class StreamSink:
    """Writes the artifact verbatim to a text stream (stdout by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def emit(self, text: str) -> None:
        stream = self.stream or sys.stdout
        try:
            stream.write(text)
            stream.flush()
        except (OSError, UnicodeError) as e:
            raise OutputError(f"Could not write output: {e}")


class ClipboardSink:
    """Places the artifact on the system clipboard, retrying briefly when it is busy."""

    def __init__(
        self,
        copy: Optional[Callable[[str], None]] = None,
        attempts: int = CLIPBOARD_ATTEMPTS,
        delay: float = CLIPBOARD_RETRY_DELAY,
    ):
        self.copy = copy
        self.attempts = attempts
        self.delay = delay

    def emit(self, text: str) -> None:
        copy = self.copy or pyperclip.copy
        for attempt in range(1, self.attempts + 1):
            try:
                copy(text)
                return
            except pyperclip.PyperclipException as e:
                if attempt == self.attempts:
                    raise OutputError(f"Failed to copy output to clipboard: {e}")
                logger.debug("Clipboard attempt %d failed: %s", attempt, e)
                time.sleep(self.delay)
