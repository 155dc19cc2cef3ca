# src/dumpcode/core/aggregator.py
import os
import time
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from functools import partial
from typing import Callable, List, Optional

from dumpcode.models import ContentBlock, FileEntry
from dumpcode.utils.languages import language_for

logger = logging.getLogger(__name__)

BINARY_MARKER = "binary file omitted"
TOO_LARGE_MARKER = "file exceeds size limit"

Reader = Callable[[FileEntry], ContentBlock]


def default_workers() -> int:
    return min(32, (os.cpu_count() or 1) + 4)


def read_entry(entry: FileEntry, max_size_bytes: int) -> ContentBlock:
    """
    Reads one file into a ContentBlock.
    Anything that goes wrong here (file gone, permissions, grew past the limit,
    not UTF-8 text) becomes an error block instead of an exception.
    """
    start = time.perf_counter()
    try:
        with entry.path.open("rb") as f:
            # One byte past the limit is enough to tell the file grew since the walk
            data = f.read(max_size_bytes + 1)
    except OSError as e:
        logger.warning("Could not read %s: %s", entry.rel_path, e)
        return ContentBlock(
            rel_path=entry.rel_path,
            language=language_for(entry.rel_path),
            error=f"file unreadable: {e.strerror or e}",
        )

    if len(data) > max_size_bytes:
        logger.warning("%s grew past the size limit since it was listed", entry.rel_path)
        return ContentBlock(rel_path=entry.rel_path, language=language_for(entry.rel_path), error=TOO_LARGE_MARKER)

    if b"\0" in data:
        logger.warning("Skipping binary file %s", entry.rel_path)
        return ContentBlock(rel_path=entry.rel_path, language=language_for(entry.rel_path), error=BINARY_MARKER)

    try:
        content = data.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Skipping non-UTF-8 file %s", entry.rel_path)
        return ContentBlock(rel_path=entry.rel_path, language=language_for(entry.rel_path), error=BINARY_MARKER)

    logger.debug("Read %s in %.2fms", entry.rel_path, (time.perf_counter() - start) * 1000)
    return ContentBlock(rel_path=entry.rel_path, language=language_for(entry.rel_path, content), content=content)


def aggregate(
    entries: List[FileEntry],
    max_size_bytes: int,
    max_workers: Optional[int] = None,
    reader: Optional[Reader] = None,
) -> List[ContentBlock]:
    """
    Reads every entry on a thread pool and returns blocks in entry order.

    Each future owns exactly one slot of a pre-sized list (its entry.index), so
    results land in walk order whatever order the reads finish in.
    """
    if reader is None:
        reader = partial(read_entry, max_size_bytes=max_size_bytes)

    if not entries:
        return []
    results: List[Optional[ContentBlock]] = [None] * len(entries)

    with ThreadPoolExecutor(
        max_workers=max_workers or default_workers(),
        thread_name_prefix="dumpcode",
    ) as executor:
        future_to_entry = {executor.submit(reader, entry): entry for entry in entries}
        for future in as_completed(future_to_entry):
            entry = future_to_entry[future]
            try:
                results[entry.index] = future.result()
            except Exception as e:
                # Per-file failure stays per-file
                logger.warning("Unexpected error reading %s: %s", entry.rel_path, e)
                results[entry.index] = ContentBlock(
                    rel_path=entry.rel_path,
                    language=language_for(entry.rel_path),
                    error=f"file unreadable: {e}",
                )

    return results
