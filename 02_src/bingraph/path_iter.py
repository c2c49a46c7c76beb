"""Non-recursive iteration over the files found along a search path."""

import logging
import os
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)


class PathIterator:
    """Yields the regular files directly inside each search-path directory.

    Pending directories are kept on an explicit stack and popped from the end,
    so the last search-path entry is scanned first. Subdirectories are skipped,
    never traversed. The iterator is single-use.
    """

    def __init__(self, search_path: str) -> None:
        self._pending: List[str] = []
        self._current: Optional[Iterator[os.DirEntry]] = None

        for entry in search_path.split(":"):
            if not entry:
                continue
            if os.path.isdir(entry):
                self._pending.append(entry)
            else:
                logger.debug("skipping search path entry %s: not a directory", entry)

    def __iter__(self) -> "PathIterator":
        return self

    def __next__(self) -> str:
        while True:
            if self._current is None:
                if not self._pending:
                    raise StopIteration
                self._current = self._open_next()
                continue

            entry = next(self._current, None)
            if entry is None:
                self._current = None
                continue

            try:
                if entry.is_dir():
                    continue
            except OSError as error:
                logger.debug("unable to get file type for %s: %s", entry.path, error)
                continue
            return entry.path

    def _open_next(self) -> Iterator[os.DirEntry]:
        directory = self._pending.pop()
        try:
            with os.scandir(directory) as listing:
                entries = sorted(listing, key=lambda item: item.name)
        except OSError as error:
            logger.debug("unable to read directory %s: %s", directory, error)
            return iter(())
        return iter(entries)
