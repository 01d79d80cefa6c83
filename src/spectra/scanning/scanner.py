"""Streaming scan-and-aggregate engine.

Directory listing is fanned out over a thread pool; every listing comes back
to the calling thread, which is the only writer of the extension ledger, the
top-K tracker and the running totals. No full file list is ever held.
"""

import os
import stat as statmod
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Set, Tuple, Union

from ..exceptions import EntryUnreadableError, RootUnreadableError
from ..logging_config import get_logger
from ..models import FileRecord, ScanStats
from .ledger import ExtensionLedger
from .topk import TopKTracker

logger = get_logger(__name__)

DEFAULT_TOP_LIMIT = 10

ProgressCb = Callable[[int, int, int], None]  # (files, folders, bytes_scanned)


@dataclass
class DirectoryListing:
    """Metadata of one directory's immediate children, produced by a walker."""

    path: str
    files: List[Tuple[str, str, int]] = field(default_factory=list)  # (path, name, size)
    subdirs: List[str] = field(default_factory=list)
    errors: List[EntryUnreadableError] = field(default_factory=list)


def list_directory(dir_path: str) -> DirectoryListing:
    """Classify the children of *dir_path* without recursing.

    Symlinks and special files are ignored. Children whose metadata cannot
    be read are reported in ``errors`` rather than raised.

    Raises:
        EntryUnreadableError: if *dir_path* itself cannot be listed.
    """
    listing = DirectoryListing(path=dir_path)
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                try:
                    if entry.is_symlink():
                        continue
                    st = entry.stat(follow_symlinks=False)
                except OSError as e:
                    listing.errors.append(EntryUnreadableError(entry.path, str(e)))
                    continue

                mode = st.st_mode
                if statmod.S_ISDIR(mode):
                    listing.subdirs.append(entry.path)
                elif statmod.S_ISREG(mode):
                    listing.files.append((entry.path, entry.name, st.st_size))
    except OSError as e:
        raise EntryUnreadableError(dir_path, str(e))
    return listing


class _ScanAccumulator:
    """Ledger, tracker and counters owned by one scan."""

    def __init__(self, top_limit: int) -> None:
        self.ledger = ExtensionLedger()
        self.tracker = TopKTracker(top_limit)
        self.total_files = 0
        self.total_folders = 0
        self.total_size_bytes = 0

    def add_file(self, path: str, name: str, size: int) -> None:
        self.total_files += 1
        self.total_size_bytes += size
        self.ledger.record(os.path.splitext(name)[1], size)
        self.tracker.offer(FileRecord(path=path, size_bytes=size))

    def absorb(self, listing: DirectoryListing) -> None:
        self.total_folders += len(listing.subdirs)
        for path, name, size in listing.files:
            self.add_file(path, name, size)
        for err in listing.errors:
            logger.debug("Skipping unreadable entry: %s", err)

    def finish(self, root_path: str, started: float) -> ScanStats:
        top_files = self.tracker.drain_sorted()
        return ScanStats(
            root_path=root_path,
            total_files=self.total_files,
            total_folders=self.total_folders,
            total_size_bytes=self.total_size_bytes,
            scan_duration_ms=int((time.perf_counter() - started) * 1000),
            extensions=self.ledger.as_dict(),
            top_files=top_files,
        )


class Scanner:
    """Profiles one directory tree.

    Usage::

        stats = Scanner("/data", top_limit=20).scan()
    """

    def __init__(
        self,
        root: Union[str, Path],
        top_limit: int = DEFAULT_TOP_LIMIT,
        workers: Optional[int] = None,
        progress: Optional[ProgressCb] = None,
    ) -> None:
        if top_limit < 0:
            raise ValueError("top_limit must be non-negative")
        if workers is not None and workers < 1:
            raise ValueError("workers must be at least 1")
        self.root = str(root)
        self.top_limit = top_limit
        self.workers = workers or min(32, (os.cpu_count() or 1) + 4)
        self.progress = progress

    def scan(self) -> ScanStats:
        """Run the scan and return the aggregated statistics.

        Raises:
            RootUnreadableError: if the root cannot be statted or listed.
        """
        started = time.perf_counter()
        acc = _ScanAccumulator(self.top_limit)

        try:
            root_stat = os.stat(self.root)
        except OSError as e:
            raise RootUnreadableError(self.root, e.strerror or str(e))

        if statmod.S_ISREG(root_stat.st_mode):
            acc.add_file(self.root, os.path.basename(self.root), root_stat.st_size)
            return acc.finish(self.root, started)
        if not statmod.S_ISDIR(root_stat.st_mode):
            raise RootUnreadableError(self.root, "not a regular file or directory")

        try:
            root_listing = list_directory(self.root)
        except EntryUnreadableError as e:
            raise RootUnreadableError(self.root, e.reason)

        acc.total_folders += 1  # the root itself
        self._walk(root_listing, acc)

        stats = acc.finish(self.root, started)
        logger.debug(
            "Scanned %s: %d files, %d folders, %d bytes in %d ms",
            stats.root_path,
            stats.total_files,
            stats.total_folders,
            stats.total_size_bytes,
            stats.scan_duration_ms,
        )
        return stats

    def _walk(self, root_listing: DirectoryListing, acc: _ScanAccumulator) -> None:
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            pending: Set[Future] = {pool.submit(list_directory, d) for d in root_listing.subdirs}
            acc.absorb(root_listing)
            self._report(acc)

            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    try:
                        listing = future.result()
                    except EntryUnreadableError as err:
                        logger.debug("Skipping unreadable directory: %s", err)
                        continue
                    pending.update(pool.submit(list_directory, d) for d in listing.subdirs)
                    acc.absorb(listing)
                self._report(acc)

    def _report(self, acc: _ScanAccumulator) -> None:
        if self.progress is not None:
            self.progress(acc.total_files, acc.total_folders, acc.total_size_bytes)


def scan(
    root: Union[str, Path],
    top_limit: int = DEFAULT_TOP_LIMIT,
    workers: Optional[int] = None,
    progress: Optional[ProgressCb] = None,
) -> ScanStats:
    """Scan *root* and keep the *top_limit* largest files."""
    return Scanner(root, top_limit=top_limit, workers=workers, progress=progress).scan()
