"""FingerprintBuilder — parallel content hashing of a file or directory tree.

One producer thread walks the root and queues every regular file, a fixed
pool of worker threads hashes them, and one collector thread accumulates
the results.  The job queue is bounded so a large tree cannot flood memory
with pending paths.
"""

from __future__ import annotations

import logging
import os
import queue
import stat
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from dirhash.config import QUEUE_FACTOR, default_workers
from dirhash.errors import (
    BuildCancelled,
    FingerprintError,
    HashError,
    PathError,
    TraversalError,
)
from dirhash.hashing.hasher import Hasher
from dirhash.hashing.models import FingerprintSet

logger = logging.getLogger(__name__)

_STOP = object()


@dataclass
class _Result:
    """One record per dispatched job: either a digest or an error."""

    path: str
    relative: str = ""
    digest: str = ""
    error: BaseException | None = None


class _JobCounter:
    """Dispatched-vs-completed bookkeeping for a single build.

    The total job count is unknown until the walk ends, so completion is
    "walk closed and every dispatched job completed".
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._dispatched = 0
        self._completed = 0
        self._closed = False

    def dispatch(self) -> None:
        with self._cond:
            self._dispatched += 1

    def complete(self) -> None:
        with self._cond:
            self._completed += 1
            self._cond.notify_all()

    def close(self) -> None:
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def wait(self) -> int:
        """Block until all dispatched jobs are accounted for; return the count."""
        with self._cond:
            self._cond.wait_for(
                lambda: self._closed and self._completed == self._dispatched
            )
            return self._dispatched


def _iter_regular_files(root: str) -> Iterator[str]:
    """Yield the path of every regular file below directory *root*.

    Symbolic links are neither followed nor yielded.
    """
    stack = [root]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as exc:
            raise TraversalError(
                f"cannot list directory '{current}': {exc}", path=current,
            ) from exc

        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    stack.append(entry.path)
                elif entry.is_file(follow_symlinks=False):
                    yield entry.path
            except OSError as exc:
                raise TraversalError(
                    f"cannot stat '{entry.path}': {exc}", path=entry.path,
                ) from exc


def relative_key(root: str, path: str, single_file: bool = False) -> str:
    """Return the ``/``-separated key for *path* relative to *root*.

    When *root* is itself a file, the key is its base name.
    """
    if single_file:
        return os.path.basename(os.path.normpath(root))
    try:
        rel = os.path.relpath(path, root)
    except ValueError as exc:
        raise PathError(
            f"cannot compute path of '{path}' relative to '{root}': {exc}", path=path,
        ) from exc
    if rel == os.curdir or rel == os.pardir or rel.startswith(os.pardir + os.sep):
        raise PathError(f"'{path}' is not below root '{root}'", path=path)
    return rel.replace(os.sep, "/")


class FingerprintBuilder:
    """Build a :class:`FingerprintSet` for a file or directory.

    Parameters
    ----------
    workers:
        Number of hashing threads.  ``None`` or ``0`` uses the CPU count.
    queue_factor:
        Job queue capacity as a multiple of *workers*.
    hasher:
        Object with a ``hash_file(path)`` method; defaults to :class:`Hasher`.
    """

    def __init__(
        self,
        workers: int | None = None,
        queue_factor: int = QUEUE_FACTOR,
        hasher: Hasher | None = None,
    ) -> None:
        if workers is not None and workers < 0:
            raise ValueError(f"workers must be >= 0, got {workers}")
        if queue_factor < 1:
            raise ValueError(f"queue_factor must be >= 1, got {queue_factor}")
        self.workers = workers or default_workers()
        self.queue_factor = queue_factor
        self._hasher = hasher or Hasher()

    def build(
        self,
        root: str | Path,
        cancel: threading.Event | None = None,
    ) -> FingerprintSet:
        """Hash every regular file under *root*.

        Parameters
        ----------
        root:
            A directory to walk recursively, or a single regular file.
        cancel:
            Optional event; setting it makes the build stop early and raise
            :class:`BuildCancelled`.

        Returns
        -------
        FingerprintSet
            One entry per regular file, keyed by ``/``-separated relative path.

        Raises
        ------
        TraversalError, HashError, PathError, BuildCancelled
            The first failure encountered.  No partial set is returned.
        """
        root_str = os.fspath(root)
        try:
            root_stat = os.stat(root_str)
        except OSError as exc:
            raise TraversalError(
                f"cannot access root '{root_str}': {exc}", path=root_str,
            ) from exc

        single_file = stat.S_ISREG(root_stat.st_mode)
        is_dir = stat.S_ISDIR(root_stat.st_mode)

        logger.info("Fingerprinting '%s' with %d workers", root_str, self.workers)

        jobs: queue.Queue = queue.Queue(maxsize=self.workers * self.queue_factor)
        results: queue.Queue = queue.Queue()
        counter = _JobCounter()

        entries: dict[str, str] = {}
        errors: list[BaseException] = []

        def produce() -> None:
            try:
                if single_file:
                    paths: Iterator[str] = iter([root_str])
                elif is_dir:
                    paths = _iter_regular_files(root_str)
                else:
                    paths = iter([])
                for path in paths:
                    if cancel is not None and cancel.is_set():
                        raise BuildCancelled(
                            f"fingerprinting of '{root_str}' was cancelled", path=root_str,
                        )
                    counter.dispatch()
                    jobs.put(path)
            except Exception as exc:
                # Walk failures travel the result stream like any other record
                counter.dispatch()
                results.put(_Result(path=getattr(exc, "path", None) or root_str, error=exc))
            finally:
                counter.close()
                for _ in range(self.workers):
                    jobs.put(_STOP)

        def work() -> None:
            while True:
                path = jobs.get()
                if path is _STOP:
                    return
                results.put(self._process(root_str, path, single_file, cancel))

        def collect() -> None:
            while True:
                record = results.get()
                if record is _STOP:
                    return
                if record.error is not None:
                    if errors:
                        logger.debug("Dropping additional error for '%s': %s", record.path, record.error)
                    else:
                        errors.append(record.error)
                else:
                    entries[record.relative] = record.digest
                counter.complete()

        collector = threading.Thread(target=collect, name="dirhash-collector", daemon=True)
        pool = [
            threading.Thread(target=work, name=f"dirhash-worker-{i}", daemon=True)
            for i in range(self.workers)
        ]
        producer = threading.Thread(target=produce, name="dirhash-producer", daemon=True)

        collector.start()
        for t in pool:
            t.start()
        producer.start()

        total = counter.wait()

        producer.join()
        for t in pool:
            t.join()
        results.put(_STOP)
        collector.join()

        if errors:
            logger.info("Fingerprinting '%s' failed: %s", root_str, errors[0])
            raise errors[0]

        logger.info("Fingerprinted %d files under '%s'", total, root_str)
        return FingerprintSet(root_str, entries)

    def _process(
        self,
        root: str,
        path: str,
        single_file: bool,
        cancel: threading.Event | None,
    ) -> _Result:
        """Hash one file, turning every failure into an error record."""
        if cancel is not None and cancel.is_set():
            return _Result(
                path=path,
                error=BuildCancelled(f"fingerprinting of '{root}' was cancelled", path=root),
            )
        try:
            relative = relative_key(root, path, single_file)
            digest = self._hasher.hash_file(path)
        except FingerprintError as exc:
            return _Result(path=path, error=exc)
        except OSError as exc:
            logger.debug("Hashing '%s' failed", path, exc_info=True)
            err = HashError(f"cannot hash file '{path}': {exc}", path=path)
            err.__cause__ = exc
            return _Result(path=path, error=err)
        except Exception as exc:
            return _Result(path=path, error=exc)
        return _Result(path=path, relative=relative, digest=digest)


def build_fingerprints(
    root: str | Path,
    workers: int | None = None,
    cancel: threading.Event | None = None,
) -> FingerprintSet:
    """Convenience wrapper around :meth:`FingerprintBuilder.build`."""
    return FingerprintBuilder(workers=workers).build(root, cancel=cancel)
