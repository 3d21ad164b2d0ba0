import logging
from collections import deque
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from threading import Event, Lock, Semaphore

from oss_uploader.progress import ProgressAggregator
from oss_uploader.s3.multipart.completed_part import CompletedPart
from oss_uploader.s3.multipart.part_task import PartTask
from oss_uploader.s3.multipart.upload_session import UploadSession
from oss_uploader.s3.remote import S3Remote
from oss_uploader.types import MAX_WORKERS

logger = logging.getLogger(__name__)


class _PartQueue:
    """Parts waiting for a worker, each one is handed out exactly once."""

    def __init__(self, parts: Sequence[PartTask]) -> None:
        self._parts: deque[PartTask] = deque(parts)
        self._lock = Lock()

    def pop(self) -> PartTask | None:
        with self._lock:
            if not self._parts:
                return None
            return self._parts.popleft()


class _Results:
    def __init__(self) -> None:
        self.completed: list[CompletedPart] = []
        self.first_error: Exception | None = None
        self.failed = Event()
        self._lock = Lock()

    def add_completed(self, part: CompletedPart) -> None:
        with self._lock:
            self.completed.append(part)

    def add_error(self, err: Exception) -> None:
        with self._lock:
            if self.first_error is None:
                self.first_error = err
        self.failed.set()


def _upload_one(remote: S3Remote, session: UploadSession, part: PartTask) -> CompletedPart:
    assert part.payload is not None, f"Part {part.part_number} was already uploaded"
    logger.debug(
        f"Uploading part {part.part_number}/{session.total_parts} of {session.key} ({part.size()} bytes)"
    )
    etag = remote.upload_part(
        session.upload_id, session.key, part.part_number, part.payload
    )
    return CompletedPart(part_number=part.part_number, etag=etag)


def upload_parts(
    remote: S3Remote,
    session: UploadSession,
    parts: Sequence[PartTask],
    worker_limit: int = MAX_WORKERS,
    progress: ProgressAggregator | None = None,
    stop_on_failure: bool = False,
) -> list[CompletedPart]:
    """Upload every part with at most ``worker_limit`` uploads in flight.

    Parts are uploaded in no particular order and the returned list is in
    completion order. If any part fails, the first error is raised once every
    in-flight upload has finished and the other results are thrown away. The
    remote session is left open either way.

    With ``stop_on_failure`` workers stop taking new parts after a failure,
    otherwise every part is still attempted.
    """
    if worker_limit < 1:
        raise ValueError(f"worker_limit must be at least 1, got {worker_limit}")
    queue = _PartQueue(parts)
    gate = Semaphore(worker_limit)
    results = _Results()

    def worker() -> None:
        with gate:
            if stop_on_failure and results.failed.is_set():
                return
            part = queue.pop()
            if part is None:
                return
            size = part.size()
            try:
                finished = _upload_one(remote, session, part)
            except Exception as e:
                logger.warning(f"Error uploading part {part.part_number} of {session.key}: {e}")
                results.add_error(e)
                return
            finally:
                part.dispose()
            results.add_completed(finished)
            if progress is not None:
                progress.add(size)

    with ThreadPoolExecutor(
        max_workers=worker_limit, thread_name_prefix="oss-upload"
    ) as executor:
        futures = [executor.submit(worker) for _ in range(len(parts))]
    for fut in futures:
        # Anything raised outside the upload call itself, e.g. by the progress listener.
        err = fut.exception()
        if err is None:
            continue
        logger.warning(f"Error in upload worker for {session.key}: {err}")
        if results.first_error is None:
            results.first_error = err  # type: ignore[assignment]

    if results.first_error is not None:
        raise results.first_error
    logger.info(f"Uploaded {len(results.completed)} parts of {session.key}")
    return results.completed
