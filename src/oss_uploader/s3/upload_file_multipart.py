import logging
import os
from pathlib import Path

from oss_uploader.errors import IoError, RemoteApiError
from oss_uploader.progress import ProgressAggregator
from oss_uploader.s3.completion import FinalizeRequest, assemble, complete_upload
from oss_uploader.s3.multipart.upload_session import UploadSession
from oss_uploader.s3.part_reader import read_parts
from oss_uploader.s3.remote import S3Remote
from oss_uploader.s3.upload_scheduler import upload_parts
from oss_uploader.types import BATCH_SIZE, MAX_WORKERS, format_size

logger = logging.getLogger(__name__)


def prepare_upload_file_multipart(
    remote: S3Remote,
    file_path: Path,
    file_size: int | None,
    object_name: str,
    part_size: int,
) -> UploadSession:
    """Open a remote multi-part session for ``file_path``."""
    if file_size is None:
        try:
            file_size = os.path.getsize(file_path)
        except OSError as e:
            raise IoError(f"Cannot stat {file_path}: {e}") from e
    logger.info(
        f"Creating multipart upload for {file_path} to {remote.bucket}/{object_name}"
    )
    upload_id = remote.create_session(object_name)
    return UploadSession(
        bucket=remote.bucket,
        key=object_name,
        upload_id=upload_id,
        file_size=file_size,
        part_size=part_size,
    )


def _abort(remote: S3Remote, session: UploadSession) -> None:
    logger.info(f"Aborting multipart upload {session.upload_id} of {session.key}")
    try:
        remote.abort_session(session.upload_id, session.key)
    except RemoteApiError as e:
        logger.warning(f"Error aborting upload {session.upload_id}: {e}")


def upload_file_multipart(
    remote: S3Remote,
    file_path: Path,
    object_name: str,
    file_size: int | None = None,
    part_size: int = BATCH_SIZE,
    upload_threads: int = MAX_WORKERS,
    progress: ProgressAggregator | None = None,
    abort_on_failure: bool = False,
    stop_on_failure: bool = False,
) -> FinalizeRequest:
    """Upload a file to the bucket using a multi-part session.

    The file is read into memory part by part, then the parts are uploaded
    by ``upload_threads`` workers, ordered and committed.

    On failure the session is left open unless ``abort_on_failure`` is set,
    in which case one abort is attempted before the error is re-raised.
    """
    session = prepare_upload_file_multipart(
        remote=remote,
        file_path=file_path,
        file_size=file_size,
        object_name=object_name,
        part_size=part_size,
    )
    logger.info(
        f"Uploading {file_path} ({format_size(session.file_size)}) "
        f"in {session.total_parts} parts of {format_size(part_size)}"
    )
    try:
        try:
            with open(file_path, "rb") as f:
                parts = read_parts(f, session)
        except OSError as e:
            raise IoError(f"Error reading {file_path}: {e}") from e
        completed = upload_parts(
            remote=remote,
            session=session,
            parts=parts,
            worker_limit=upload_threads,
            progress=progress,
            stop_on_failure=stop_on_failure,
        )
        request = assemble(completed, session.total_parts, session)
        complete_upload(remote, request)
    except Exception:
        if abort_on_failure:
            _abort(remote, session)
        else:
            logger.warning(
                f"Multipart upload {session.upload_id} of {session.key} left open on the server"
            )
        raise
    if progress is not None:
        progress.mark_done()
    logger.info(
        f"Multipart upload completed: {file_path} to {session.bucket}/{session.key}"
    )
    return request
