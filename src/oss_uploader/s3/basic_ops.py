import logging
from pathlib import Path

from oss_uploader.errors import IoError
from oss_uploader.s3.remote import S3Remote, remote_call

logger = logging.getLogger(__name__)

_DOWNLOAD_CHUNK_SIZE = 1024 * 1024


def upload_file(remote: S3Remote, file_path: Path, object_name: str) -> int:
    """Upload a small file with a single PUT, returns the number of bytes sent."""
    try:
        data = file_path.read_bytes()
    except OSError as e:
        raise IoError(f"Error reading {file_path}: {e}") from e
    remote.put_object(object_name, data)
    logger.info(f"Uploaded {file_path} to {remote.bucket}/{object_name}")
    return len(data)


def download_file(remote: S3Remote, object_name: str, file_path: Path) -> Path:
    """Stream an object into ``file_path``.

    Failures while reading the body are remote errors, failures writing the
    local file are IoError.
    """
    body = remote.get_object(object_name)
    try:
        with open(file_path, "wb") as f:
            with remote_call("get_object", object_name):
                for chunk in body.iter_chunks(chunk_size=_DOWNLOAD_CHUNK_SIZE):
                    f.write(chunk)
            f.flush()
    except OSError as e:
        raise IoError(f"Error writing {file_path}: {e}") from e
    finally:
        body.close()
    logger.info(f"Downloaded {object_name} from {remote.bucket} to {file_path}")
    return file_path


def delete_file(remote: S3Remote, object_name: str) -> None:
    remote.delete_object(object_name)
    logger.info(f"Deleted {remote.bucket}/{object_name}")
