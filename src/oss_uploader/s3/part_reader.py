import logging
from collections.abc import Iterator
from typing import BinaryIO

from oss_uploader.errors import IoError
from oss_uploader.s3.multipart.part_task import PartTask
from oss_uploader.s3.multipart.upload_session import UploadSession

logger = logging.getLogger(__name__)


def iter_parts(fh: BinaryIO, session: UploadSession) -> Iterator[PartTask]:
    """Read ``fh`` front to back, yielding one PartTask per planned part.

    Raises IoError if the file ends before ``session.file_size`` bytes were read.
    """
    for part_number in range(1, session.total_parts + 1):
        expected = session.part_length(part_number)
        try:
            data = fh.read(expected)
        except OSError as e:
            raise IoError(
                f"Error reading part {part_number} of {session.key}: {e}"
            ) from e
        if len(data) != expected:
            raise IoError(
                f"Short read for part {part_number} of {session.key}: "
                f"expected {expected} bytes, got {len(data)}"
            )
        logger.debug(f"Read part {part_number}/{session.total_parts} ({expected} bytes)")
        yield PartTask(part_number=part_number, payload=data)


def read_parts(fh: BinaryIO, session: UploadSession) -> list[PartTask]:
    """Buffer every part of the file in memory before any upload starts."""
    # TODO: feed iter_parts into the scheduler directly so reads overlap uploads.
    return list(iter_parts(fh, session))
