import logging
from collections.abc import Sequence
from dataclasses import dataclass

from oss_uploader.errors import IncompleteUpload
from oss_uploader.s3.multipart.completed_part import CompletedPart
from oss_uploader.s3.multipart.upload_session import UploadSession
from oss_uploader.s3.remote import S3Remote

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FinalizeRequest:
    session: UploadSession
    parts: list[CompletedPart]


def assemble(
    completed: Sequence[CompletedPart], expected_total: int, session: UploadSession
) -> FinalizeRequest:
    """Order the completed parts and check that every planned part is present."""
    parts = sorted(completed, key=lambda p: p.part_number)
    numbers = [p.part_number for p in parts]
    expected = list(range(1, expected_total + 1))
    if numbers != expected:
        missing = sorted(set(expected) - set(numbers))
        raise IncompleteUpload(
            upload_id=session.upload_id,
            expected=expected_total,
            received=len(parts),
            missing=missing,
        )
    return FinalizeRequest(session=session, parts=parts)


def complete_upload(remote: S3Remote, request: FinalizeRequest) -> None:
    """Commit the multi-part session, remote errors are raised unchanged."""
    session = request.session
    logger.info(
        f"Completing multipart upload of {session.key} with {len(request.parts)} parts"
    )
    remote.complete_session(session.upload_id, session.key, request.parts)
