import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from botocore.client import BaseClient
from botocore.exceptions import BotoCoreError, ClientError

from oss_uploader.errors import RemoteApiError
from oss_uploader.s3.multipart.completed_part import CompletedPart

logger = logging.getLogger(__name__)


@contextmanager
def remote_call(operation: str, key: str) -> Iterator[None]:
    try:
        yield
    except (ClientError, BotoCoreError) as e:
        raise RemoteApiError(operation, key, str(e)) from e


class S3Remote:
    """The object storage API for one bucket.

    Holds a single boto3 client which is shared by every upload worker; boto3
    clients are thread safe. Every botocore failure is raised as RemoteApiError.
    """

    def __init__(self, s3_client: BaseClient, bucket: str) -> None:
        self.s3_client = s3_client
        self.bucket = bucket

    def create_session(self, key: str) -> str:
        with remote_call("create_multipart_upload", key):
            resp = self.s3_client.create_multipart_upload(
                Bucket=self.bucket, Key=key, StorageClass="STANDARD"
            )
        upload_id = resp.get("UploadId")
        if not upload_id:
            raise RemoteApiError("create_multipart_upload", key, "no UploadId returned")
        return upload_id

    def upload_part(
        self, upload_id: str, key: str, part_number: int, body: bytes
    ) -> str:
        with remote_call("upload_part", key):
            resp = self.s3_client.upload_part(
                Bucket=self.bucket,
                Key=key,
                PartNumber=part_number,
                UploadId=upload_id,
                Body=body,
            )
        return resp.get("ETag", "")

    def complete_session(
        self, upload_id: str, key: str, parts: Sequence[CompletedPart]
    ) -> None:
        with remote_call("complete_multipart_upload", key):
            self.s3_client.complete_multipart_upload(
                Bucket=self.bucket,
                Key=key,
                UploadId=upload_id,
                MultipartUpload={"Parts": [p.to_json() for p in parts]},
            )

    def abort_session(self, upload_id: str, key: str) -> None:
        with remote_call("abort_multipart_upload", key):
            self.s3_client.abort_multipart_upload(
                Bucket=self.bucket, Key=key, UploadId=upload_id
            )

    def put_object(self, key: str, body: bytes) -> None:
        with remote_call("put_object", key):
            self.s3_client.put_object(Bucket=self.bucket, Key=key, Body=body)

    def get_object(self, key: str) -> Any:
        """Returns the botocore StreamingBody of the object."""
        with remote_call("get_object", key):
            resp = self.s3_client.get_object(Bucket=self.bucket, Key=key)
        return resp["Body"]

    def delete_object(self, key: str) -> None:
        with remote_call("delete_object", key):
            self.s3_client.delete_object(Bucket=self.bucket, Key=key)

    def presign(self, key: str, expires_in: int) -> str:
        with remote_call("generate_presigned_url", key):
            return self.s3_client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
