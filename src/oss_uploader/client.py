import json
import logging
import warnings
from pathlib import Path

from oss_uploader.config import TransferConfig
from oss_uploader.errors import IoError
from oss_uploader.progress import ProgressAggregator
from oss_uploader.s3.basic_ops import delete_file, download_file, upload_file
from oss_uploader.s3.chunk_planner import Single, plan
from oss_uploader.s3.create import S3Config, create_s3_client
from oss_uploader.s3.remote import S3Remote
from oss_uploader.s3.upload_file_multipart import upload_file_multipart
from oss_uploader.types import BATCH_SIZE, DEFAULT_PRESIGN_EXPIRY, MAX_WORKERS
from oss_uploader.url import presigned_url, public_url

logger = logging.getLogger(__name__)


def default_key(
    file_path: Path, key: str | None = None, key_prefix: str | None = None
) -> str:
    """Remote key for ``file_path``, ``<key_prefix>/<filename>`` unless given."""
    if key:
        return key
    filename = file_path.name
    if key_prefix:
        return f"{key_prefix.rstrip('/')}/{filename}"
    return filename


class OssClient:
    def __init__(
        self,
        config: TransferConfig,
        remote: S3Remote | None = None,
        s3_config: S3Config | None = None,
        part_size: int = BATCH_SIZE,
        upload_threads: int = MAX_WORKERS,
    ) -> None:
        self.config = config
        self.part_size = part_size
        self.upload_threads = upload_threads
        if remote is None:
            remote = S3Remote(create_s3_client(config, s3_config), config.bucket)
        self.remote = remote

    def upload(
        self,
        file_path: Path,
        key: str,
        progress: ProgressAggregator | None = None,
        abort_on_failure: bool = False,
    ) -> str:
        """Upload ``file_path`` to ``key`` and return its public URL."""
        try:
            file_path = Path(file_path).resolve(strict=True)
            file_size = file_path.stat().st_size
        except OSError as e:
            raise IoError(f"Cannot find file {file_path}: {e}") from e

        try:
            mode = plan(file_size, self.part_size)
            if isinstance(mode, Single):
                sent = upload_file(self.remote, file_path, key)
                if progress is not None:
                    progress.add(sent)
                    progress.mark_done()
            else:
                upload_file_multipart(
                    remote=self.remote,
                    file_path=file_path,
                    object_name=key,
                    file_size=file_size,
                    part_size=self.part_size,
                    upload_threads=self.upload_threads,
                    progress=progress,
                    abort_on_failure=abort_on_failure,
                )
        except Exception as e:
            info_json = dict(self.config.redacted())
            info_json["key"] = key
            info_json_str = json.dumps(info_json, indent=2)
            warnings.warn(f"Error uploading file: {e}\nInfo:\n\n{info_json_str}")
            raise
        return self.generate_url(key)

    def download(self, key: str, output_path: Path | None = None) -> Path:
        if output_path is None:
            output_path = Path(Path(key).name)
        return download_file(self.remote, key, Path(output_path))

    def delete(self, key: str) -> None:
        delete_file(self.remote, key)

    def generate_presigned_url(
        self, key: str, expires_in: int = DEFAULT_PRESIGN_EXPIRY
    ) -> str:
        return presigned_url(self.remote, key, expires_in)

    def generate_url(self, key: str) -> str:
        return public_url(self.config.endpoint, self.config.bucket, key)
