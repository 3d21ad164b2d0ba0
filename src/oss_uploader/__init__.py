from .client import OssClient, default_key
from .config import TransferConfig
from .errors import ConfigError, IncompleteUpload, IoError, OssError, RemoteApiError
from .progress import ProgressAggregator, ProgressListener
from .s3.chunk_planner import Chunked, PlanMode, Single, plan
from .s3.multipart import CompletedPart, PartTask, UploadSession
from .types import BATCH_SIZE, MAX_WORKERS, SizeSuffix, format_size
from .url import presigned_url, public_url

__all__ = [
    "OssClient",
    "TransferConfig",
    "OssError",
    "ConfigError",
    "IoError",
    "RemoteApiError",
    "IncompleteUpload",
    "ProgressAggregator",
    "ProgressListener",
    "plan",
    "PlanMode",
    "Single",
    "Chunked",
    "CompletedPart",
    "PartTask",
    "UploadSession",
    "BATCH_SIZE",
    "MAX_WORKERS",
    "SizeSuffix",
    "format_size",
    "default_key",
    "public_url",
    "presigned_url",
]
