import warnings
from dataclasses import dataclass

import boto3
from botocore.client import BaseClient
from botocore.config import Config

from oss_uploader.config import TransferConfig
from oss_uploader.types import MAX_WORKERS

_TIMEOUT_READ = 120
_TIMEOUT_CONNECT = 60


@dataclass
class S3Config:
    max_pool_connections: int | None = None
    timeout_connection: int | None = None
    timeout_read: int | None = None
    verbose: bool | None = None

    def resolve_defaults(self) -> None:
        # One pooled connection per upload worker.
        self.max_pool_connections = self.max_pool_connections or MAX_WORKERS
        self.timeout_connection = self.timeout_connection or _TIMEOUT_CONNECT
        self.timeout_read = self.timeout_read or _TIMEOUT_READ
        self.verbose = self.verbose or False


def _normalize_endpoint(endpoint_url: str, verbose: bool) -> str:
    if not endpoint_url.startswith("http"):
        if verbose:
            warnings.warn(
                f"Endpoint URL is schema naive: {endpoint_url}, assuming HTTPS"
            )
        endpoint_url = f"https://{endpoint_url}"
    return endpoint_url


def create_s3_client(
    config: TransferConfig, s3_config: S3Config | None = None
) -> BaseClient:
    """Create and return an S3 client for an S3 compatible endpoint."""
    s3_config = s3_config or S3Config()
    s3_config.resolve_defaults()
    endpoint_url = _normalize_endpoint(config.endpoint, bool(s3_config.verbose))
    session = boto3.session.Session()  # type: ignore
    return session.client(
        service_name="s3",
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        endpoint_url=endpoint_url,
        config=Config(
            signature_version="s3v4",
            region_name=config.region,
            max_pool_connections=s3_config.max_pool_connections,
            read_timeout=s3_config.timeout_read,
            connect_timeout=s3_config.timeout_connection,
            # Some S3 compatible providers reject the newer checksum headers.
            request_checksum_calculation="when_required",
            response_checksum_validation="when_required",
        ),
    )
