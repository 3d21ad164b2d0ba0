from typing import TYPE_CHECKING
from urllib.parse import quote

if TYPE_CHECKING:
    from oss_uploader.s3.remote import S3Remote


def public_url(endpoint: str, bucket: str, key: str) -> str:
    """Virtual-hosted style URL for a publicly readable object.

    The bucket becomes a subdomain of the endpoint host. Endpoints without a
    scheme are prefixed with the bucket as-is.
    """
    encoded_key = quote(key, safe="/")
    endpoint = endpoint.rstrip("/")
    scheme, sep, host = endpoint.partition("://")
    if sep:
        return f"{scheme}://{bucket}.{host}/{encoded_key}"
    return f"{bucket}.{endpoint}/{encoded_key}"


def presigned_url(remote: "S3Remote", key: str, expires_in: int) -> str:
    """Signed, time limited GET url for ``key``."""
    if expires_in <= 0:
        raise ValueError(f"expires_in must be positive, got {expires_in}")
    return remote.presign(key, expires_in)
