class OssError(Exception):
    """Base class for every error raised by oss_uploader."""


class ConfigError(OssError):
    """A required credential or configuration value is missing."""


class IoError(OssError):
    """Local file read or write failed."""


class RemoteApiError(OssError):
    """A call to the object storage API failed."""

    def __init__(self, operation: str, key: str, message: str) -> None:
        super().__init__(f"{operation} failed for {key}: {message}")
        self.operation = operation
        self.key = key


class IncompleteUpload(OssError):
    """Fewer completed parts than planned, the multi-part session is left open."""

    def __init__(self, upload_id: str, expected: int, received: int, missing: list[int]):
        msg = (
            f"Upload {upload_id} is incomplete: expected {expected} parts, "
            f"received {received}"
        )
        if missing:
            shown = ", ".join(str(n) for n in missing[:10])
            if len(missing) > 10:
                shown += ", ..."
            msg += f" (missing {shown})"
        super().__init__(msg)
        self.upload_id = upload_id
        self.expected = expected
        self.received = received
        self.missing = missing
