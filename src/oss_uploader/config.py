import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from oss_uploader.errors import ConfigError

_ENV_VARS = {
    "access_key": "OSS_ACCESS_KEY",
    "secret_key": "OSS_SECRET_KEY",
    "bucket": "OSS_BUCKET",
    "endpoint": "OSS_ENDPOINT",
    "region": "OSS_REGION",
}


def _redact(value: str) -> str:
    return value[:4] + "..."


@dataclass(frozen=True)
class TransferConfig:
    """Connection settings for one bucket, shared read-only by every transfer."""

    access_key: str
    secret_key: str
    bucket: str
    endpoint: str
    region: str

    def __repr__(self) -> str:
        return (
            f"TransferConfig(access_key={_redact(self.access_key)!r}, "
            f"secret_key={_redact(self.secret_key)!r}, bucket={self.bucket!r}, "
            f"endpoint={self.endpoint!r}, region={self.region!r})"
        )

    def redacted(self) -> dict:
        return {
            "bucket": self.bucket,
            "endpoint": self.endpoint,
            "region": self.region,
            "access_key": _redact(self.access_key),
            "secret_key": _redact(self.secret_key),
        }

    @staticmethod
    def from_env(
        environ: Mapping[str, str] | None = None,
        dotenv_path: Path | None = None,
    ) -> "TransferConfig":
        """Build the config from OSS_* environment variables.

        When ``environ`` is None the process environment is used, after loading
        a ``.env`` file (existing variables are not overridden).
        """
        if environ is None:
            load_dotenv(dotenv_path=dotenv_path, override=False)
            environ = os.environ
        values: dict[str, str] = {}
        for name, var in _ENV_VARS.items():
            value = environ.get(var)
            if not value:
                raise ConfigError(f"{var} not set")
            values[name] = value
        return TransferConfig(**values)
