import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from oss_uploader.client import OssClient, default_key
from oss_uploader.cmd.progress_bar import TqdmProgress
from oss_uploader.config import TransferConfig
from oss_uploader.errors import ConfigError, OssError
from oss_uploader.log import configure_logging
from oss_uploader.progress import ProgressAggregator
from oss_uploader.types import (
    BATCH_SIZE,
    DEFAULT_PRESIGN_EXPIRY,
    MAX_WORKERS,
    SizeSuffix,
)

# S3 rejects parts smaller than this, except the last one.
_MIN_PART_SIZE = 5 * 1024 * 1024

logger = logging.getLogger(__name__)


@dataclass
class Args:
    command: str
    verbose: bool
    file_path: Path | None = None
    key: str | None = None
    key_prefix: str | None = None
    abort_on_failure: bool = False
    part_size: SizeSuffix = SizeSuffix(BATCH_SIZE)
    workers: int = MAX_WORKERS
    output: Path | None = None
    expires: int = DEFAULT_PRESIGN_EXPIRY


def _parse_args(argv: list[str] | None = None) -> Args:
    parser = argparse.ArgumentParser(
        prog="oss-uploader",
        description="Upload and download tool for OSS (S3 compatible API)",
    )
    parser.add_argument("-v", "--verbose", help="Verbose output", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    upload = sub.add_parser("upload", help="Upload a file to OSS")
    upload.add_argument("file_path", type=Path, help="Local file path")
    upload.add_argument(
        "-k", "--key", help="Remote key, defaults to <key_prefix>/<filename>"
    )
    upload.add_argument(
        "-p", "--key-prefix", help="Key prefix, defaults to the bucket root"
    )
    upload.add_argument(
        "--abort-on-failure",
        help="Abort the remote multipart session if a chunked upload fails",
        action="store_true",
    )
    upload.add_argument(
        "--part-size",
        help="Part size for chunked uploads, also the single upload threshold",
        type=str,
        default="10MB",
    )
    upload.add_argument(
        "--workers",
        help="Max number of parts uploaded in parallel",
        type=int,
        default=MAX_WORKERS,
    )

    download = sub.add_parser("download", help="Download a file from OSS")
    download.add_argument("key", help="Remote key")
    download.add_argument(
        "-o", "--output", type=Path, help="Local output path, defaults to the key's filename"
    )

    delete = sub.add_parser("delete", help="Delete a file on OSS")
    delete.add_argument("key", help="Remote key")

    url = sub.add_parser("url", help="Generate a presigned download URL")
    url.add_argument("key", help="Remote key")
    url.add_argument(
        "-e",
        "--expires",
        type=int,
        default=DEFAULT_PRESIGN_EXPIRY,
        help="URL lifetime in seconds (default 3600 = 1 hour)",
    )

    args = parser.parse_args(argv)
    try:
        part_size = SizeSuffix(getattr(args, "part_size", BATCH_SIZE))
    except ValueError as e:
        parser.error(str(e))
    if part_size < _MIN_PART_SIZE:
        parser.error(f"--part-size must be at least 5MB, got {part_size}")
    workers = getattr(args, "workers", MAX_WORKERS)
    if workers < 1:
        parser.error("--workers must be at least 1")
    return Args(
        command=args.command,
        verbose=args.verbose,
        file_path=getattr(args, "file_path", None),
        key=getattr(args, "key", None),
        key_prefix=getattr(args, "key_prefix", None),
        abort_on_failure=getattr(args, "abort_on_failure", False),
        part_size=part_size,
        workers=workers,
        output=getattr(args, "output", None),
        expires=getattr(args, "expires", DEFAULT_PRESIGN_EXPIRY),
    )


def _upload(client: OssClient, args: Args) -> None:
    assert args.file_path is not None
    key = default_key(args.file_path, args.key, args.key_prefix)
    size = args.file_path.stat().st_size if args.file_path.exists() else None
    print(f"Uploading {args.file_path} ...")
    with TqdmProgress(total=size or 0, desc=args.file_path.name) as bar:
        progress = ProgressAggregator(total=size, listener=bar)
        url = client.upload(
            args.file_path, key, progress=progress, abort_on_failure=args.abort_on_failure
        )
    print(f"Uploaded {args.file_path}\nDownload url:\n{url}")


def _run(client: OssClient, args: Args) -> None:
    if args.command == "upload":
        _upload(client, args)
    elif args.command == "download":
        assert args.key is not None
        path = client.download(args.key, args.output)
        print(f"Downloaded {args.key} to {path}")
    elif args.command == "delete":
        assert args.key is not None
        client.delete(args.key)
        print(f"Deleted {args.key}")
    elif args.command == "url":
        assert args.key is not None
        print(client.generate_presigned_url(args.key, args.expires))
    else:
        raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = _parse_args(argv)
    # Keep the terminal quiet under the progress bar unless asked.
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        config = TransferConfig.from_env()
    except ConfigError as e:
        print(
            f"Configuration error: {e}\n"
            "Please set OSS_ACCESS_KEY, OSS_SECRET_KEY, OSS_BUCKET, OSS_ENDPOINT and OSS_REGION",
            file=sys.stderr,
        )
        return 1
    client = OssClient(
        config, part_size=args.part_size.as_int(), upload_threads=args.workers
    )
    try:
        _run(client, args)
    except OssError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
