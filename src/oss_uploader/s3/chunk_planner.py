from dataclasses import dataclass

from oss_uploader.s3.multipart.upload_session import count_parts


@dataclass(frozen=True)
class Single:
    """The whole file goes up in one PUT."""


@dataclass(frozen=True)
class Chunked:
    total_parts: int


PlanMode = Single | Chunked


def plan(file_size: int, part_size: int) -> PlanMode:
    """Decide between a single PUT and a multi-part upload."""
    if part_size <= 0:
        raise ValueError(f"Invalid part size: {part_size}")
    if file_size < 0:
        raise ValueError(f"Invalid file size: {file_size}")
    if file_size <= part_size:
        return Single()
    return Chunked(total_parts=count_parts(file_size, part_size))
