from dataclasses import dataclass, field


def count_parts(file_size: int, part_size: int) -> int:
    out = file_size // part_size
    if file_size % part_size:
        return out + 1
    return out


@dataclass
class UploadSession:
    """One chunked transfer into a remote multi-part session."""

    bucket: str
    key: str
    upload_id: str
    file_size: int
    part_size: int
    total_parts: int = field(init=False)

    def __post_init__(self):
        if self.part_size <= 0:
            raise ValueError(f"Invalid part size: {self.part_size}")
        self.total_parts = count_parts(self.file_size, self.part_size)

    def part_length(self, part_number: int) -> int:
        """Expected payload length of ``part_number``, the last part may be shorter."""
        if not 1 <= part_number <= self.total_parts:
            raise ValueError(
                f"Part {part_number} out of range 1..{self.total_parts} for {self.key}"
            )
        offset = (part_number - 1) * self.part_size
        return min(self.part_size, self.file_size - offset)
