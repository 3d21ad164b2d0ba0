from dataclasses import dataclass


@dataclass
class PartTask:
    """A part number and its bytes, owned by one upload worker at a time."""

    part_number: int
    payload: bytes | None

    def size(self) -> int:
        if self.payload is None:
            return 0
        return len(self.payload)

    def is_disposed(self) -> bool:
        return self.payload is None

    def dispose(self) -> None:
        # Drop the buffer so the memory is released as soon as the part is acknowledged.
        self.payload = None

    def __repr__(self) -> str:
        state = "disposed" if self.payload is None else f"{len(self.payload)} bytes"
        return f"PartTask(part_number={self.part_number}, {state})"
