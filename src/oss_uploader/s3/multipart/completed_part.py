from dataclasses import dataclass


@dataclass(frozen=True)
class CompletedPart:
    part_number: int
    etag: str

    def __post_init__(self):
        assert isinstance(self.part_number, int)
        assert isinstance(self.etag, str)

    def to_json(self) -> dict:
        # amazon s3 style dict
        return {"PartNumber": self.part_number, "ETag": self.etag}
