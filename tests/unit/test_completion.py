"""
Unit test file.
"""

import random
import unittest

from fake_remote import FakeRemote

from oss_uploader import CompletedPart, IncompleteUpload, RemoteApiError, UploadSession
from oss_uploader.s3.completion import assemble, complete_upload


def _session(total_parts: int) -> UploadSession:
    return UploadSession(
        bucket="test-bucket",
        key="big.bin",
        upload_id="upload-1",
        file_size=total_parts * 10,
        part_size=10,
    )


def _parts(numbers: list[int]) -> list[CompletedPart]:
    return [CompletedPart(part_number=n, etag=f"etag-{n}") for n in numbers]


class CompletionAssemblerTester(unittest.TestCase):
    """Tests for ordering and checking completed parts."""

    def test_shuffled_completions_are_sorted(self) -> None:
        rng = random.Random(1234)
        for total in (1, 2, 3, 17, 100):
            numbers = list(range(1, total + 1))
            for _ in range(5):
                rng.shuffle(numbers)
                request = assemble(_parts(numbers), total, _session(total))
                self.assertEqual(
                    [p.part_number for p in request.parts], list(range(1, total + 1))
                )

    def test_missing_part_is_incomplete(self) -> None:
        session = _session(3)
        with self.assertRaises(IncompleteUpload) as ctx:
            assemble(_parts([3, 1]), 3, session)
        self.assertEqual(ctx.exception.expected, 3)
        self.assertEqual(ctx.exception.received, 2)
        self.assertEqual(ctx.exception.missing, [2])

    def test_every_smaller_count_fails(self) -> None:
        total = 6
        for count in range(0, total):
            with self.assertRaises(IncompleteUpload):
                assemble(_parts(list(range(1, count + 1))), total, _session(total))

    def test_duplicate_part_is_rejected(self) -> None:
        with self.assertRaises(IncompleteUpload):
            assemble(_parts([1, 2, 2]), 3, _session(3))

    def test_request_is_ordered(self) -> None:
        request = assemble(_parts([2, 1]), 2, _session(2))
        self.assertEqual(request.session.upload_id, "upload-1")
        self.assertEqual(
            [p.to_json() for p in request.parts],
            [
                {"PartNumber": 1, "ETag": "etag-1"},
                {"PartNumber": 2, "ETag": "etag-2"},
            ],
        )

    def test_complete_upload_calls_remote(self) -> None:
        remote = FakeRemote()
        remote.sessions["upload-1"] = {1: b"a", 2: b"b"}
        complete_upload(remote, assemble(_parts([2, 1]), 2, _session(2)))  # type: ignore[arg-type]
        self.assertEqual(remote.completed, [("upload-1", [1, 2])])
        self.assertEqual(remote.objects["big.bin"], b"ab")

    def test_complete_failure_surfaces(self) -> None:
        remote = FakeRemote(fail_complete=True)
        with self.assertRaises(RemoteApiError):
            complete_upload(remote, assemble(_parts([1]), 1, _session(1)))  # type: ignore[arg-type]
        self.assertEqual(remote.aborted, [])


if __name__ == "__main__":
    unittest.main()
