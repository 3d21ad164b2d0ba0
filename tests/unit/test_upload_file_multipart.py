"""
Unit test file.
"""

import tempfile
import unittest
from pathlib import Path

from fake_remote import FakeRemote

from oss_uploader import IoError, ProgressAggregator, RemoteApiError
from oss_uploader.s3.upload_file_multipart import upload_file_multipart

MB = 1024 * 1024


def _write(path: Path, size: int) -> bytes:
    pattern = bytes(range(256))
    data = (pattern * (size // len(pattern) + 1))[:size]
    path.write_bytes(data)
    return data


class UploadFileMultipartTester(unittest.TestCase):
    """End to end chunked uploads against the fake remote."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tempdir = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_25mb_in_three_parts(self) -> None:
        src = self.tempdir / "big.bin"
        data = _write(src, 25 * MB)
        remote = FakeRemote()
        progress = ProgressAggregator(total=len(data))
        request = upload_file_multipart(
            remote, src, "dir/big.bin", part_size=10 * MB, progress=progress  # type: ignore[arg-type]
        )
        self.assertEqual(request.session.total_parts, 3)
        self.assertEqual([p.part_number for p in request.parts], [1, 2, 3])
        self.assertEqual(remote.completed, [("upload-1", [1, 2, 3])])
        self.assertEqual(remote.objects["dir/big.bin"], data)
        self.assertEqual(progress.bytes_transferred, len(data))
        self.assertTrue(progress.is_done)

    def test_part_failure_does_not_finalize(self) -> None:
        src = self.tempdir / "big.bin"
        _write(src, 3000)
        remote = FakeRemote(fail_parts={2})
        progress = ProgressAggregator(total=3000)
        with self.assertRaises(RemoteApiError):
            upload_file_multipart(remote, src, "big.bin", part_size=1000, progress=progress)  # type: ignore[arg-type]
        self.assertEqual(remote.completed, [])
        self.assertEqual(remote.aborted, [])
        self.assertNotIn("big.bin", remote.objects)
        self.assertFalse(progress.is_done)
        # The session stays open on the server.
        self.assertIn("upload-1", remote.sessions)

    def test_abort_on_failure(self) -> None:
        src = self.tempdir / "big.bin"
        _write(src, 3000)
        remote = FakeRemote(fail_parts={2})
        with self.assertRaises(RemoteApiError):
            upload_file_multipart(
                remote, src, "big.bin", part_size=1000, abort_on_failure=True  # type: ignore[arg-type]
            )
        self.assertEqual(remote.aborted, ["upload-1"])
        self.assertEqual(remote.completed, [])

    def test_abort_on_finalize_failure(self) -> None:
        src = self.tempdir / "big.bin"
        _write(src, 3000)
        remote = FakeRemote(fail_complete=True)
        with self.assertRaises(RemoteApiError):
            upload_file_multipart(
                remote, src, "big.bin", part_size=1000, abort_on_failure=True  # type: ignore[arg-type]
            )
        self.assertEqual(remote.aborted, ["upload-1"])

    def test_abort_failure_keeps_original_error(self) -> None:
        src = self.tempdir / "big.bin"
        _write(src, 3000)
        remote = FakeRemote(fail_parts={3}, fail_abort=True)
        with self.assertRaises(RemoteApiError) as ctx:
            upload_file_multipart(
                remote, src, "big.bin", part_size=1000, abort_on_failure=True  # type: ignore[arg-type]
            )
        self.assertEqual(ctx.exception.operation, "upload_part")
        self.assertEqual(remote.aborted, ["upload-1"])

    def test_truncated_file_is_io_error(self) -> None:
        src = self.tempdir / "big.bin"
        _write(src, 2500)
        remote = FakeRemote()
        with self.assertRaises(IoError):
            upload_file_multipart(
                remote, src, "big.bin", file_size=5000, part_size=1000  # type: ignore[arg-type]
            )
        self.assertEqual(remote.uploaded_part_numbers, [])
        self.assertEqual(remote.completed, [])

    def test_worker_bound_respected(self) -> None:
        src = self.tempdir / "big.bin"
        _write(src, 40 * 100)
        remote = FakeRemote(delay=0.01)
        upload_file_multipart(
            remote, src, "big.bin", part_size=100, upload_threads=3  # type: ignore[arg-type]
        )
        self.assertLessEqual(remote.max_in_flight, 3)
        self.assertEqual(len(remote.uploaded_part_numbers), 40)


if __name__ == "__main__":
    unittest.main()
