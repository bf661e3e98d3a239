import io
import os
import tempfile
from unittest import IsolatedAsyncioTestCase, TestCase

from starlette.datastructures import FormData, Headers, UploadFile

from transcribe_app.feature_modules.transcribe.errors import ValidationError
from transcribe_app.feature_modules.transcribe.storage import buffer_upload, spool_upload_to_disk
from transcribe_app.feature_modules.transcribe.validators import ensure_audio_field


def _upload(data: bytes, *, filename="clip.webm", content_type="audio/webm", declare_size=True) -> UploadFile:
    headers = Headers({"content-type": content_type}) if content_type else Headers({})
    return UploadFile(
        io.BytesIO(data),
        size=len(data) if declare_size else None,
        filename=filename,
        headers=headers,
    )


class EnsureAudioFieldTests(TestCase):
    def test_missing_field(self):
        with self.assertRaises(ValidationError) as ctx:
            ensure_audio_field(FormData([]), "audio")
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.error, "No audio file provided")

    def test_plain_string_is_not_a_file(self):
        with self.assertRaises(ValidationError) as ctx:
            ensure_audio_field(FormData([("audio", "hello")]), "audio")
        self.assertEqual(ctx.exception.error, "Invalid audio file")

    def test_returns_upload(self):
        up = _upload(b"abc")
        self.assertIs(ensure_audio_field(FormData([("audio", up)]), "audio"), up)


class BufferUploadTests(IsolatedAsyncioTestCase):
    async def test_buffers_bytes(self):
        payload = await buffer_upload(_upload(b"x" * 3000), max_bytes=4096)
        self.assertEqual(payload.size, 3000)
        self.assertEqual(payload.data, b"x" * 3000)
        self.assertEqual(payload.mime, "audio/webm")
        self.assertEqual(payload.filename, "clip.webm")
        self.assertFalse(payload.on_disk)

    async def test_defaults_mime_and_name(self):
        payload = await buffer_upload(_upload(b"abc", filename="", content_type=None), max_bytes=4096)
        self.assertEqual(payload.mime, "audio/webm")
        self.assertEqual(payload.filename, "audio.webm")

    async def test_rejects_declared_oversize(self):
        with self.assertRaises(ValidationError) as ctx:
            await buffer_upload(_upload(b"x" * 2048), max_bytes=1024)
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.error, "Audio file size exceeds 1024 bytes limit")

    async def test_rejects_oversize_while_reading(self):
        with self.assertRaises(ValidationError):
            await buffer_upload(_upload(b"x" * 2048, declare_size=False), max_bytes=1024)

    async def test_limit_label_in_megabytes(self):
        with self.assertRaises(ValidationError) as ctx:
            await buffer_upload(_upload(b"x" * (1024 * 1024 + 1)), max_bytes=1024 * 1024)
        self.assertEqual(ctx.exception.error, "Audio file size exceeds 1MB limit")

    async def test_rejects_empty(self):
        with self.assertRaises(ValidationError) as ctx:
            await buffer_upload(_upload(b""), max_bytes=1024)
        self.assertEqual(ctx.exception.error, "Audio file is empty")


class SpoolUploadTests(IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.tmp_dir = os.path.join(self._tmp.name, "nested", "tmp")

    async def test_writes_unique_file_and_discard_removes_it(self):
        first = await spool_upload_to_disk(_upload(b"abc"), 1024, self.tmp_dir)
        second = await spool_upload_to_disk(_upload(b"abc"), 1024, self.tmp_dir)
        self.assertNotEqual(first.path, second.path)
        self.assertTrue(first.path.endswith(".webm"))
        with open(first.path, "rb") as fh:
            self.assertEqual(fh.read(), b"abc")
        self.assertEqual(first.size, 3)

        path = first.path
        first.discard()
        first.discard()
        self.assertFalse(os.path.exists(path))
        second.discard()
        self.assertEqual(os.listdir(self.tmp_dir), [])

    async def test_partial_file_removed_when_oversize(self):
        with self.assertRaises(ValidationError):
            await spool_upload_to_disk(_upload(b"x" * 2048, declare_size=False), 1024, self.tmp_dir)
        self.assertEqual(os.listdir(self.tmp_dir), [])

    async def test_empty_file_removed(self):
        with self.assertRaises(ValidationError):
            await spool_upload_to_disk(_upload(b""), 1024, self.tmp_dir)
        self.assertEqual(os.listdir(self.tmp_dir), [])
