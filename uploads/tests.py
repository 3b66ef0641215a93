# -*- coding: utf-8 -*-

from __future__ import annotations

import base64
import io

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import SimpleTestCase
from PIL import Image

from uploads.services import (
    ImageProcessingError,
    compress_image,
    decode_data_url,
    to_png_bytes,
)


def _png(width: int, height: int, mode: str = "RGB") -> bytes:
    buf = io.BytesIO()
    Image.new(mode, (width, height)).save(buf, format="PNG")
    return buf.getvalue()


_PNG_1X1 = _png(1, 1)


class CompressImageTests(SimpleTestCase):
    def test_large_image_is_bounded_and_jpeg(self):
        upload = SimpleUploadedFile("site.png", _png(3000, 1500), content_type="image/png")
        out = compress_image(upload, max_size=1024, quality=75)

        self.assertEqual(out.name, "site.jpg")
        img = Image.open(io.BytesIO(out.read()))
        self.assertEqual(img.format, "JPEG")
        self.assertEqual(img.size, (1024, 512))

    def test_small_image_is_not_upscaled(self):
        upload = SimpleUploadedFile("tiny.png", _PNG_1X1, content_type="image/png")
        out = compress_image(upload)
        img = Image.open(io.BytesIO(out.read()))
        self.assertEqual(img.size, (1, 1))

    def test_transparent_image_is_flattened(self):
        upload = SimpleUploadedFile("logo.png", _png(10, 10, mode="RGBA"), content_type="image/png")
        img = Image.open(io.BytesIO(compress_image(upload).read()))
        self.assertEqual(img.mode, "RGB")

    def test_garbage_raises(self):
        upload = SimpleUploadedFile("x.jpg", b"not an image", content_type="image/jpeg")
        with self.assertRaises(ImageProcessingError):
            compress_image(upload)


class DataUrlTests(SimpleTestCase):
    def test_decode_base64_data_url(self):
        url = "data:image/png;base64," + base64.b64encode(_PNG_1X1).decode("ascii")
        mime, data = decode_data_url(url)
        self.assertEqual(mime, "image/png")
        self.assertEqual(data, _PNG_1X1)

    def test_rejects_plain_url(self):
        with self.assertRaises(ImageProcessingError):
            decode_data_url("https://example.com/a.png")

    def test_to_png_bytes(self):
        out = to_png_bytes(_png(4, 4))
        self.assertTrue(out.startswith(b"\x89PNG"))
