from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from hanoi_towers.restore import solve
from hanoi_towers.state import create_canonical
from hanoi_towers.vision import ImageSink, render_state_image

try:
    from PIL import Image as PILImage
except ImportError:  # pragma: no cover
    PILImage = None


class TestVision(unittest.TestCase):
    def test_missing_pillow_error_has_install_guidance(self) -> None:
        real_import = __import__

        def fake_import(name: str, *args: object, **kwargs: object):
            if name == "PIL" or name.startswith("PIL."):
                raise ImportError("No module named PIL")
            return real_import(name, *args, **kwargs)

        with mock.patch("builtins.__import__", side_effect=fake_import):
            with self.assertRaises(RuntimeError) as ctx:
                render_state_image(create_canonical(3))
        msg = str(ctx.exception)
        self.assertIn("hanoi-towers[viz]", msg)
        self.assertIn("uv sync --group viz", msg)

    def test_dict_state_requires_pegs(self) -> None:
        with self.assertRaises(ValueError):
            render_state_image({"n_disks": 3, "pegs": [[3, 2, 1], [], []]})

    @unittest.skipUnless(PILImage is not None, "pillow required for vision rendering")
    def test_render_state_image(self) -> None:
        image = render_state_image(create_canonical(4), size=(320, 180))
        self.assertEqual(image.mime_type, "image/png")
        self.assertEqual(image.width, 320)
        self.assertEqual(image.height, 180)
        self.assertTrue(image.data_url.startswith("data:image/png;base64,"))

    @unittest.skipUnless(PILImage is not None, "pillow required for vision rendering")
    def test_image_sink_writes_one_frame_per_state(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            sink = ImageSink(Path(tmp) / "frames", size=(160, 90))
            solve(create_canonical(2), sink)
            self.assertEqual(len(sink.frames), 3)
            self.assertEqual(sink.frames[0].name, "frame_0000.png")
            with PILImage.open(sink.frames[-1]) as img:
                self.assertEqual(img.size, (160, 90))


if __name__ == "__main__":
    unittest.main()
