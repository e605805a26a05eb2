"""
帧源与工厂测试
Frame Source and Factory Tests
"""
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import numpy as np

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rps_live.hardware import HardwareFactory, ImageFolderSource, USBCamera
from rps_live.hardware.implementations.camera import ImageProcessor, usb_camera
from rps_live.utils.exceptions import CameraException, ConfigurationException


def write_images(folder: Path, sizes):
    for i, size in enumerate(sizes):
        (folder / f"frame_{i:02d}.jpg").write_bytes(b"\xff" * size)
    # 非图片文件会被忽略
    (folder / "notes.txt").write_text("ignored")


class TestHardwareFactory(unittest.TestCase):
    def test_builtin_sources_registered(self):
        self.assertTrue(HardwareFactory.is_frame_source_registered('usb_camera'))
        self.assertTrue(HardwareFactory.is_frame_source_registered('IMAGE_FOLDER'))
        self.assertIn('image_folder', HardwareFactory.list_frame_sources())

    def test_create_from_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            source = HardwareFactory.create_from_config(
                {'type': 'image_folder', 'folder': tmp, 'loop': False}
            )
            self.assertIsInstance(source, ImageFolderSource)
            self.assertFalse(source.loop)

    def test_usb_camera_is_not_opened_on_creation(self):
        camera = HardwareFactory.create_frame_source('usb_camera', {'device_id': 3})
        self.assertIsInstance(camera, USBCamera)
        self.assertFalse(camera.is_connected())
        self.assertFalse(camera.is_ready)
        camera.close()

    def test_missing_config_raises(self):
        with self.assertRaises(ConfigurationException):
            HardwareFactory.create_from_config({})
        with self.assertRaises(ConfigurationException):
            HardwareFactory.create_from_config({'device_id': 0})

    def test_unknown_type_raises(self):
        with self.assertRaises(ValueError):
            HardwareFactory.create_frame_source('kinect', {})

    def test_register_requires_frame_source(self):
        with self.assertRaises(TypeError):
            HardwareFactory.register_frame_source('bogus', dict)


class FakeVideoCapture:
    """只认识 available 中设备号的假 VideoCapture"""

    available = {0, 1}

    def __init__(self, device_id, *args):
        self.device_id = device_id
        self.opened = device_id in self.available

    def isOpened(self):
        return self.opened

    def set(self, prop, value):
        return True

    def get(self, prop):
        return {usb_camera.cv2.CAP_PROP_FRAME_WIDTH: 640,
                usb_camera.cv2.CAP_PROP_FRAME_HEIGHT: 480}.get(prop, 0)

    def read(self):
        if not self.opened:
            return False, None
        frame = np.full((480, 640, 3), self.device_id * 60, dtype=np.uint8)
        return True, frame

    def release(self):
        self.opened = False


class TestUSBCameraSwitch(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        patcher = mock.patch.object(usb_camera.cv2, "VideoCapture", FakeVideoCapture)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.camera = USBCamera(device_id=0)
        self.addCleanup(self.camera.close)

    async def test_switch_to_another_device(self):
        self.assertTrue(self.camera.connect())
        self.assertTrue(self.camera.is_ready)

        self.camera.disconnect()
        self.assertFalse(self.camera.is_ready)

        self.assertTrue(self.camera.switch_device(1))
        self.assertEqual(self.camera.device_id, 1)
        self.assertTrue(self.camera.is_ready)
        self.assertEqual(self.camera.get_status()["device_id"], 1)

        frame = await self.camera.capture_still()
        self.assertGreater(frame.byte_size, 0)
        self.assertEqual(frame.data[:2], b"\xff\xd8")
        self.assertEqual(frame.shape, (480, 640, 3))

    async def test_failed_switch_leaves_source_not_ready(self):
        self.assertTrue(self.camera.connect())

        self.assertFalse(self.camera.switch_device(7))
        self.assertFalse(self.camera.is_ready)
        self.assertFalse(self.camera.is_connected())
        with self.assertRaises(CameraException):
            await self.camera.capture_still()


class TestImageFolderSource(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.folder = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    async def test_byte_sizes_in_file_order_and_loops(self):
        write_images(self.folder, [300, 100, 200])
        source = ImageFolderSource(str(self.folder))
        self.assertTrue(source.connect())
        self.assertTrue(source.is_ready)

        sizes = [(await source.capture_still()).byte_size for _ in range(4)]
        self.assertEqual(sizes, [300, 100, 200, 300])

    async def test_no_loop_returns_none_at_end(self):
        write_images(self.folder, [50])
        source = ImageFolderSource(str(self.folder), loop=False, read_data=True)
        source.connect()

        frame = await source.capture_still()
        self.assertEqual(frame.byte_size, 50)
        self.assertEqual(len(frame.data), 50)
        self.assertEqual(source.remaining, 0)
        self.assertIsNone(await source.capture_still())

    async def test_capture_requires_connection(self):
        source = ImageFolderSource(str(self.folder))
        with self.assertRaises(CameraException):
            await source.capture_still()

    def test_empty_or_missing_folder(self):
        source = ImageFolderSource(str(self.folder))
        self.assertTrue(source.connect())
        self.assertFalse(source.is_ready)

        missing = ImageFolderSource(str(self.folder / "missing"))
        self.assertFalse(missing.connect())
        self.assertFalse(missing.is_connected())


class TestImageProcessor(unittest.TestCase):
    def test_prepare_still_encodes_jpeg(self):
        image = np.random.default_rng(0).integers(0, 255, (480, 640, 3), dtype=np.uint8)
        buffer = ImageProcessor.prepare_still(image, size=224, quality=35)

        data = buffer.tobytes()
        self.assertEqual(data[:2], b"\xff\xd8")
        self.assertGreater(len(data), 0)

    def test_prepare_still_without_image(self):
        self.assertIsNone(ImageProcessor.prepare_still(None))
        self.assertIsNone(ImageProcessor.prepare_still(np.zeros((0, 0, 3), dtype=np.uint8)))


if __name__ == '__main__':
    unittest.main()
