import numpy as np
import pytest
from PIL import Image

from mean_filter.errors import ImageIOError
from mean_filter.image_io import JPEG_QUALITY, read_image, rgb_to_image, to_array, write_image
from mean_filter.utils import to_rgb_list


def sample_image():
    return [[(x * 60, y * 80, 255 - x * 60) for x in range(4)] for y in range(3)]


def test_png_is_lossless(tmp_path):
    path = write_image(tmp_path / "out.png", sample_image())

    assert read_image(path) == sample_image()


def test_channels_come_back_in_rgb_order(tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGB", (2, 1), (255, 0, 0)).save(path)

    assert read_image(path) == [[(255, 0, 0), (255, 0, 0)]]


def test_jpeg_keeps_dimensions(tmp_path):
    path = write_image(tmp_path / "out.jpg", [[(100, 100, 100)] * 5 for _ in range(4)])

    with Image.open(path) as img:
        assert img.format == "JPEG"
        assert img.size == (5, 4)


def test_max_dimension_downscales(tmp_path):
    path = tmp_path / "big.png"
    Image.new("RGB", (40, 20), (10, 20, 30)).save(path)

    image = read_image(path, max_dimension=10)

    assert len(image) == 5
    assert len(image[0]) == 10


def test_missing_file(tmp_path):
    with pytest.raises(ImageIOError):
        read_image(tmp_path / "nope.jpg")


def test_undecodable_file(tmp_path):
    path = tmp_path / "garbage.png"
    path.write_bytes(b"not an image")

    with pytest.raises(ImageIOError):
        read_image(path)


def test_unknown_extension(tmp_path):
    with pytest.raises(ImageIOError):
        write_image(tmp_path / "out.unknownformat", sample_image())


def test_array_conversions():
    array = to_array(sample_image())

    assert array.shape == (3, 4, 3)
    assert array.dtype == np.uint8
    assert to_rgb_list(array) == sample_image()


def test_rgb_to_image():
    img = rgb_to_image(sample_image())

    assert img.mode == "RGB"
    assert img.size == (4, 3)
    assert img.getpixel((1, 2)) == (60, 160, 195)


def test_jpeg_uses_fixed_default_quality(tmp_path):
    default = write_image(tmp_path / "default.jpg", sample_image())
    explicit = write_image(tmp_path / "explicit.jpg", sample_image(), quality=JPEG_QUALITY)

    assert default.read_bytes() == explicit.read_bytes()
