"""测试配置文件。

提供测试所需的fixtures和配置，所有图片都在临时目录中用 Pillow 生成。
"""

import tempfile
from pathlib import Path

import pytest
from PIL import Image, ImageDraw


def make_photo(size: tuple[int, int] = (100, 200)) -> Image.Image:
    """生成带色块的 RGB 照片"""
    width, height = size
    img = Image.new("RGB", size, color=(30, 60, 90))
    draw = ImageDraw.Draw(img)
    for i in range(10):
        x, y = (i * 17) % width, (i * 23) % height
        color = (i * 25 % 256, 255 - i * 20, i * 11 % 256)
        draw.rectangle([x, y, x + width // 4, y + height // 5], fill=color)
    return img


def make_watermark(
    size: tuple[int, int] = (50, 25), color: tuple[int, int, int, int] = (255, 0, 0, 255)
) -> Image.Image:
    """生成纯色 RGBA 水印"""
    return Image.new("RGBA", size, color=color)


def save_jpeg(path: Path, size: tuple[int, int] = (100, 200)) -> Path:
    make_photo(size).save(path, "JPEG", quality=95)
    return path


@pytest.fixture
def temp_dir():
    """临时目录fixture"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def watermark_file(temp_dir: Path) -> Path:
    """半透明的 PNG 水印文件"""
    path = temp_dir / "watermark.png"
    img = make_watermark((50, 25), (255, 255, 255, 0))
    draw = ImageDraw.Draw(img)
    draw.ellipse([5, 2, 45, 22], fill=(255, 255, 255, 200))
    img.save(path, "PNG")
    return path


@pytest.fixture
def source_dir(temp_dir: Path) -> Path:
    """包含 3 张合格照片和 3 个不合格条目的源目录"""
    source = temp_dir / "photos"
    source.mkdir()

    save_jpeg(source / "a.jpg")
    save_jpeg(source / "b.jpeg", (300, 150))
    save_jpeg(source / "c.jpg", (64, 64))

    (source / "notes.txt").write_text("not a photo")
    save_jpeg(source / "upper.JPG")
    (source / "nested").mkdir()

    return source


@pytest.fixture
def output_dir(temp_dir: Path) -> Path:
    """尚不存在的输出目录"""
    return temp_dir / "watermarked"


def create_config(**kwargs):
    """创建完整的WatermarkConfig，提供默认值"""
    from py_image_watermark_mcp.models.watermark_config import WatermarkConfig

    defaults = {
        "opacity": 70,
        "location": "right",
        "scale": 0.2,
        "watermark_path": Path("watermark.png"),
        "source_dir": Path("photos"),
        "target_dir": Path("watermarked"),
        "force": False,
        "jpeg_quality": 95,
        "max_workers": None,
        "fail_fast": False,
        "resample": "nearest",
    }
    defaults.update(kwargs)
    return WatermarkConfig(**defaults)
