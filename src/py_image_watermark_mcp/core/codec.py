"""图像编解码模块。

封装 Pillow 的 JPEG/PNG 解码和 JPEG 编码，每次调用独占自己的文件句柄。
"""

from pathlib import Path

from PIL import Image

from ..exceptions import UnsupportedFormatError, handle_image_errors
from ..models.constants import ImageFormats, QualityDefaults
from ..utils.file_helpers import remove_partial_output
from ..utils.logging_helpers import get_logger


logger = get_logger()

# 解码后统一转换到的模式
_DECODE_MODES = {
    ImageFormats.PHOTO_FORMAT: "RGB",
    ImageFormats.WATERMARK_FORMAT: "RGBA",
}


@handle_image_errors("图像解码")
def open_image(file_path: str | Path, expected_format: str) -> Image.Image:
    """打开并完整解码图像

    返回的图像已脱离文件句柄，可在线程间只读共享。

    Args:
        file_path: 图像路径
        expected_format: 期望的格式 ("JPEG" 或 "PNG")

    Returns:
        Image.Image: JPEG 解码为 RGB，PNG 解码为 RGBA

    Raises:
        UnsupportedFormatError: 格式不符或无法识别
        ProcessingError: 文件读取失败
    """
    file_path = Path(file_path)
    expected_format = expected_format.upper()
    if expected_format not in _DECODE_MODES:
        raise UnsupportedFormatError(
            f"不支持的文件类型: {expected_format!r}", file_path
        )

    with Image.open(file_path) as img:
        if img.format != expected_format:
            raise UnsupportedFormatError(
                f"期望 {expected_format} 图像，实际为 {img.format}", file_path
            )
        # convert 总是返回新图像，并触发完整解码
        decoded = img.convert(_DECODE_MODES[expected_format])

    logger.debug(f"已解码 {file_path} ({decoded.size[0]}x{decoded.size[1]})")
    return decoded


def load_photo(file_path: str | Path) -> Image.Image:
    """解码 JPEG 照片"""
    return open_image(file_path, ImageFormats.PHOTO_FORMAT)


def load_watermark(file_path: str | Path) -> Image.Image:
    """解码 PNG 水印"""
    return open_image(file_path, ImageFormats.WATERMARK_FORMAT)


@handle_image_errors("JPEG 编码")
def save_jpeg(
    img: Image.Image,
    output_path: str | Path,
    quality: int = QualityDefaults.DEFAULT,
) -> int:
    """把图像编码为 JPEG 写入文件

    写入失败时删除残缺文件。

    Returns:
        int: 写入的字节数
    """
    output_path = Path(output_path)
    rgb = img if img.mode == "RGB" else img.convert("RGB")

    try:
        with output_path.open("wb") as fh:
            rgb.save(fh, format=ImageFormats.PHOTO_FORMAT, quality=quality)
    except Exception:
        remove_partial_output(output_path)
        raise

    return output_path.stat().st_size
