#!/usr/bin/env python3
"""批量水印演示脚本。

在 tmp/examples 下生成几张示例照片和一个半透明 PNG 水印，
然后演示目录批处理、单张照片处理和布局预览。
"""

import shutil
from pathlib import Path

from PIL import Image, ImageDraw

from py_image_watermark_mcp import (
    BatchResult,
    ImageWatermarker,
    WatermarkResult,
    watermark_universal,
)
from py_image_watermark_mcp.core import compute_offset, target_dimensions


def get_output_dir(subdir: str = "") -> Path:
    """获取输出目录 - 使用项目的 tmp 目录"""
    project_root = Path(__file__).parent.parent
    output_dir = project_root / "tmp" / "examples"
    if subdir:
        output_dir = output_dir / subdir
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def create_sample_photos(photo_dir: Path) -> None:
    """生成不同尺寸的示例照片，外加一个会被跳过的文本文件"""
    for name, size, color in [
        ("landscape.jpg", (800, 500), (70, 130, 180)),
        ("portrait.jpeg", (400, 600), (160, 82, 45)),
        ("square.jpg", (300, 300), (46, 139, 87)),
    ]:
        img = Image.new("RGB", size, color)
        draw = ImageDraw.Draw(img)
        draw.ellipse([size[0] // 4, size[1] // 4, size[0] * 3 // 4, size[1] * 3 // 4], fill="white")
        img.save(photo_dir / name, "JPEG", quality=95)

    (photo_dir / "readme.txt").write_text("这个文件会被跳过")


def create_watermark(path: Path) -> None:
    img = Image.new("RGBA", (200, 80), (0, 0, 0, 0))
    draw = ImageDraw.Draw(img)
    draw.rounded_rectangle([0, 0, 199, 79], radius=16, fill=(255, 255, 255, 180))
    draw.text((20, 30), "WATERMARK", fill=(0, 0, 0, 255))
    img.save(path, "PNG")


def get_result_summary(result_obj) -> str:
    """获取结果摘要，兼容不同类型的结果对象"""
    match result_obj:
        case WatermarkResult() | BatchResult():
            return result_obj.get_summary()
        case _:
            return "未知结果类型"


def demo_batch_processing(photo_dir: Path, watermark: Path):
    """目录批处理演示"""
    print("\n=== 目录批处理演示 ===")

    target_dir = get_output_dir("batch")
    result = ImageWatermarker().watermark_directory(
        photo_dir, target_dir, watermark, opacity=60, location="left", force=True
    )

    print(get_result_summary(result))
    for item in result.results:
        print(f"  - {item.get_summary()}")
    if result.skipped:
        print(f"跳过: {', '.join(result.skipped)}")


def demo_single_file(photo_dir: Path, watermark: Path):
    """单张照片演示"""
    print("\n=== 单张照片演示 ===")

    output = get_output_dir("single") / "landscape_watermarked.jpg"
    result = watermark_universal(
        photo_dir / "landscape.jpg",
        output=output,
        watermark_path=watermark,
        scale=0.3,
    )
    print(get_result_summary(result["result"]))


def demo_layout_preview():
    """布局预览演示"""
    print("\n=== 布局预览演示 ===")

    for location in ("left", "right"):
        size = target_dimensions((200, 80), 0.2, 500)
        offset = compute_offset((800, 500), size, location)
        print(f"{location}: 水印 {size} 位于 {offset.as_tuple()}")


def main():
    """主函数"""
    print("🖼️  批量水印演示")
    print("=" * 50)

    work_dir = get_output_dir("source")
    shutil.rmtree(work_dir)
    work_dir.mkdir(parents=True)
    create_sample_photos(work_dir)
    watermark = get_output_dir() / "watermark.png"
    create_watermark(watermark)

    try:
        demo_batch_processing(work_dir, watermark)
        demo_single_file(work_dir, watermark)
        demo_layout_preview()

        print("\n✅ 所有演示完成！")

    except Exception as e:
        print(f"\n❌ 演示过程中出现错误: {e}")
        raise


if __name__ == "__main__":
    main()
