"""核心功能测试。

测试定位、遮罩、缩放、合成、编解码和单张照片处理。
"""

from pathlib import Path

import pytest
from PIL import Image

from py_image_watermark_mcp.core.codec import load_photo, load_watermark, save_jpeg
from py_image_watermark_mcp.core.compositor import compose, visible_region
from py_image_watermark_mcp.core.mask import OpacityMask
from py_image_watermark_mcp.core.placement import PlacementOffset, compute_offset
from py_image_watermark_mcp.core.scaling import scale_watermark, target_dimensions
from py_image_watermark_mcp.core.watermark_engine import WatermarkTask, process_photo
from py_image_watermark_mcp.exceptions import (
    ProcessingError,
    UnsupportedFormatError,
    ValidationError,
)
from py_image_watermark_mcp.models.watermark_config import WatermarkLocation
from tests.conftest import make_photo, make_watermark
from tests.conftest import save_jpeg as write_jpeg


class TestPlacement:
    """水印定位测试"""

    @pytest.mark.parametrize(
        ("base_size", "wm_size"),
        [((100, 200), (40, 20)), ((640, 480), (128, 96)), ((10, 10), (10, 10))],
    )
    def test_bottom_anchored_offsets(self, base_size, wm_size):
        """测试左右两种位置都对齐底边"""
        (w_base, h_base), (w_wm, h_wm) = base_size, wm_size

        right = compute_offset(base_size, wm_size, WatermarkLocation.RIGHT)
        left = compute_offset(base_size, wm_size, WatermarkLocation.LEFT)

        assert right == PlacementOffset(w_base - w_wm, h_base - h_wm)
        assert left == PlacementOffset(0, h_base - h_wm)

    def test_concrete_scenario(self):
        """测试 100×200 照片、40×20 水印的偏移"""
        assert compute_offset((100, 200), (40, 20), "right").as_tuple() == (60, 180)
        assert compute_offset((100, 200), (40, 20), "left").as_tuple() == (0, 180)

    def test_unknown_location_falls_back_to_origin(self):
        """测试未知位置回退到 (0, 0)"""
        assert compute_offset((100, 200), (40, 20), "center") == PlacementOffset(0, 0)

    def test_oversized_watermark_gives_negative_offset(self):
        """测试水印比照片大时不报错"""
        offset = compute_offset((100, 50), (160, 80), WatermarkLocation.RIGHT)
        assert offset == PlacementOffset(-60, -30)


class TestOpacityMask:
    """不透明度遮罩测试"""

    @pytest.mark.parametrize(
        ("opacity", "expected"),
        [(0, 0), (50, 128), (70, 179), (100, 255)],
    )
    def test_percentage_mapping(self, opacity, expected):
        """测试百分比按四舍五入映射到 0-255"""
        assert OpacityMask.from_percentage(opacity).value == expected

    @pytest.mark.parametrize("opacity", [-1, 101, 255])
    def test_out_of_range_rejected(self, opacity):
        """测试超出 0-100 的百分比被拒绝"""
        with pytest.raises(ValidationError):
            OpacityMask.from_percentage(opacity)

    def test_mask_is_immutable(self):
        """测试遮罩构建后不可修改"""
        mask = OpacityMask(128)
        with pytest.raises(AttributeError):
            mask.value = 10  # type: ignore[misc]


class TestScaling:
    """水印缩放测试"""

    def test_concrete_scenario(self):
        """测试 50×25 水印按 0.1 缩放到 200 高的照片"""
        assert target_dimensions((50, 25), 0.1, 200) == (40, 20)

        watermark = make_watermark((50, 25))
        scaled = scale_watermark(watermark, 0.1, 200)

        assert scaled.size == (40, 20)
        assert watermark.size == (50, 25)

    @pytest.mark.parametrize(
        ("wm_size", "fraction", "base_height"),
        [((50, 25), 0.2, 480), ((33, 71), 0.35, 1000), ((300, 100), 0.05, 333)],
    )
    def test_height_and_aspect_preserved(self, wm_size, fraction, base_height):
        """测试高度为 round(f×H)，宽高比误差不超过 1 像素"""
        width, height = target_dimensions(wm_size, fraction, base_height)

        assert abs(height - round(fraction * base_height)) <= 1
        assert abs(width - wm_size[0] * height / wm_size[1]) <= 1

    @pytest.mark.parametrize("fraction", [0.0, -0.5, 0.001])
    def test_degenerate_height_rejected(self, fraction):
        """测试目标高度小于等于 0 时报错"""
        with pytest.raises(ValidationError):
            target_dimensions((50, 25), fraction, 200)

    def test_unknown_resample_rejected(self):
        """测试未知缩放滤镜"""
        with pytest.raises(ValidationError):
            scale_watermark(make_watermark(), 0.1, 200, resample="magic")

    def test_pluggable_resample(self):
        """测试其他滤镜得到相同尺寸"""
        scaled = scale_watermark(make_watermark(), 0.1, 200, resample="lanczos")
        assert scaled.size == (40, 20)


class TestCompositor:
    """水印合成测试"""

    @pytest.fixture
    def base(self):
        return make_photo((100, 200))

    def test_transparent_watermark_is_identity(self, base):
        """测试完全透明的水印不改变照片"""
        watermark = make_watermark((40, 20), (255, 0, 0, 0))

        for mask in (OpacityMask(255), OpacityMask.from_percentage(70)):
            result = compose(base, watermark, mask, PlacementOffset(60, 180))
            assert result.convert("RGB").tobytes() == base.tobytes()

    def test_opaque_watermark_footprint(self, base):
        """测试不透明水印覆盖区域等于水印，其余区域等于照片"""
        watermark = make_watermark((40, 20), (255, 0, 0, 255))

        result = compose(base, watermark, OpacityMask(255), PlacementOffset(60, 180))
        rgb = result.convert("RGB")

        assert result.size == base.size
        assert rgb.crop((60, 180, 100, 200)).getcolors() == [(800, (255, 0, 0))]
        assert rgb.crop((0, 0, 100, 180)).tobytes() == base.crop((0, 0, 100, 180)).tobytes()
        assert rgb.crop((0, 180, 60, 200)).tobytes() == base.crop((0, 180, 60, 200)).tobytes()

    def test_output_is_opaque(self, base):
        """测试输出画布 alpha 全为 255"""
        watermark = make_watermark((40, 20), (0, 255, 0, 90))

        result = compose(base, watermark, OpacityMask(128), PlacementOffset(0, 180))

        assert result.mode == "RGBA"
        assert result.getchannel("A").getextrema() == (255, 255)

    def test_mask_scales_watermark_alpha(self):
        """测试有效 alpha = 水印 alpha × 遮罩 / 255"""
        base = Image.new("RGB", (10, 10), (0, 0, 255))
        watermark = make_watermark((10, 10), (255, 0, 0, 255))

        result = compose(
            base, watermark, OpacityMask.from_percentage(50), PlacementOffset(0, 0)
        )
        red, green, blue, _ = result.getpixel((5, 5))

        assert abs(red - 128) <= 1
        assert green == 0
        assert abs(blue - 127) <= 1

    def test_oversized_watermark_is_clipped(self):
        """测试比照片大的水印被裁剪到画布内"""
        base = make_photo((100, 50))
        watermark = make_photo((160, 80)).convert("RGBA")
        offset = compute_offset(base.size, watermark.size, WatermarkLocation.RIGHT)

        result = compose(base, watermark, OpacityMask(255), offset)

        assert result.size == (100, 50)
        expected = watermark.crop((60, 30, 160, 80)).convert("RGB")
        assert result.convert("RGB").tobytes() == expected.tobytes()

    def test_partially_outside_watermark(self, base):
        """测试部分越界的水印只绘制画布内的部分"""
        watermark = make_watermark((40, 20), (255, 0, 0, 255))

        result = compose(base, watermark, OpacityMask(255), PlacementOffset(80, 190))
        rgb = result.convert("RGB")

        assert rgb.crop((80, 190, 100, 200)).getcolors() == [(200, (255, 0, 0))]
        assert rgb.crop((0, 0, 100, 190)).tobytes() == base.crop((0, 0, 100, 190)).tobytes()

    def test_watermark_fully_outside(self, base):
        """测试完全越界的水印不改变照片"""
        watermark = make_watermark((40, 20))

        result = compose(base, watermark, OpacityMask(255), PlacementOffset(200, 300))

        assert result.convert("RGB").tobytes() == base.tobytes()

    def test_inputs_not_mutated(self, base):
        """测试合成不修改照片和水印"""
        watermark = make_watermark((40, 20), (10, 20, 30, 150))
        base_bytes, wm_bytes = base.tobytes(), watermark.tobytes()

        compose(base, watermark, OpacityMask(100), PlacementOffset(-5, 190))

        assert base.tobytes() == base_bytes
        assert watermark.tobytes() == wm_bytes

    def test_visible_region(self):
        """测试可见区域计算"""
        assert visible_region((100, 200), (40, 20), PlacementOffset(60, 180)) == (
            (0, 0, 40, 20),
            (60, 180),
        )
        assert visible_region((100, 50), (160, 80), PlacementOffset(-60, -30)) == (
            (60, 30, 160, 80),
            (0, 0),
        )
        assert visible_region((100, 200), (40, 20), PlacementOffset(100, 0)) is None


class TestCodec:
    """编解码测试"""

    def test_load_photo(self, temp_dir: Path):
        """测试 JPEG 解码为 RGB"""
        photo = load_photo(write_jpeg(temp_dir / "photo.jpg", (120, 80)))

        assert photo.mode == "RGB"
        assert photo.size == (120, 80)

    def test_load_watermark(self, watermark_file: Path):
        """测试 PNG 解码为 RGBA"""
        watermark = load_watermark(watermark_file)

        assert watermark.mode == "RGBA"
        assert watermark.size == (50, 25)

    def test_png_disguised_as_jpeg(self, temp_dir: Path):
        """测试扩展名为 .jpg 的 PNG 被拒绝"""
        path = temp_dir / "fake.jpg"
        make_photo().save(path, "PNG")

        with pytest.raises(UnsupportedFormatError):
            load_photo(path)

    def test_corrupt_file(self, temp_dir: Path):
        """测试无法识别的文件"""
        path = temp_dir / "broken.jpg"
        path.write_bytes(b"definitely not a jpeg")

        with pytest.raises(UnsupportedFormatError):
            load_photo(path)

    def test_missing_file(self, temp_dir: Path):
        """测试文件不存在"""
        with pytest.raises(ProcessingError):
            load_photo(temp_dir / "missing.jpg")

    def test_save_jpeg(self, temp_dir: Path):
        """测试 RGBA 画布编码为 JPEG"""
        canvas = make_photo((64, 32)).convert("RGBA")
        output = temp_dir / "out.jpg"

        size = save_jpeg(canvas, output, quality=95)

        assert size == output.stat().st_size > 0
        with Image.open(output) as img:
            assert img.format == "JPEG"
            assert img.size == (64, 32)

    def test_save_jpeg_default_quality(self, temp_dir: Path):
        """测试默认以质量 95 编码"""
        photo = make_photo((64, 32))
        reference = temp_dir / "reference.jpg"
        photo.save(reference, "JPEG", quality=95)
        output = temp_dir / "out.jpg"

        save_jpeg(photo, output)

        with Image.open(output) as out, Image.open(reference) as ref:
            assert out.quantization == ref.quantization

    def test_failed_encode_removes_partial_output(self, temp_dir: Path, monkeypatch):
        """测试编码中途失败时删除残缺的输出文件"""
        photo = make_photo((64, 32))
        output = temp_dir / "out.jpg"

        def broken_save(self, fp, *args, **kwargs):
            fp.write(b"\xff\xd8\xff partial")
            raise OSError("磁盘已满")

        monkeypatch.setattr(Image.Image, "save", broken_save)

        with pytest.raises(ProcessingError, match="磁盘已满"):
            save_jpeg(photo, output)
        assert not output.exists()


class TestWatermarkEngine:
    """单张照片处理测试"""

    def _task(self, input_path: Path, output_path: Path, **kwargs) -> WatermarkTask:
        params = {
            "watermark": make_watermark((50, 25), (255, 255, 255, 255)),
            "mask": OpacityMask.from_percentage(70),
            "location": WatermarkLocation.RIGHT,
            "scale": 0.1,
        }
        params.update(kwargs)
        return WatermarkTask(input_path=input_path, output_path=output_path, **params)

    def test_process_photo(self, temp_dir: Path):
        """测试完整流程"""
        source = write_jpeg(temp_dir / "photo.jpg", (100, 200))
        output = temp_dir / "out" / "photo.jpg"
        output.parent.mkdir()

        result = process_photo(self._task(source, output))

        assert result.success
        assert result.error is None
        assert result.original_dimensions == (100, 200)
        assert result.watermark_dimensions == (40, 20)
        assert result.offset == (60, 180)
        assert result.output_size == output.stat().st_size
        with Image.open(output) as img:
            assert img.format == "JPEG"
            assert img.size == (100, 200)

    def test_left_location(self, temp_dir: Path):
        """测试左下角定位"""
        source = write_jpeg(temp_dir / "photo.jpg", (100, 200))

        result = process_photo(
            self._task(source, temp_dir / "left.jpg", location=WatermarkLocation.LEFT)
        )

        assert result.success
        assert result.offset == (0, 180)

    def test_failure_is_reported_not_raised(self, temp_dir: Path):
        """测试解码失败返回失败结果且不留输出文件"""
        source = temp_dir / "broken.jpg"
        source.write_bytes(b"\xff\xd8garbage")
        output = temp_dir / "broken_out.jpg"

        result = process_photo(self._task(source, output))

        assert not result.success
        assert result.error is not None
        assert not output.exists()

    def test_degenerate_scale_fails_file(self, temp_dir: Path):
        """测试缩放后高度为 0 时该文件失败"""
        source = write_jpeg(temp_dir / "tiny.jpg", (20, 10))

        result = process_photo(self._task(source, temp_dir / "tiny_out.jpg", scale=0.01))

        assert not result.success
