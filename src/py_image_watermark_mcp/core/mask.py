"""不透明度遮罩模块。"""

from dataclasses import dataclass

from PIL import Image, ImageChops

from ..exceptions import ValidationError


@dataclass(frozen=True)
class OpacityMask:
    """均匀的不透明度遮罩

    启动时由不透明度百分比构建一次，之后在所有任务间只读共享。
    """

    value: int

    def __post_init__(self) -> None:
        if not 0 <= self.value <= 255:
            raise ValidationError(f"遮罩值必须在 0-255 之间，当前值: {self.value}")

    @classmethod
    def from_percentage(cls, opacity: int) -> "OpacityMask":
        """把 0-100 的百分比映射到 0-255 的 alpha，四舍五入"""
        if not 0 <= opacity <= 100:
            raise ValidationError(f"不透明度必须在 0-100 之间，当前值: {opacity}")
        return cls((opacity * 255 + 50) // 100)

    @property
    def is_opaque(self) -> bool:
        return self.value == 255

    def as_image(self, size: tuple[int, int]) -> Image.Image:
        """生成给定尺寸的 L 模式遮罩图"""
        return Image.new("L", size, self.value)

    def apply(self, alpha: Image.Image) -> Image.Image:
        """把遮罩乘到 alpha 通道上（alpha * value / 255），返回新的通道图"""
        if self.is_opaque:
            return alpha.copy()
        return ImageChops.multiply(alpha, self.as_image(alpha.size))
