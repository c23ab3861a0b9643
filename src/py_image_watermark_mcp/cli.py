"""命令行入口。

解析参数、打印运行参数、执行启动前检查，然后批量添加水印并输出摘要。
"""

import argparse
import sys
from collections.abc import Sequence

from . import __version__
from .config import get_config
from .engine.batch import BatchRunner
from .engine.config import WatermarkConfigBuilder
from .exceptions import ValidationError
from .models.constants import ResampleFilters
from .models.watermark_config import WatermarkConfig, WatermarkLocation
from .utils.logging_helpers import get_logger, setup_logging


logger = get_logger()

SEPARATOR = "--------------------------------------"


def create_parser() -> argparse.ArgumentParser:
    """创建命令行解析器，默认值来自 AppConfig（可被 PIW_* 环境变量覆盖）"""
    defaults = get_config()

    parser = argparse.ArgumentParser(
        prog="py-image-watermark",
        description="为目录中的 JPEG 照片批量添加 PNG 水印",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-opacity",
        "--opacity",
        type=int,
        default=defaults.watermark.OPACITY,
        help="水印不透明度 (0-100)",
    )
    parser.add_argument(
        "-location",
        "--location",
        default=defaults.watermark.LOCATION,
        help=f"水印位置 [{', '.join(loc.value for loc in WatermarkLocation)}]",
    )
    parser.add_argument(
        "-scale",
        "--scale",
        type=float,
        default=defaults.watermark.SCALE,
        help="水印高度占照片高度的比例 (0-1)",
    )
    parser.add_argument(
        "-watermark",
        "--watermark",
        default=defaults.watermark.WATERMARK_PATH,
        help="用作水印的 PNG 图片",
    )
    parser.add_argument(
        "-source",
        "--source",
        default=defaults.watermark.SOURCE_DIR,
        help="源目录（待加水印的照片）",
    )
    parser.add_argument(
        "-target",
        "--target",
        default=defaults.watermark.TARGET_DIR,
        help="目标目录（输出加水印后的照片）",
    )
    parser.add_argument(
        "-force",
        "--force",
        action="store_true",
        help="目标目录已存在时强制覆盖",
    )
    parser.add_argument(
        "--quality",
        type=int,
        default=defaults.watermark.JPEG_QUALITY,
        help="输出 JPEG 质量 (1-100)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=defaults.processing.MAX_WORKERS,
        help="最大并发数，默认每个文件一个线程",
    )
    parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=defaults.processing.FAIL_FAST,
        help="首个文件失败后取消剩余任务",
    )
    parser.add_argument(
        "--resample",
        choices=ResampleFilters.names(),
        default=defaults.watermark.RESAMPLE,
        help="水印缩放滤镜",
    )
    parser.add_argument(
        "--log-level",
        default=defaults.logging.LOG_LEVEL,
        help="日志级别",
    )
    parser.add_argument(
        "--pause",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="结束前等待回车（默认仅在交互终端中等待）",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def print_banner() -> None:
    border = "*" * 74
    print(border)
    print("*" + " " * 72 + "*")
    print(f"*{f'py-image-watermark v{__version__}':^72}*")
    print("*" + " " * 72 + "*")
    print(border)
    print()
    print("帮助: 使用 -h 参数运行本程序")
    print()


def print_parameters(args: argparse.Namespace) -> None:
    print("使用以下参数:")
    print(f"- 不透明度:   {args.opacity}")
    print(f"- 位置:       {args.location}")
    print(f"- 比例:       {args.scale:1.1f}")
    print(f"- 水印:       {args.watermark}")
    print(f"- 源目录:     {args.source}")
    print(f"- 目标目录:   {args.target}")


def build_config(args: argparse.Namespace) -> WatermarkConfig:
    """把命令行参数转换为已验证的配置，必要时创建目标目录"""
    return WatermarkConfigBuilder().validate_and_build(
        opacity=args.opacity,
        location=args.location,
        scale=args.scale,
        watermark_path=args.watermark,
        source_dir=args.source,
        target_dir=args.target,
        force=args.force,
        jpeg_quality=args.quality,
        max_workers=args.workers,
        fail_fast=args.fail_fast,
        resample=args.resample,
    )


def wait_for_keypress(pause: bool | None) -> None:
    if pause is None:
        pause = sys.stdin.isatty()
    if pause:
        print("按回车键退出")
        try:
            input()
        except EOFError:
            pass


def main(argv: Sequence[str] | None = None) -> int:
    """命令行主函数

    Returns:
        int: 退出码，配置错误或有文件失败时为 1
    """
    args = create_parser().parse_args(argv)
    setup_logging(args.log_level)

    print_banner()
    print_parameters(args)

    try:
        config = build_config(args)
    except ValidationError as e:
        logger.error(f"错误: {e.message}")
        return 1

    print(f"\n{SEPARATOR}\n")

    result = BatchRunner.from_config(config).process_directory(config)

    print(f"\n完成！{result.get_summary()}")
    for failed in result.get_failed_items():
        print(f"  ✗ {failed.input_path.name}: {failed.error}")
    print(f"{SEPARATOR}\n")

    wait_for_keypress(args.pause)
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
