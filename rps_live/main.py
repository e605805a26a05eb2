"""
剪刀石头布实时手势游戏主程序入口
Live Gesture Rock Paper Scissors Main Entry
"""
import sys
import argparse

from .app import Application
from .utils.logger import setup_logger

logger = setup_logger("RPSLive.Main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='剪刀石头布实时手势游戏')
    parser.add_argument(
        '--config',
        type=str,
        default=None,
        help='配置文件路径（默认: config/config.yaml）'
    )
    parser.add_argument(
        '--rounds',
        type=int,
        default=None,
        help='回合数（覆盖配置文件中的 game.max_rounds）'
    )
    parser.add_argument(
        '--source-folder',
        type=str,
        default=None,
        help='使用图片目录代替摄像头作为帧源'
    )
    return parser


def main(argv=None):
    """主函数"""
    args = build_parser().parse_args(argv)

    logger.info("=" * 50)
    logger.info("剪刀石头布实时手势游戏启动")
    logger.info("Live Gesture Rock Paper Scissors Starting")
    logger.info("=" * 50)

    app = Application(
        config_path=args.config,
        max_rounds=args.rounds,
        source_folder=args.source_folder
    )

    try:
        if not app.start():
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("用户中断程序")
    finally:
        logger.info("程序退出")


if __name__ == "__main__":
    main()
