"""
应用程序主类
Application Main Class
"""
import asyncio
import signal
from typing import Optional
from .hardware import HardwareFactory
from .hardware.base.frame_source import FrameSource
from .game import GameController, GameState, RoundOutcome
from .game.game_logic import RoundResolver, RoundHistory
from .game.gesture_recognition import FrameClassifier, SizeSampleWindow, DetectionResult
from .utils.logger import setup_logger, setup_logger_from_config, configure_all_loggers
from .utils.config_loader import ConfigLoader, DEFAULT_CONFIG_PATH
from .utils.error_handler import global_error_handler
from .utils.exceptions import (
    CameraException, GameException, ConfigurationException
)

logger = setup_logger("RPSLive.App")


class Application:
    """应用程序主类"""

    POLL_INTERVAL = 0.1

    def __init__(self, config_path: Optional[str] = None,
                 max_rounds: Optional[int] = None,
                 source_folder: Optional[str] = None):
        """
        初始化应用程序

        Args:
            config_path: 配置文件路径
            max_rounds: 回合数（覆盖配置文件）
            source_folder: 图片目录（覆盖配置文件，改用图片目录帧源）
        """
        self.config_path = config_path or str(DEFAULT_CONFIG_PATH)
        self.config = {}
        self.max_rounds_override = max_rounds
        self.source_folder = source_folder

        self.frame_source: Optional[FrameSource] = None
        self.size_window: Optional[SizeSampleWindow] = None
        self.game_controller: Optional[GameController] = None

        self.max_rounds = 5
        self.result_pause_seconds = 1.5

        # 运行状态
        self.is_running = False
        self.should_exit = False
        self._round_event: Optional[asyncio.Event] = None
        self._last_outcome: Optional[RoundOutcome] = None

        logger.info("应用程序初始化完成")

    def _signal_handler(self, signum, frame):
        """信号处理函数"""
        logger.info(f"收到信号 {signum}，准备退出")
        self.should_exit = True

    def initialize(self) -> bool:
        """
        初始化所有组件

        Returns:
            bool: 初始化是否成功
        """
        logger.info("=" * 50)
        logger.info("开始初始化应用程序")
        logger.info("=" * 50)

        if not self._load_config():
            return False

        if not self._initialize_frame_source():
            return False

        if not self._initialize_game_controller():
            return False

        logger.info("应用程序初始化成功")
        return True

    def _load_config(self) -> bool:
        """加载配置文件"""
        global logger
        try:
            self.config = ConfigLoader.load_config(self.config_path)
        except FileNotFoundError:
            logger.error(f"配置文件不存在: {self.config_path}")
            return False
        except Exception as e:
            global_error_handler.handle(ConfigurationException(str(e)), "加载配置")
            return False

        logging_config = ConfigLoader.get_logging_config(self.config)
        logger = setup_logger_from_config(logging_config, "RPSLive.App")
        configure_all_loggers(logging_config)

        game_config = ConfigLoader.get_game_config(self.config)
        self.max_rounds = self.max_rounds_override or int(game_config.get('max_rounds', 5))
        self.result_pause_seconds = float(game_config.get('result_pause_seconds', 1.5))
        logger.info(f"配置文件加载成功: {self.config_path}")
        return True

    def _initialize_frame_source(self) -> bool:
        """创建并连接帧源"""
        camera_config = ConfigLoader.get_hardware_config(self.config, 'camera') or {}
        if self.source_folder:
            camera_config = {'type': 'image_folder', 'folder': self.source_folder}

        try:
            self.frame_source = HardwareFactory.create_from_config(camera_config)
        except ConfigurationException as e:
            global_error_handler.handle(e, "创建帧源")
            return False
        except (TypeError, ValueError) as e:
            global_error_handler.handle(ConfigurationException(str(e), config_key="camera"), "创建帧源")
            return False

        if not self.frame_source.connect():
            global_error_handler.handle(CameraException("帧源连接失败"), "连接帧源")
            return False

        logger.info(f"✓ 帧源连接成功: {self.frame_source.get_status()}")
        return True

    def _initialize_game_controller(self) -> bool:
        """初始化游戏控制器"""
        game_config = ConfigLoader.get_game_config(self.config)
        detection_config = game_config.get('gesture_detection') or {}

        try:
            # 字节数窗口在整个进程会话内保留，跨回合累计
            self.size_window = SizeSampleWindow.create(int(game_config.get('size_window', 40)))
            classifier = FrameClassifier(self.size_window)
            resolver = RoundResolver(history=RoundHistory(int(game_config.get('history_size', 5))))

            self.game_controller = GameController(
                frame_source=self.frame_source,
                classifier=classifier,
                resolver=resolver,
                min_confidence=float(detection_config.get('min_confidence', 0.5)),
                required_streak=int(detection_config.get('required_streak', 2))
            )
        except (TypeError, ValueError) as e:
            global_error_handler.handle(GameException(str(e)), "初始化游戏控制器")
            return False

        self.game_controller.on_state_changed = self._on_game_state_changed
        self.game_controller.on_live_detection = self._on_live_detection
        self.game_controller.on_round_result = self._on_round_result

        logger.info("✓ 游戏控制器初始化成功")
        return True

    def _on_game_state_changed(self, state: GameState):
        """游戏状态改变回调"""
        logger.debug(f"游戏状态改变: {state}")

    def _on_live_detection(self, detection: DetectionResult):
        """实时识别回调"""
        logger.info(self.game_controller.live_detection_label())

    def _on_round_result(self, outcome: RoundOutcome):
        """回合结果回调"""
        self._last_outcome = outcome
        logger.info(self.game_controller.status_text())
        if self._round_event is not None:
            self._round_event.set()

    async def run_session(self):
        """依次进行 max_rounds 个回合"""
        controller = self.game_controller
        played = 0

        while not self.should_exit and played < self.max_rounds:
            if not controller.open_capture():
                await asyncio.sleep(self.POLL_INTERVAL)
                continue

            logger.info(f"第 {played + 1}/{self.max_rounds} 回合：请把手放在摄像头前并保持姿势")
            outcome = await self._wait_for_round()
            if outcome is None:
                break

            played += 1
            await asyncio.sleep(self.result_pause_seconds)

        controller.close_capture()
        await controller.sampler.wait()
        self._log_summary()

    async def _wait_for_round(self) -> Optional[RoundOutcome]:
        self._round_event = asyncio.Event()
        self._last_outcome = None
        while not self.should_exit:
            try:
                await asyncio.wait_for(self._round_event.wait(), timeout=self.POLL_INTERVAL)
            except asyncio.TimeoutError:
                continue
            return self._last_outcome
        return None

    def _log_summary(self):
        stats = self.game_controller.get_game_statistics()
        logger.info("游戏结束")
        logger.info(f"统计信息: 总回合={stats.total_rounds}, "
                    f"玩家胜={stats.wins}, "
                    f"电脑胜={stats.losses}, "
                    f"平局={stats.draws}, "
                    f"胜率={stats.get_win_rate():.2%}")
        for outcome in self.game_controller.get_round_history():
            logger.info(f"  {outcome.player_gesture} vs {outcome.computer_gesture}: {outcome.result}")

    def run(self):
        """运行应用程序主循环"""
        if not self.is_running:
            logger.error("应用程序未初始化，无法运行")
            return

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            asyncio.run(self.run_session())
        except Exception as e:
            logger.error(f"主循环异常: {e}", exc_info=True)
            global_error_handler.handle(e, "主循环")
        finally:
            self.cleanup()

    def cleanup(self):
        """清理资源"""
        logger.info("开始清理资源...")

        if self.frame_source is not None:
            close = getattr(self.frame_source, 'close', None)
            if close is not None:
                close()
            elif self.frame_source.is_connected():
                self.frame_source.disconnect()
            logger.info("✓ 帧源已断开")

        self.is_running = False
        logger.info("资源清理完成")

    def start(self) -> bool:
        """
        启动应用程序

        Returns:
            bool: 启动是否成功
        """
        if not self.initialize():
            logger.error("应用程序启动失败")
            return False

        self.is_running = True
        self.run()
        return True
