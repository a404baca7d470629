"""rpc-openapi 的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog

from rpc_openapi.settings import APP_NAME, APP_VERSION, Settings

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from structlog.typing import BindableLogger, Processor


class StructlogConfig:
    """structlog 配置核心类.

    负责配置 structlog 的处理器链与渲染器.文档生成是纯计算过程,
    这里不挂载任何持久化处理器,只输出到标准流.

    Attributes:
        settings: 当前使用的配置.
        configured: 是否已配置标志.

    Example:
        >>> config = StructlogConfig()
        >>> config.configure()
        >>> logger = get_logger('generator')

    """

    def __init__(self) -> None:
        self.settings: Settings | None = None
        self.configured = False

    def configure(self, settings: Settings | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        可以多次调用,只会配置一次;传入新的 settings 时会重新配置.

        Args:
            settings: 应用配置,可选.缺省时使用默认 Settings.

        Returns:
            None.

        """
        if self.configured and settings is None:
            return
        resolved = settings or self.settings or Settings.load()
        self.settings = resolved

        level = logging.getLevelName(resolved.log_level)
        logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
        logging.getLogger().setLevel(level)

        processors = [
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            self._add_global_context,
            self._get_renderer(resolved),
        ]
        structlog.configure(
            processors=cast("list[Processor]", processors),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            # 入口会按加载后的配置再次调用 configure, 已绑定的 logger 不能缓存旧的处理器链
            cache_logger_on_first_use=False,
        )
        self.configured = True

    def _add_global_context(
        self,
        _logger: BindableLogger,
        _method_name: str,
        event_dict: MutableMapping[str, object],
    ) -> MutableMapping[str, object]:
        """附加应用名、版本与环境等全局上下文."""
        settings = self.settings
        event_dict["app_name"] = settings.app_name if settings else APP_NAME
        event_dict["app_version"] = settings.app_version if settings else APP_VERSION
        if settings is not None:
            event_dict["environment"] = settings.environment
        return event_dict

    @staticmethod
    def _get_renderer(settings: Settings) -> Processor:
        """根据配置与终端能力返回渲染器."""
        if settings.log_json:
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


structlog_config = StructlogConfig()


def configure_logging(settings: Settings | None = None) -> None:
    """按配置初始化日志系统."""
    structlog_config.configure(settings)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    Example:
        >>> logger = get_logger('generator')
        >>> logger.info('文档生成完成', operations=3)

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def get_generator_logger() -> structlog.stdlib.BoundLogger:
    """返回文档生成器 logger.

    Returns:
        structlog.BoundLogger: 绑定生成器模块的 logger.

    """
    return get_logger("generator")


def get_api_logger() -> structlog.stdlib.BoundLogger:
    """返回 HTTP 边界 logger."""
    return get_logger("api")


__all__ = [
    "StructlogConfig",
    "configure_logging",
    "get_api_logger",
    "get_generator_logger",
    "get_logger",
    "structlog_config",
]
