"""
日志配置模块
统一管理项目中的日志记录功能
"""

import logging
import sys
import time
from datetime import datetime
from typing import Optional, Dict, Any, Sequence
from pathlib import Path

from .constants import LOG_LEVELS, DEFAULT_LOG_LEVEL, LOG_FORMAT, LOG_DATE_FORMAT, OUTPUT_DIRS


class ColoredFormatter(logging.Formatter):
    """彩色日志格式化器"""

    # 颜色代码
    COLORS = {
        'DEBUG': '\033[36m',      # 青色
        'INFO': '\033[32m',       # 绿色
        'WARNING': '\033[33m',    # 黄色
        'ERROR': '\033[31m',      # 红色
        'CRITICAL': '\033[35m',   # 紫色
        'RESET': '\033[0m'        # 重置
    }

    def format(self, record: logging.LogRecord) -> str:
        """格式化日志记录"""
        original_format = super().format(record)

        if record.levelname in self.COLORS:
            color = self.COLORS[record.levelname]
            reset = self.COLORS['RESET']
            return f"{color}{original_format}{reset}"

        return original_format


class FastLogLogger:
    """fastlog 项目专用日志器"""

    def __init__(self, name: str = "fastlog", level: str = DEFAULT_LOG_LEVEL,
                 enable_file_logging: bool = True):
        self.name = name
        self.level = level.upper()
        self.enable_file_logging = enable_file_logging
        self.logger = logging.getLogger(name)
        self._current_log_file: Optional[Path] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """设置日志器"""
        # 清除现有的处理器
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        self.logger.setLevel(getattr(logging, self.level))

        # 防止重复日志
        self.logger.propagate = False

        self._add_console_handler()
        if self.enable_file_logging:
            self._add_file_handler()

    def _add_console_handler(self) -> None:
        """添加控制台处理器"""
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(getattr(logging, self.level))
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, LOG_DATE_FORMAT))
        self.logger.addHandler(console_handler)

    def _add_file_handler(self) -> None:
        """添加文件处理器（按天一个文件）"""
        log_dir = Path(OUTPUT_DIRS['logs'])
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d")
        log_file = log_dir / f"fastlog_{timestamp}.log"
        self._current_log_file = log_file

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)  # 文件记录所有级别
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        self.logger.addHandler(file_handler)

    @property
    def current_log_file(self) -> Optional[Path]:
        return self._current_log_file

    def debug(self, message: str, **kwargs) -> None:
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs) -> None:
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs) -> None:
        self.logger.error(message, **kwargs)

    def critical(self, message: str, **kwargs) -> None:
        self.logger.critical(message, **kwargs)

    def exception(self, message: str, **kwargs) -> None:
        """异常日志（包含堆栈跟踪）"""
        self.logger.exception(message, **kwargs)

    def set_level(self, level: str) -> None:
        """设置日志级别"""
        if level.upper() not in LOG_LEVELS:
            raise ValueError(f"无效的日志级别: {level}, 支持: {LOG_LEVELS}")

        self.level = level.upper()
        self.logger.setLevel(getattr(logging, self.level))

        # 只更新控制台处理器，文件处理器始终记录 DEBUG
        for handler in self.logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(getattr(logging, self.level))

    def add_handler(self, handler: logging.Handler) -> None:
        """添加自定义处理器"""
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        """移除处理器"""
        self.logger.removeHandler(handler)


class PerformanceLogger:
    """性能专用日志器"""

    def __init__(self, logger: FastLogLogger):
        self.logger = logger

    def log_variant_timing(self, variant_name: str, num_samples: int, elapsed_us: int) -> None:
        """记录单个变体的计时信息"""
        per_call_ns = elapsed_us * 1000.0 / num_samples if num_samples > 0 else 0.0
        message = (f"性能测试: {variant_name}, "
                   f"样本数: {num_samples}, "
                   f"耗时: {elapsed_us}us, "
                   f"单次: {per_call_ns:.3f}ns")
        self.logger.info(message)

    def log_benchmark(self, test_name: str, result: Dict[str, Any]) -> None:
        """记录基准测试信息"""
        self.logger.info(f"基准测试: {test_name}, 结果: {result}")


class AccuracyLogger:
    """精度专用日志器"""

    def __init__(self, logger: FastLogLogger):
        self.logger = logger

    def log_accuracy_test(self, function_name: str, error: float,
                          threshold: float, passed: bool,
                          theoretical: Optional[float] = None) -> None:
        """记录精度测试信息（可附带拟合时推得的理论最大误差）"""
        status = "通过" if passed else "失败"
        message = (f"精度测试 {status}: {function_name}, "
                   f"最大误差: {error:.6e}, "
                   f"阈值: {threshold:.6e}")
        if theoretical is not None:
            message += f", 理论误差: {theoretical:.6e}"

        if passed:
            self.logger.info(message)
        else:
            self.logger.error(message)

    def log_validation_run(self, num_samples: int, num_threads: int,
                           max_errors: Sequence[float], elapsed: float) -> None:
        """记录一次完整验证运行的摘要"""
        errors = ", ".join(f"{e:.3e}" for e in max_errors)
        self.logger.info(f"精度验证完成: 样本数 {num_samples}, 线程数 {num_threads}, "
                         f"耗时 {elapsed:.3f}s, 最大误差 [{errors}]")


# 全局日志器实例
_global_logger: Optional[FastLogLogger] = None
_performance_logger: Optional[PerformanceLogger] = None
_accuracy_logger: Optional[AccuracyLogger] = None


def get_logger(name: str = "fastlog", level: str = DEFAULT_LOG_LEVEL) -> FastLogLogger:
    """获取日志器实例"""
    global _global_logger
    if _global_logger is None:
        _global_logger = FastLogLogger(name, level)
    return _global_logger


def get_performance_logger() -> PerformanceLogger:
    """获取性能日志器实例"""
    global _performance_logger
    if _performance_logger is None:
        _performance_logger = PerformanceLogger(get_logger())
    return _performance_logger


def get_accuracy_logger() -> AccuracyLogger:
    """获取精度日志器实例"""
    global _accuracy_logger
    if _accuracy_logger is None:
        _accuracy_logger = AccuracyLogger(get_logger())
    return _accuracy_logger


def setup_logging(level: str = DEFAULT_LOG_LEVEL,
                  log_file: Optional[str] = None) -> FastLogLogger:
    """设置项目日志"""
    logger = get_logger(level=level)
    logger.set_level(level)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
        logger.add_handler(file_handler)

    return logger


def log_execution_time(func_name: str):
    """执行时间记录装饰器"""
    def decorator(func):
        def wrapper(*args, **kwargs):
            logger = get_logger()

            start_time = time.perf_counter()
            logger.debug(f"开始执行: {func_name}")

            try:
                result = func(*args, **kwargs)
                execution_time = time.perf_counter() - start_time
                logger.info(f"执行完成: {func_name}, 耗时: {execution_time:.6f}s")
                return result
            except Exception as e:
                execution_time = time.perf_counter() - start_time
                logger.error(f"执行失败: {func_name}, 耗时: {execution_time:.6f}s, 错误: {str(e)}")
                raise
        wrapper.__name__ = getattr(func, '__name__', func_name)
        wrapper.__doc__ = getattr(func, '__doc__', None)
        return wrapper
    return decorator
