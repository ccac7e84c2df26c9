"""
异常定义模块
定义项目中使用的所有自定义异常类
"""

import numbers
from typing import Optional, Any


class FastLogBaseException(Exception):
    """fastlog 项目基础异常类"""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ConfigurationError(FastLogBaseException):
    """配置相关异常"""
    pass


class ValidationError(FastLogBaseException):
    """参数验证异常"""
    pass


class ApproximationError(FastLogBaseException):
    """近似函数相关异常"""
    pass


class EvaluationError(FastLogBaseException):
    """精度验证相关异常"""
    pass


class PerformanceError(FastLogBaseException):
    """性能测试相关异常"""
    pass


class FileOperationError(FastLogBaseException):
    """文件操作异常"""
    pass


# 具体的异常类定义

class UnsupportedDataTypeError(ValidationError):
    """不支持的数据类型异常"""

    def __init__(self, dtype: str, supported_types: list):
        message = f"不支持的数据类型: {dtype}, 支持的类型: {supported_types}"
        super().__init__(message, "UNSUPPORTED_DATA_TYPE", {
            'dtype': dtype,
            'supported_types': supported_types
        })


class InvalidDegreeError(ApproximationError):
    """无效近似阶数异常"""

    def __init__(self, degree: Any, min_degree: int, max_degree: int):
        message = f"近似阶数无效: {degree}, 应在 {min_degree}-{max_degree} 之间"
        super().__init__(message, "INVALID_DEGREE", {
            'degree': degree,
            'min_degree': min_degree,
            'max_degree': max_degree
        })


class InvalidSampleCountError(EvaluationError):
    """无效采样点数异常"""

    def __init__(self, num_samples: Any):
        message = f"采样点数无效: {num_samples}, 必须为正整数"
        super().__init__(message, "INVALID_SAMPLE_COUNT", {'num_samples': num_samples})


class InvalidWorkerCountError(EvaluationError):
    """无效工作线程数异常"""

    def __init__(self, num_threads: Any):
        message = f"工作线程数无效: {num_threads}, 必须为正整数"
        super().__init__(message, "INVALID_WORKER_COUNT", {'num_threads': num_threads})


class WorkerFailureError(EvaluationError):
    """工作线程失败异常（整个验证运行失败）"""

    def __init__(self, partition: tuple, error_message: str):
        message = f"工作线程失败: 分区 [{partition[0]}, {partition[1]}), 错误: {error_message}"
        super().__init__(message, "WORKER_FAILURE", {
            'partition': partition,
            'error_message': error_message
        })


class AccuracyThresholdExceededError(EvaluationError):
    """精度阈值超出异常"""

    def __init__(self, degree: int, actual_error: float, threshold: float):
        message = f"{degree} 阶近似误差超出阈值: {actual_error:.6e} > {threshold:.6e}"
        super().__init__(message, "ACCURACY_THRESHOLD_EXCEEDED", {
            'degree': degree,
            'actual_error': actual_error,
            'threshold': threshold
        })


class BenchmarkError(PerformanceError):
    """基准测试异常"""

    def __init__(self, test_name: str, error_message: str):
        message = f"基准测试失败: {test_name}, 错误: {error_message}"
        super().__init__(message, "BENCHMARK_ERROR", {
            'test_name': test_name,
            'error_message': error_message
        })


class ConfigParseError(ConfigurationError):
    """配置文件解析异常"""

    def __init__(self, config_file: str, parse_error: str):
        message = f"配置文件解析失败: {config_file}, 错误: {parse_error}"
        super().__init__(message, "CONFIG_PARSE_ERROR", {
            'config_file': config_file,
            'parse_error': parse_error
        })


# 异常处理工具函数

def handle_exception(exception: Exception, context: str = "") -> str:
    """
    统一异常处理函数

    Args:
        exception: 异常对象
        context: 异常上下文信息

    Returns:
        格式化的错误消息
    """
    if isinstance(exception, FastLogBaseException):
        error_msg = str(exception)
    else:
        error_msg = f"未处理的异常: {type(exception).__name__}: {str(exception)}"
    if context:
        error_msg = f"[{context}] {error_msg}"
    return error_msg


def validate_dtype(dtype: str, supported_types: list) -> None:
    """
    验证数据类型

    Args:
        dtype: 数据类型名称
        supported_types: 支持的类型列表

    Raises:
        UnsupportedDataTypeError: 类型不支持时抛出
    """
    if dtype not in supported_types:
        raise UnsupportedDataTypeError(dtype, supported_types)


def validate_degree(degree: Any, min_degree: int, max_degree: int) -> None:
    """
    验证近似阶数

    Raises:
        InvalidDegreeError: 阶数不是 [min_degree, max_degree] 内的整数时抛出
    """
    if isinstance(degree, bool) or not isinstance(degree, numbers.Integral):
        raise InvalidDegreeError(degree, min_degree, max_degree)
    if not (min_degree <= degree <= max_degree):
        raise InvalidDegreeError(degree, min_degree, max_degree)


def validate_sample_count(num_samples: Any) -> None:
    """验证采样点数（正整数）"""
    if isinstance(num_samples, bool) or not isinstance(num_samples, numbers.Integral) or num_samples <= 0:
        raise InvalidSampleCountError(num_samples)


def validate_worker_count(num_threads: Any) -> None:
    """验证工作线程数（正整数）"""
    if isinstance(num_threads, bool) or not isinstance(num_threads, numbers.Integral) or num_threads < 1:
        raise InvalidWorkerCountError(num_threads)
