"""
基础模块
包含常量定义、异常处理和日志系统
"""

from .constants import (
    APPROXIMATION_DEGREES,
    MIN_DEGREE,
    MAX_DEGREE,
    DEFAULT_DEGREE,
    VALIDATION_INTERVAL,
    DOCUMENTED_MAX_ERRORS,
    THEORETICAL_MAX_ERRORS,
    BOUND_RELATIVE_TOLERANCE,
    BOUND_ULP_TOLERANCE,
    LN2_DIGITS,
    LOG10_2_DIGITS,
    LN2,
    LOG10_2,
    SUPPORTED_DTYPES,
    TORCH_SUPPORTED_DTYPES,
    DEFAULT_DTYPE,
    BASELINE_DTYPE,
    CALIBRATION_SAMPLES,
    ACCURACY_CONFIG,
    PERFORMANCE_CONFIG,
    RESERVED_BASELINE_SLOTS,
    OUTPUT_DIRS,
    FILE_EXTENSIONS,
    LOG_LEVELS,
    DEFAULT_LOG_LEVEL,
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    REPORT_PRECISION,
    VERSION_INFO
)

from .exceptions import (
    FastLogBaseException,
    ConfigurationError,
    ValidationError,
    ApproximationError,
    EvaluationError,
    PerformanceError,
    FileOperationError,
    UnsupportedDataTypeError,
    InvalidDegreeError,
    InvalidSampleCountError,
    InvalidWorkerCountError,
    WorkerFailureError,
    AccuracyThresholdExceededError,
    BenchmarkError,
    ConfigParseError,
    handle_exception,
    validate_dtype,
    validate_degree,
    validate_sample_count,
    validate_worker_count
)

from .logs import (
    FastLogLogger,
    PerformanceLogger,
    AccuracyLogger,
    get_logger,
    get_performance_logger,
    get_accuracy_logger,
    setup_logging,
    log_execution_time
)

__all__ = [
    # 常量
    'APPROXIMATION_DEGREES', 'MIN_DEGREE', 'MAX_DEGREE', 'DEFAULT_DEGREE',
    'VALIDATION_INTERVAL', 'DOCUMENTED_MAX_ERRORS',
    'THEORETICAL_MAX_ERRORS', 'BOUND_RELATIVE_TOLERANCE', 'BOUND_ULP_TOLERANCE',
    'LN2_DIGITS', 'LOG10_2_DIGITS', 'LN2', 'LOG10_2', 'SUPPORTED_DTYPES',
    'TORCH_SUPPORTED_DTYPES', 'DEFAULT_DTYPE', 'BASELINE_DTYPE', 'CALIBRATION_SAMPLES',
    'ACCURACY_CONFIG', 'PERFORMANCE_CONFIG', 'RESERVED_BASELINE_SLOTS', 'OUTPUT_DIRS',
    'FILE_EXTENSIONS', 'LOG_LEVELS', 'DEFAULT_LOG_LEVEL', 'LOG_FORMAT',
    'LOG_DATE_FORMAT', 'REPORT_PRECISION', 'VERSION_INFO',

    # 异常
    'FastLogBaseException', 'ConfigurationError', 'ValidationError',
    'ApproximationError', 'EvaluationError', 'PerformanceError', 'FileOperationError',
    'UnsupportedDataTypeError', 'InvalidDegreeError', 'InvalidSampleCountError',
    'InvalidWorkerCountError', 'WorkerFailureError', 'AccuracyThresholdExceededError',
    'BenchmarkError', 'ConfigParseError', 'handle_exception', 'validate_dtype',
    'validate_degree', 'validate_sample_count', 'validate_worker_count',

    # 日志
    'FastLogLogger', 'PerformanceLogger', 'AccuracyLogger', 'get_logger',
    'get_performance_logger', 'get_accuracy_logger', 'setup_logging',
    'log_execution_time'
]
