"""
评估模块
提供多线程精度验证和性能基准测试功能
"""

from .accuracy import (
    MaxErrorRecord,
    AccuracyReport,
    AccuracyValidator,
    generate_samples,
    validate_worker,
    reduce_max_errors,
    error_threshold,
    get_accuracy_validator,
    validate_accuracy
)

from .benchmark import (
    PerformanceReport,
    PerformanceBenchmark,
    get_performance_benchmark,
    validate_performance
)

__all__ = [
    # 精度验证
    'MaxErrorRecord', 'AccuracyReport', 'AccuracyValidator',
    'generate_samples', 'validate_worker', 'reduce_max_errors', 'error_threshold',
    'get_accuracy_validator', 'validate_accuracy',

    # 性能基准测试
    'PerformanceReport', 'PerformanceBenchmark',
    'get_performance_benchmark', 'validate_performance'
]
