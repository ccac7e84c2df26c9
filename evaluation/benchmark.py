"""
性能基准测试模块
对可信 log2、各阶近似以及单精度系统 log2 在同一批输入上计时
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from config.config import PerformanceConfig
from fastlog.approximation import APPROXIMANTS
from fastlog.base.constants import BASELINE_DTYPE, SUPPORTED_DTYPES
from fastlog.base.exceptions import BenchmarkError, validate_dtype, validate_sample_count
from fastlog.base.logs import get_logger, get_performance_logger, log_execution_time
from fastlog.utils import get_data_type_manager, ensure_dtype

REFERENCE_VARIANT = 'log2'
BASELINE_VARIANT = 'log2f'


@dataclass
class PerformanceReport:
    """
    性能测试结果

    timings_us 按计时顺序保存: 可信 log2、fast_log2_p1 ... p6、单精度 log2。
    checksums 是每个变体结果之和，用来保证计算不会被跳过。
    """
    num_samples: int
    dtype: str
    timings_us: Dict[str, int] = field(default_factory=dict)
    checksums: Dict[str, float] = field(default_factory=dict)

    @property
    def variants(self) -> List[str]:
        return list(self.timings_us)

    def format_checksums(self) -> str:
        return ",".join(f"{value:.17g}" for value in self.checksums.values())

    def format_speed(self) -> str:
        """speed:t_ref,t_p1,...,t_p6,t_f32（微秒）"""
        return "speed:" + ",".join(str(elapsed) for elapsed in self.timings_us.values())

    def speedup(self, variant: str) -> float:
        """相对可信 log2 的加速比"""
        elapsed = self.timings_us.get(variant, 0)
        return self.timings_us.get(REFERENCE_VARIANT, 0) / elapsed if elapsed > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'num_samples': self.num_samples,
            'dtype': self.dtype,
            'timings_us': dict(self.timings_us),
            'checksums': {name: float(value) for name, value in self.checksums.items()},
            'speedups': {name: self.speedup(name) for name in self.timings_us}
        }


class PerformanceBenchmark:
    """性能基准测试器"""

    def __init__(self, config: Optional[PerformanceConfig] = None,
                 approximants: Optional[Sequence[Callable]] = None):
        self.config = config or PerformanceConfig()
        self.approximants = tuple(approximants) if approximants is not None else APPROXIMANTS
        self.logger = get_logger()
        self.performance_logger = get_performance_logger()
        self.dtype_manager = get_data_type_manager()

    def _create_test_data(self, num_samples: int, dtype: np.dtype) -> np.ndarray:
        """输入为 1, 2, ..., num_samples - 1"""
        return np.arange(1, num_samples, dtype=np.int64).astype(dtype)

    def _variants(self) -> Dict[str, Callable[[np.ndarray], np.ndarray]]:
        variants: Dict[str, Callable[[np.ndarray], np.ndarray]] = {REFERENCE_VARIANT: np.log2}
        for index, approximant in enumerate(self.approximants):
            variants[getattr(approximant, 'name', f"fast_log2_p{index + 1}")] = approximant
        return variants

    def _time_variant(self, name: str, function: Callable, values: np.ndarray) -> tuple:
        """返回 (耗时微秒, 结果之和)"""
        try:
            for _ in range(self.config.warmup_runs):
                function(values)

            start_time = time.perf_counter_ns()
            result = function(values)
            elapsed_us = (time.perf_counter_ns() - start_time) // 1000
        except Exception as e:
            raise BenchmarkError(name, str(e)) from e

        return elapsed_us, float(np.sum(result, dtype=np.float64))

    @log_execution_time("性能测试")
    def run(self, num_samples: Optional[int] = None) -> PerformanceReport:
        """
        运行一次性能测试

        Args:
            num_samples: 输入个数上界 N（输入为 1..N-1），默认取配置值

        Returns:
            性能测试结果
        """
        num_samples = self.config.num_samples if num_samples is None else num_samples
        validate_sample_count(num_samples)
        validate_dtype(self.config.dtype, SUPPORTED_DTYPES)
        num_samples = int(num_samples)

        dtype = self.dtype_manager.numpy_dtype(self.config.dtype)
        values = self._create_test_data(num_samples, dtype)
        values_f32 = ensure_dtype(values, BASELINE_DTYPE)

        self.logger.info(f"开始性能测试: 样本数 {num_samples}, 数据类型 {self.config.dtype}")
        report = PerformanceReport(num_samples=num_samples, dtype=self.dtype_manager.dtype_name(values))

        for name, function in self._variants().items():
            elapsed_us, checksum = self._time_variant(name, function, values)
            report.timings_us[name] = elapsed_us
            report.checksums[name] = checksum
            self.performance_logger.log_variant_timing(name, len(values), elapsed_us)

        elapsed_us, checksum = self._time_variant(BASELINE_VARIANT, np.log2, values_f32)
        report.timings_us[BASELINE_VARIANT] = elapsed_us
        report.checksums[BASELINE_VARIANT] = checksum
        self.performance_logger.log_variant_timing(BASELINE_VARIANT, len(values_f32), elapsed_us)

        self.performance_logger.log_benchmark('fastlog', report.to_dict())
        self.logger.info(report.format_speed())
        return report


# 全局基准测试器
_performance_benchmark: Optional[PerformanceBenchmark] = None


def get_performance_benchmark() -> PerformanceBenchmark:
    """获取全局性能基准测试器"""
    global _performance_benchmark
    if _performance_benchmark is None:
        _performance_benchmark = PerformanceBenchmark()
    return _performance_benchmark


def validate_performance(num_samples: int, dtype: Optional[str] = None) -> PerformanceReport:
    """性能测试便捷函数"""
    if dtype is None:
        return get_performance_benchmark().run(num_samples)
    return PerformanceBenchmark(PerformanceConfig(num_samples=num_samples, dtype=dtype)).run()
