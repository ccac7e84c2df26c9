"""
精度验证模块
在 [1.0, 2.0] 上对尾数区间做稠密均匀采样，多线程测量各阶近似相对可信 log2 的最大绝对误差
"""

import time
from dataclasses import dataclass, field
from functools import reduce
from typing import Any, Callable, Dict, List, Optional, Sequence

import numpy as np

from config.config import AccuracyConfig
from fastlog.approximation import APPROXIMANTS
from fastlog.base.constants import (
    DOCUMENTED_MAX_ERRORS, THEORETICAL_MAX_ERRORS, BOUND_RELATIVE_TOLERANCE, BOUND_ULP_TOLERANCE,
    RESERVED_BASELINE_SLOTS, BASELINE_DTYPE, REPORT_PRECISION, SUPPORTED_DTYPES, DEFAULT_DTYPE,
    VALIDATION_INTERVAL, CALIBRATION_SAMPLES
)
from fastlog.base.exceptions import (
    AccuracyThresholdExceededError, validate_dtype, validate_sample_count, validate_worker_count
)
from fastlog.base.logs import get_logger, get_accuracy_logger, log_execution_time
from fastlog.optimization import ParallelConfig, ParallelProcessor, SamplePartition, partition_range
from fastlog.utils import get_data_type_manager, ensure_dtype


@dataclass
class MaxErrorRecord:
    """
    单个工作线程在其分区内观察到的各槽位最大绝对误差

    槽位依次对应各阶近似，最后预留一个单精度基准槽位。
    只由所属工作线程写入，完成后整体交给汇总方一次。
    """
    max_errors: np.ndarray

    @classmethod
    def zeros(cls, num_slots: int) -> 'MaxErrorRecord':
        return cls(np.zeros(num_slots, dtype=np.float64))

    def observe(self, slot: int, errors: np.ndarray) -> None:
        """用一批误差更新某个槽位的最大值"""
        if errors.size:
            self.max_errors[slot] = max(self.max_errors[slot], float(np.max(errors)))

    def merge(self, other: 'MaxErrorRecord') -> 'MaxErrorRecord':
        """逐元素取最大值"""
        return MaxErrorRecord(np.maximum(self.max_errors, other.max_errors))


def reduce_max_errors(records: Sequence[MaxErrorRecord], num_slots: int) -> MaxErrorRecord:
    """把各工作线程的记录归约为全局最大误差（与顺序无关）"""
    return reduce(MaxErrorRecord.merge, records, MaxErrorRecord.zeros(num_slots))


def generate_samples(partition: SamplePartition, step: np.generic, dtype: np.dtype) -> np.ndarray:
    """x = 1 + i * step，i 取遍分区内的索引，全部在 dtype 精度下计算"""
    indices = np.arange(partition.start, partition.end, dtype=np.int64).astype(dtype)
    return dtype.type(VALIDATION_INTERVAL[0]) + indices * step


def validate_worker(partition: SamplePartition, num_samples: int,
                    approximants: Sequence[Callable[[np.ndarray], np.ndarray]],
                    dtype: np.dtype, chunk_size: int,
                    include_baseline: bool = False) -> MaxErrorRecord:
    """
    工作线程: 扫描分区内所有索引，记录每个近似函数的最大绝对误差

    只对尾数所在的 [1, 2] 区间采样，指数部分由分解精确得到。

    Args:
        partition: 本线程负责的索引区间
        num_samples: 总采样数 N（步长为 1/N）
        approximants: 近似函数序列，每个函数接收并返回 dtype 数组
        dtype: 采样与计算使用的数据类型
        chunk_size: 单次向量化处理的索引数
        include_baseline: 是否测量 float32 系统 log2 作为基准

    Returns:
        本分区的最大误差记录
    """
    record = MaxErrorRecord.zeros(len(approximants) + RESERVED_BASELINE_SLOTS)
    lower, upper = (dtype.type(bound) for bound in VALIDATION_INTERVAL)
    step = (upper - lower) / dtype.type(num_samples)

    for chunk in partition.chunks(chunk_size):
        x = generate_samples(chunk, step, dtype)
        precise = np.log2(x)

        for slot, approximant in enumerate(approximants):
            diff = np.abs(precise - approximant(x)).astype(np.float64)
            record.observe(slot, diff)

        if include_baseline:
            baseline = np.log2(ensure_dtype(x, BASELINE_DTYPE)).astype(dtype)
            record.observe(len(approximants), np.abs(precise - baseline).astype(np.float64))

    return record


def error_threshold(documented_error: float, dtype: str = DEFAULT_DTYPE) -> float:
    """
    误差界加上舍入容差

    误差界是在 float64 下标定的；在更低精度下采样点和参考值本身的舍入
    约为 eps 量级（结果位于 [0, 1]），因此绝对容差按 dtype 与 float64 中较大的 eps 计算。
    """
    eps = max(get_data_type_manager().get_dtype_info(dtype)['eps'], float(np.finfo(np.float64).eps))
    return documented_error * (1.0 + BOUND_RELATIVE_TOLERANCE) + BOUND_ULP_TOLERANCE * eps


@dataclass
class AccuracyReport:
    """精度验证结果"""
    num_samples: int
    num_threads: int
    dtype: str
    degrees: List[int]
    max_errors: List[float]
    partitions: List[tuple] = field(default_factory=list)
    elapsed: float = 0.0
    baseline_included: bool = False

    @property
    def baseline_error(self) -> float:
        """预留槽位（单精度系统 log2 基准），未启用时为 0"""
        return self.max_errors[len(self.degrees)]

    def error_for(self, degree: int) -> float:
        return self.max_errors[self.degrees.index(degree)]

    def threshold_for(self, degree: int) -> float:
        """按本次采样的数据类型计算某阶的误差阈值"""
        return error_threshold(DOCUMENTED_MAX_ERRORS[degree], self.dtype)

    def bound_status(self) -> Dict[int, bool]:
        """各阶误差是否在记录的误差界之内"""
        return {
            degree: self.error_for(degree) <= self.threshold_for(degree)
            for degree in self.degrees if degree in DOCUMENTED_MAX_ERRORS
        }

    def check_bounds(self) -> None:
        """
        Raises:
            AccuracyThresholdExceededError: 任一阶误差超出误差界
        """
        for degree, passed in self.bound_status().items():
            if not passed:
                raise AccuracyThresholdExceededError(degree, self.error_for(degree), self.threshold_for(degree))

    def format_max_errors(self) -> str:
        """诊断输出: Max errors: e1,e2,...（高精度，逗号分隔）"""
        values = ",".join(f"{error:.{REPORT_PRECISION}g}" for error in self.max_errors)
        return f"Max errors: {values}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'num_samples': self.num_samples,
            'num_threads': self.num_threads,
            'dtype': self.dtype,
            'degrees': list(self.degrees),
            'max_errors': [float(e) for e in self.max_errors],
            'partitions': [list(p) for p in self.partitions],
            'elapsed': self.elapsed,
            'baseline_included': self.baseline_included,
            'bound_status': {str(k): v for k, v in self.bound_status().items()}
        }


class AccuracyValidator:
    """精度验证器"""

    def __init__(self, config: Optional[AccuracyConfig] = None,
                 approximants: Optional[Sequence[Callable]] = None):
        self.config = config or AccuracyConfig()
        self.approximants = tuple(approximants) if approximants is not None else APPROXIMANTS
        self.logger = get_logger()
        self.accuracy_logger = get_accuracy_logger()
        self.dtype_manager = get_data_type_manager()

    def _degrees(self) -> List[int]:
        return [getattr(approximant, 'degree', index + 1) for index, approximant in enumerate(self.approximants)]

    @log_execution_time("精度验证")
    def validate_accuracy(self, num_samples: Optional[int] = None,
                          num_threads: Optional[int] = None) -> AccuracyReport:
        """
        运行一次完整的精度验证

        Args:
            num_samples: 总采样数 N，默认取配置值
            num_threads: 工作线程数 W，默认取配置值

        Returns:
            精度验证结果

        Raises:
            InvalidSampleCountError: N 不是正整数
            InvalidWorkerCountError: W 不是正整数
            WorkerFailureError: 任一工作线程失败（不返回部分结果）
        """
        num_samples = self.config.num_samples if num_samples is None else num_samples
        num_threads = self.config.num_threads if num_threads is None else num_threads

        # 非法参数在启动任何线程之前拒绝
        validate_sample_count(num_samples)
        validate_worker_count(num_threads)
        validate_dtype(self.config.dtype, SUPPORTED_DTYPES)
        num_samples, num_threads = int(num_samples), int(num_threads)
        dtype = self.dtype_manager.numpy_dtype(self.config.dtype)
        if self.config.dtype == 'longdouble' and not self.dtype_manager.is_extended_precision_supported():
            self.logger.warning("当前平台的 longdouble 与 float64 精度相同")

        partitions = partition_range(num_samples, num_threads)
        num_slots = len(self.approximants) + RESERVED_BASELINE_SLOTS

        self.logger.info(f"开始精度验证: 样本数 {num_samples}, 线程数 {num_threads}, 数据类型 {self.config.dtype}")
        start_time = time.perf_counter()

        parallel_config = ParallelConfig(max_workers=num_threads, thread_name_prefix='fastlog-validate')
        with ParallelProcessor(parallel_config) as processor:
            records = processor.run_partitions(
                validate_worker, partitions,
                num_samples=num_samples,
                approximants=self.approximants,
                dtype=dtype,
                chunk_size=self.config.chunk_size,
                include_baseline=self.config.include_float32_baseline
            )

        global_record = reduce_max_errors(records, num_slots)
        elapsed = time.perf_counter() - start_time

        report = AccuracyReport(
            num_samples=num_samples,
            num_threads=num_threads,
            dtype=self.config.dtype,
            degrees=self._degrees(),
            max_errors=[float(e) for e in global_record.max_errors],
            partitions=[p.as_tuple() for p in partitions],
            elapsed=elapsed,
            baseline_included=self.config.include_float32_baseline
        )

        self._log_report(report)
        return report

    def _log_report(self, report: AccuracyReport) -> None:
        """记录验证结果"""
        for degree, passed in report.bound_status().items():
            self.accuracy_logger.log_accuracy_test(
                f"fast_log2_p{degree}", report.error_for(degree),
                report.threshold_for(degree), passed,
                theoretical=THEORETICAL_MAX_ERRORS.get(degree)
            )
        if report.num_samples < CALIBRATION_SAMPLES:
            self.logger.debug(f"采样点数 {report.num_samples} 少于误差界标定时的 {CALIBRATION_SAMPLES}，"
                              f"实测最大误差可能低于误差界")
        self.accuracy_logger.log_validation_run(
            report.num_samples, report.num_threads, report.max_errors, report.elapsed
        )
        self.logger.info(report.format_max_errors())


# 全局验证器
_accuracy_validator: Optional[AccuracyValidator] = None


def get_accuracy_validator() -> AccuracyValidator:
    """获取全局精度验证器"""
    global _accuracy_validator
    if _accuracy_validator is None:
        _accuracy_validator = AccuracyValidator()
    return _accuracy_validator


def validate_accuracy(num_samples: int, num_threads: int = 1, dtype: Optional[str] = None) -> AccuracyReport:
    """精度验证便捷函数"""
    if dtype is None:
        return get_accuracy_validator().validate_accuracy(num_samples, num_threads)
    validator = AccuracyValidator(AccuracyConfig(num_samples=num_samples, num_threads=num_threads, dtype=dtype))
    return validator.validate_accuracy()
