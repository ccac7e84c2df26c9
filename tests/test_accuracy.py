"""
精度验证测试模块
提供多线程精度验证流程测试
"""

import threading

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import AccuracyConfig
from evaluation import (
    AccuracyReport, AccuracyValidator, MaxErrorRecord, generate_samples,
    reduce_max_errors, validate_worker, validate_accuracy, error_threshold
)
from fastlog.approximation import APPROXIMANTS, fast_log2_p1
from fastlog.base.constants import DOCUMENTED_MAX_ERRORS, RESERVED_BASELINE_SLOTS
from fastlog.base.exceptions import (
    AccuracyThresholdExceededError, InvalidSampleCountError,
    InvalidWorkerCountError, UnsupportedDataTypeError, WorkerFailureError
)
from fastlog.optimization import SamplePartition


class TestMaxErrorRecord:
    """最大误差记录测试类"""

    def test_observe_and_merge(self):
        """更新与归约取逐元素最大值"""
        first = MaxErrorRecord.zeros(3)
        first.observe(0, np.array([0.1, 0.3]))
        first.observe(2, np.array([]))

        second = MaxErrorRecord.zeros(3)
        second.observe(0, np.array([0.2]))
        second.observe(1, np.array([0.5]))

        merged = reduce_max_errors([first, second], 3)
        assert merged.max_errors.tolist() == [0.3, 0.5, 0.0]
        assert reduce_max_errors([second, first], 3).max_errors.tolist() == [0.3, 0.5, 0.0]

    def test_empty_reduction(self):
        """没有记录时全部为 0"""
        assert reduce_max_errors([], 7).max_errors.tolist() == [0.0] * 7


class TestSampleGeneration:
    """采样点生成测试类"""

    def test_samples_cover_interval(self):
        """x = 1 + i/N，i = 0..N"""
        dtype = np.dtype(np.float64)
        samples = generate_samples(SamplePartition(0, 9), dtype.type(1) / dtype.type(8), dtype)
        assert samples.dtype == np.float64
        assert samples.tolist() == [1.0 + i / 8 for i in range(9)]
        assert samples[-1] == 2.0

    def test_worker_on_empty_partition(self):
        """空分区返回全 0 记录"""
        record = validate_worker(SamplePartition(4, 4), num_samples=8, approximants=APPROXIMANTS,
                                 dtype=np.dtype(np.float64), chunk_size=16)
        assert record.max_errors.tolist() == [0.0] * (len(APPROXIMANTS) + RESERVED_BASELINE_SLOTS)


class TestAccuracyValidator:
    """精度验证器测试类"""

    def setup_method(self):
        """测试前准备"""
        self.num_samples = 1 << 16

    def test_report_shape(self):
        """误差向量为 6 阶 + 1 个预留槽位"""
        report = validate_accuracy(self.num_samples, 2)

        assert report.degrees == [1, 2, 3, 4, 5, 6]
        assert len(report.max_errors) == 7
        assert report.baseline_error == 0.0
        assert report.partitions[-1][1] == self.num_samples + 1

    def test_thread_count_does_not_change_result(self):
        """W=7 与 W=1 的结果完全一致"""
        single = validate_accuracy(self.num_samples, 1)
        multiple = validate_accuracy(self.num_samples, 7)
        assert single.max_errors == multiple.max_errors

    def test_chunk_size_does_not_change_result(self):
        """分块大小不影响结果"""
        coarse = AccuracyValidator(AccuracyConfig(chunk_size=1 << 20)).validate_accuracy(self.num_samples, 3)
        fine = AccuracyValidator(AccuracyConfig(chunk_size=1000)).validate_accuracy(self.num_samples, 3)
        assert coarse.max_errors == fine.max_errors

    def test_more_threads_than_samples(self):
        """线程数多于采样数时前面的分区为空"""
        report = validate_accuracy(3, 7)
        assert report.partitions[-1] == (0, 4)
        assert report.error_for(1) > 0.0

    def test_float32_baseline(self):
        """启用单精度基准时填充预留槽位"""
        config = AccuracyConfig(include_float32_baseline=True)
        report = AccuracyValidator(config).validate_accuracy(self.num_samples, 2)
        assert report.baseline_included
        assert 0.0 < report.baseline_error < 1e-6

    def test_longdouble_validation(self):
        """longdouble 精度下同样满足误差界"""
        report = validate_accuracy(self.num_samples, 2, dtype='longdouble')
        assert report.dtype == 'longdouble'
        report.check_bounds()

    def test_float32_validation(self):
        """float32 精度下各阶误差同样在误差界之内"""
        report = validate_accuracy(self.num_samples, 2, dtype='float32')
        assert report.dtype == 'float32'
        report.check_bounds()
        assert all(report.bound_status().values())

    def test_worker_failure(self):
        """工作线程失败时抛出异常，不返回部分结果，且线程全部结束"""
        def broken(values):
            raise RuntimeError("approximant failed")

        validator = AccuracyValidator(approximants=[fast_log2_p1, broken])
        with pytest.raises(WorkerFailureError):
            validator.validate_accuracy(1000, 4)

        alive = [t for t in threading.enumerate() if t.name.startswith('fastlog-validate')]
        assert alive == []

    @pytest.mark.parametrize('num_samples', [0, -5, 2.5, True, '100'])
    def test_invalid_sample_count(self, num_samples):
        """非法采样数在启动线程前被拒绝"""
        with pytest.raises(InvalidSampleCountError):
            AccuracyValidator().validate_accuracy(num_samples, 2)

    @pytest.mark.parametrize('num_threads', [0, -1, 1.5, False])
    def test_invalid_worker_count(self, num_threads):
        """非法线程数在启动线程前被拒绝"""
        with pytest.raises(InvalidWorkerCountError):
            AccuracyValidator().validate_accuracy(100, num_threads)

    def test_unsupported_dtype(self):
        """不支持的数据类型"""
        with pytest.raises(UnsupportedDataTypeError):
            AccuracyValidator(AccuracyConfig(dtype='float16')).validate_accuracy(100, 1)


class TestAccuracyReport:
    """精度报告测试类"""

    def setup_method(self):
        """测试前准备"""
        self.report = AccuracyReport(
            num_samples=8, num_threads=1, dtype='float64',
            degrees=[1, 2, 3, 4, 5, 6],
            max_errors=[1e-3, 3e-6, 7e-9, 1.5e-11, 1.8e-14, 4.4e-16, 0.0]
        )

    def test_format_max_errors(self):
        """诊断输出格式"""
        line = self.report.format_max_errors()
        assert line.startswith("Max errors: ")
        values = line[len("Max errors: "):].split(",")
        assert len(values) == 7
        assert [float(v) for v in values] == self.report.max_errors

    def test_check_bounds(self):
        """超出误差界时抛出异常"""
        self.report.check_bounds()
        assert all(self.report.bound_status().values())

        self.report.max_errors[2] = 1e-6
        assert self.report.bound_status()[3] is False
        with pytest.raises(AccuracyThresholdExceededError) as exc_info:
            self.report.check_bounds()
        assert exc_info.value.details['degree'] == 3

    def test_error_threshold(self):
        """容差只放宽很小的量"""
        bound = DOCUMENTED_MAX_ERRORS[1]
        assert bound < error_threshold(bound) < bound * 1.02

    def test_error_threshold_follows_dtype(self):
        """阈值中的舍入容差随采样精度变化，longdouble 不低于 float64"""
        bound = DOCUMENTED_MAX_ERRORS[6]
        eps32 = float(np.finfo(np.float32).eps)
        assert error_threshold(bound, 'float32') > error_threshold(bound, 'float64')
        assert error_threshold(bound, 'float32') >= bound + 4 * eps32
        assert error_threshold(bound, 'longdouble') == error_threshold(bound, 'float64')

    def test_float32_report_threshold(self):
        """float32 报告在 float32 量级的误差下仍然通过"""
        report = AccuracyReport(
            num_samples=1 << 16, num_threads=2, dtype='float32',
            degrees=[2, 6], max_errors=[3.6e-6, 3.1e-7, 0.0]
        )
        assert report.threshold_for(6) == error_threshold(DOCUMENTED_MAX_ERRORS[6], 'float32')
        report.check_bounds()

        # 同样的误差在 float64 报告中超出误差界
        report.dtype = 'float64'
        assert report.bound_status()[6] is False

    def test_to_dict(self):
        """序列化"""
        data = self.report.to_dict()
        assert data['num_samples'] == 8
        assert data['max_errors'] == self.report.max_errors
        assert data['bound_status']['6'] is True
