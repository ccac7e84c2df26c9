"""
并行处理测试模块
提供采样分区与线程池测试
"""

import threading

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastlog.base.exceptions import EvaluationError, WorkerFailureError
from fastlog.optimization import ParallelConfig, ParallelProcessor, SamplePartition, partition_range


class TestPartitioning:
    """分区测试类"""

    def _covered(self, partitions):
        indices = []
        for partition in partitions:
            indices.extend(range(partition.start, partition.end))
        return indices

    def test_partition_completeness(self):
        """N=1000, W=7: 恰好覆盖 0..1000 各一次"""
        partitions = partition_range(1000, 7)

        assert len(partitions) == 7
        assert self._covered(partitions) == list(range(1001))
        assert [len(p) for p in partitions[:-1]] == [142] * 6
        assert partitions[-1].as_tuple() == (852, 1001)

    def test_single_worker_includes_upper_bound(self):
        """W=1 时唯一分区也包含 N"""
        assert partition_range(10, 1) == [SamplePartition(0, 11)]

    @pytest.mark.parametrize('num_samples,num_workers', [(1, 1), (3, 7), (64, 8), (1001, 10)])
    def test_contiguous_and_disjoint(self, num_samples, num_workers):
        """相邻分区首尾相接，且整体覆盖 [0, N]"""
        partitions = partition_range(num_samples, num_workers)

        assert partitions[0].start == 0
        assert partitions[-1].end == num_samples + 1
        for left, right in zip(partitions, partitions[1:]):
            assert left.end == right.start
        assert self._covered(partitions) == list(range(num_samples + 1))

    def test_chunks(self):
        """分块覆盖整个分区"""
        chunks = list(SamplePartition(5, 17).chunks(4))
        assert [c.as_tuple() for c in chunks] == [(5, 9), (9, 13), (13, 17)]
        assert list(SamplePartition(3, 3).chunks(4)) == []


class TestParallelProcessor:
    """并行处理器测试类"""

    def setup_method(self):
        """测试前准备"""
        self.config = ParallelConfig(max_workers=4, thread_name_prefix='fastlog-test')

    def _alive_workers(self):
        return [t for t in threading.enumerate() if t.name.startswith(self.config.thread_name_prefix)]

    def test_results_follow_partition_order(self):
        """结果顺序与分区顺序一致"""
        partitions = partition_range(100, 4)
        with ParallelProcessor(self.config) as processor:
            results = processor.run_partitions(lambda p, offset: p.start + offset, partitions, offset=1)

        assert results == [p.start + 1 for p in partitions]
        assert self._alive_workers() == []

    def test_worker_failure(self):
        """任一分区失败时整次运行失败，且所有线程都已结束"""
        def work(partition):
            if partition.start == 0:
                raise ValueError("boom")
            return len(partition)

        with pytest.raises(WorkerFailureError) as exc_info:
            with ParallelProcessor(self.config) as processor:
                processor.run_partitions(work, partition_range(100, 4))

        assert exc_info.value.details['partition'] == (0, 25)
        assert isinstance(exc_info.value.__cause__, ValueError)
        assert self._alive_workers() == []

    def test_uninitialized_processor(self):
        """未进入上下文时不能提交任务"""
        with pytest.raises(EvaluationError):
            ParallelProcessor(self.config).run_partitions(len, partition_range(10, 2))
