"""
并行处理模块
把采样索引区间划分为互不相交的连续分区，并在短生命周期线程池中逐分区执行
"""

from concurrent.futures import ThreadPoolExecutor, Future, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional

from fastlog.base.constants import ACCURACY_CONFIG
from fastlog.base.exceptions import EvaluationError, WorkerFailureError
from fastlog.base.logs import get_logger


@dataclass(frozen=True)
class SamplePartition:
    """采样索引的半开区间 [start, end)"""
    start: int
    end: int

    def __len__(self) -> int:
        return max(self.end - self.start, 0)

    def as_tuple(self) -> tuple:
        return (self.start, self.end)

    def chunks(self, chunk_size: int) -> Iterator['SamplePartition']:
        """按 chunk_size 切分为连续的子区间"""
        for chunk_start in range(self.start, self.end, chunk_size):
            yield SamplePartition(chunk_start, min(chunk_start + chunk_size, self.end))


def partition_range(num_samples: int, num_workers: int) -> List[SamplePartition]:
    """
    将闭区间 [0, num_samples] 划分为 num_workers 个连续、不相交的分区

    前 num_workers - 1 个分区各含 num_samples // num_workers 个索引，
    最后一个分区吸收余数以及上界 num_samples 本身（结束于 num_samples + 1）。
    调用方负责保证 num_samples > 0 且 num_workers >= 1。
    """
    per_worker = num_samples // num_workers
    partitions = []
    for index in range(num_workers):
        start = index * per_worker
        end = num_samples + 1 if index == num_workers - 1 else start + per_worker
        partitions.append(SamplePartition(start, end))
    return partitions


@dataclass
class ParallelConfig:
    """并行处理配置"""
    max_workers: int = ACCURACY_CONFIG['num_threads']
    thread_name_prefix: str = 'fastlog-worker'


class ParallelProcessor:
    """
    并行处理器

    每次使用都创建新的线程池，退出上下文时（包括异常路径）等待所有线程结束。
    """

    def __init__(self, config: Optional[ParallelConfig] = None):
        self.config = config or ParallelConfig()
        self.logger = get_logger()
        self._thread_pool: Optional[ThreadPoolExecutor] = None

    def __enter__(self):
        """上下文管理器入口"""
        self._initialize_pool()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """上下文管理器出口"""
        self._cleanup_pool()

    def _initialize_pool(self):
        """初始化线程池"""
        self._thread_pool = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=self.config.thread_name_prefix
        )

    def _cleanup_pool(self):
        """清理线程池（阻塞直到所有工作线程结束）"""
        if self._thread_pool:
            self._thread_pool.shutdown(wait=True)
            self._thread_pool = None

    def run_partitions(self, func: Callable[..., Any],
                       partitions: List[SamplePartition], **kwargs) -> List[Any]:
        """
        每个分区提交一个任务，返回与 partitions 顺序一致的结果列表

        每个任务的结果通过 Future 恰好交付一次；任何一个任务失败都会使整次运行失败。

        Raises:
            EvaluationError: 处理器未初始化
            WorkerFailureError: 任一分区的任务抛出异常
        """
        if self._thread_pool is None:
            raise EvaluationError("并行处理器未初始化")

        future_to_index: Dict[Future, int] = {
            self._thread_pool.submit(func, partition, **kwargs): index
            for index, partition in enumerate(partitions)
        }

        results: List[Any] = [None] * len(partitions)
        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                results[index] = future.result()
            except Exception as e:
                partition = partitions[index]
                self.logger.error(f"分区 [{partition.start}, {partition.end}) 处理失败: {e}")
                raise WorkerFailureError(partition.as_tuple(), str(e)) from e

        return results
