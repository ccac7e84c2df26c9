"""
优化模块
提供采样分区和线程池并行处理功能
"""

from .parallel_processor import (
    SamplePartition,
    partition_range,
    ParallelConfig,
    ParallelProcessor
)

__all__ = [
    # 并行处理
    'SamplePartition', 'partition_range', 'ParallelConfig', 'ParallelProcessor'
]
