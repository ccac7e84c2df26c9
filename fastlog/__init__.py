"""
fastlog 核心模块
基于有理多项式的快速 log2 近似
"""

# 从基础模块导入
from .base import *
from .approximation import (
    RationalLog2Approximant,
    fast_log2_p1,
    fast_log2_p2,
    fast_log2_p3,
    fast_log2_p4,
    fast_log2_p5,
    fast_log2_p6,
    APPROXIMANTS,
    get_approximant,
    fast_log2,
    fast_ln,
    fast_log10
)

__version__ = VERSION_INFO['version']
__author__ = VERSION_INFO['author']
__description__ = VERSION_INFO['description']

# 模块导出
__all__ = [
    # 版本信息
    '__version__', '__author__', '__description__',

    # 近似函数
    'RationalLog2Approximant', 'fast_log2_p1', 'fast_log2_p2', 'fast_log2_p3',
    'fast_log2_p4', 'fast_log2_p5', 'fast_log2_p6', 'APPROXIMANTS',
    'get_approximant', 'fast_log2', 'fast_ln', 'fast_log10'
]
