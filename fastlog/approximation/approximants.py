"""
快速 log2 近似函数族
六个基于有理多项式的 log2 近似，阶数 1~6，阶数越高误差越小、运算量越大

思路参考 Khattri 的 ln(1+x) 闭式近似: 对尾数 m ∈ [0.5, 1.0) 使用
P(m)/Q(m) 近似 log2(m)，结果为 exponent + P(m)/Q(m)。
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import numpy as np
import torch

from fastlog.base.constants import (
    MIN_DEGREE, MAX_DEGREE, DEFAULT_DEGREE, DOCUMENTED_MAX_ERRORS
)
from fastlog.base.exceptions import validate_degree
from fastlog.utils.data_type_manager import as_floating, materialize_constants
from .coefficients import get_coefficients
from .rational import decompose, exponent_like, evaluate_rational, Numeric


@dataclass(frozen=True)
class RationalLog2Approximant:
    """
    固定阶数的 log2 有理多项式近似

    特殊值处理（与标准库 log 约定一致，从不抛出异常）:
        +inf -> +inf；NaN、-inf -> NaN；0 -> -inf；负数 -> NaN

    实例不可变、无状态，可在任意线程中并发调用。
    """
    degree: int
    numerator: Tuple[str, ...]
    denominator: Tuple[str, ...]
    documented_error: float

    @property
    def name(self) -> str:
        return f"fast_log2_p{self.degree}"

    def __call__(self, value: Any) -> Numeric:
        value = as_floating(value)
        if isinstance(value, torch.Tensor):
            return self._evaluate_tensor(value)
        if isinstance(value, np.ndarray):
            return self._evaluate_array(value)
        return self._evaluate_scalar(value)

    def __repr__(self) -> str:
        return f"RationalLog2Approximant(degree={self.degree}, max_error~{self.documented_error:.2e})"

    def _constants(self, mantissa: Numeric) -> Tuple[tuple, tuple, Any]:
        """按尾数精度实例化 (分子系数, 分母系数, 1)"""
        dtype = mantissa.dtype if isinstance(mantissa, (np.ndarray, np.generic)) else None
        numerator = materialize_constants(self.numerator, dtype)
        denominator = materialize_constants(self.denominator, dtype)
        one = materialize_constants(('1',), dtype)[0]
        return numerator, denominator, one

    def _approximate(self, value: Numeric) -> Numeric:
        """对正的有限输入计算 exponent + P(m)/Q(m)"""
        mantissa, exponent = decompose(value)
        numerator, denominator, one = self._constants(mantissa)
        return exponent_like(exponent, mantissa) + evaluate_rational(mantissa, numerator, denominator, one)

    def _evaluate_scalar(self, value):
        if isinstance(value, np.generic):
            finite = bool(np.isfinite(value))
        else:
            finite = math.isfinite(value)
        kind = type(value)

        if not finite:
            return value if value == math.inf else kind(math.nan)
        elif value > 0:
            return self._approximate(value)
        else:
            return kind(-math.inf) if value == 0 else kind(math.nan)

    def _evaluate_array(self, values: np.ndarray) -> np.ndarray:
        positive = np.isfinite(values) & (values > 0)
        if positive.all():
            return self._approximate(values)

        result = np.full(values.shape, np.nan, dtype=values.dtype)
        result[values == np.inf] = np.inf
        result[values == 0] = -np.inf
        if positive.any():
            result[positive] = self._approximate(values[positive])
        return result

    def _evaluate_tensor(self, values: torch.Tensor) -> torch.Tensor:
        positive = torch.isfinite(values) & (values > 0)
        if bool(positive.all()):
            return self._approximate(values)

        result = torch.full_like(values, math.nan)
        result[values == math.inf] = math.inf
        result[values == 0] = -math.inf
        if bool(positive.any()):
            result[positive] = self._approximate(values[positive])
        return result


def _create_approximant(degree: int) -> RationalLog2Approximant:
    numerator, denominator = get_coefficients(degree)
    return RationalLog2Approximant(
        degree=degree,
        numerator=numerator,
        denominator=denominator,
        documented_error=DOCUMENTED_MAX_ERRORS[degree]
    )


# (a*x + b)/(c*x + d)，最大误差 ~1.46e-3（约 9 位精度）
fast_log2_p1 = _create_approximant(1)

# 2 阶，最大误差 ~3.46e-6（约 18 位精度）
fast_log2_p2 = _create_approximant(2)

# 3 阶，最大误差 ~7.79e-9（约 27 位精度）
fast_log2_p3 = _create_approximant(3)

# 4 阶，最大误差 ~1.77e-11（约 36 位精度）
fast_log2_p4 = _create_approximant(4)

# 5 阶，最大误差 ~1.92e-14（约 45 位精度）
fast_log2_p5 = _create_approximant(5)

# 6 阶，最大误差 ~5.90e-16（约 50 位精度）
fast_log2_p6 = _create_approximant(6)

APPROXIMANTS: Tuple[RationalLog2Approximant, ...] = (
    fast_log2_p1, fast_log2_p2, fast_log2_p3,
    fast_log2_p4, fast_log2_p5, fast_log2_p6
)

_APPROXIMANTS_BY_DEGREE: Dict[int, RationalLog2Approximant] = {
    approximant.degree: approximant for approximant in APPROXIMANTS
}


def get_approximant(degree: int) -> RationalLog2Approximant:
    """
    按阶数获取近似函数

    Raises:
        InvalidDegreeError: 阶数不在 1~6 之间
    """
    validate_degree(degree, MIN_DEGREE, MAX_DEGREE)
    return _APPROXIMANTS_BY_DEGREE[int(degree)]


def fast_log2(value: Any, degree: int = DEFAULT_DEGREE) -> Numeric:
    """指定阶数的快速 log2 便捷函数"""
    return get_approximant(degree)(value)
