"""
尾数/指数分解与有理多项式求值

对任意正的有限浮点数 value，frexp 给出精确分解 value = m * 2^e，其中
m ∈ [0.5, 1.0)、e 为整数。近似函数只需在尾数区间上拟合 log2，
再加上精确的指数部分即可覆盖整个浮点范围。
"""

import math
from typing import List, Sequence, Tuple, Union

import numpy as np
import torch

Numeric = Union[float, np.generic, np.ndarray, torch.Tensor]


def decompose(value: Numeric) -> Tuple[Numeric, Numeric]:
    """
    尾数/指数分解

    Args:
        value: 正的有限浮点数（标量、numpy 数组或 torch 张量）

    Returns:
        (mantissa, exponent)，mantissa ∈ [0.5, 1.0)，exponent 为整数类型
    """
    if isinstance(value, torch.Tensor):
        return torch.frexp(value)
    if isinstance(value, (np.ndarray, np.generic)):
        return np.frexp(value)
    return math.frexp(value)


def exponent_like(exponent: Numeric, mantissa: Numeric) -> Numeric:
    """把整数指数转换为尾数的浮点类型（整数转换是精确的）"""
    if isinstance(mantissa, torch.Tensor):
        return exponent.to(mantissa.dtype)
    if isinstance(mantissa, np.ndarray):
        return exponent.astype(mantissa.dtype)
    if isinstance(mantissa, np.generic):
        return mantissa.dtype.type(exponent)
    return exponent


def power_ladder(mantissa: Numeric, degree: int) -> List[Numeric]:
    """
    计算 [None, m, m^2, ..., m^degree]

    m^k = m^(k//2) * m^(k - k//2)，即 m3 = m*m2、m4 = m2*m2、m5 = m2*m3、m6 = m3*m3，
    与系数拟合时使用的求值方式一致。下标 0 对应常数项，不参与乘法。
    """
    powers: List[Numeric] = [None, mantissa]
    for k in range(2, degree + 1):
        powers.append(powers[k // 2] * powers[k - k // 2])
    return powers


def evaluate_polynomial(coefficients: Sequence[Numeric], powers: Sequence[Numeric]) -> Numeric:
    """
    按从最高次幂到常数项的顺序求和: c0*m^d + c1*m^(d-1) + ... + cd
    """
    degree = len(coefficients) - 1
    total = coefficients[0] * powers[degree]
    for index in range(1, degree):
        total = total + coefficients[index] * powers[degree - index]
    return total + coefficients[degree]


def evaluate_rational(mantissa: Numeric, numerator: Sequence[Numeric],
                      denominator: Sequence[Numeric], one: Numeric) -> Numeric:
    """
    求值 R(m) = P(m) / Q(m)

    先求分母的倒数再乘以分子。

    Args:
        mantissa: 尾数 m
        numerator: 分子系数（最高次在前）
        denominator: 分母系数（最高次在前）
        one: 与尾数同精度的 1

    Returns:
        R(m)
    """
    degree = max(len(numerator), len(denominator)) - 1
    powers = power_ladder(mantissa, degree)
    reciprocal = one / evaluate_polynomial(denominator, powers)
    return reciprocal * evaluate_polynomial(numerator, powers)
