"""
近似模块
提供有理多项式 log2 近似函数族和换底包装函数
"""

from .coefficients import (
    NUMERATOR_COEFFICIENTS,
    DENOMINATOR_COEFFICIENTS,
    get_coefficients
)

from .rational import (
    decompose,
    exponent_like,
    power_ladder,
    evaluate_polynomial,
    evaluate_rational
)

from .approximants import (
    RationalLog2Approximant,
    fast_log2_p1,
    fast_log2_p2,
    fast_log2_p3,
    fast_log2_p4,
    fast_log2_p5,
    fast_log2_p6,
    APPROXIMANTS,
    get_approximant,
    fast_log2
)

from .rescaling import (
    fast_ln,
    fast_log10
)

__all__ = [
    # 系数
    'NUMERATOR_COEFFICIENTS', 'DENOMINATOR_COEFFICIENTS', 'get_coefficients',

    # 分解与求值
    'decompose', 'exponent_like', 'power_ladder', 'evaluate_polynomial', 'evaluate_rational',

    # 近似函数
    'RationalLog2Approximant', 'fast_log2_p1', 'fast_log2_p2', 'fast_log2_p3',
    'fast_log2_p4', 'fast_log2_p5', 'fast_log2_p6', 'APPROXIMANTS',
    'get_approximant', 'fast_log2',

    # 换底
    'fast_ln', 'fast_log10'
]
