"""
换底包装函数
ln(x) = ln(2) * log2(x)，log10(x) = log10(2) * log2(x)

log2func 可以是六个近似函数中的任意一个，也可以是任何签名为 T -> T 的纯函数。
"""

from typing import Any, Callable

from fastlog.base.constants import LN2_DIGITS, LOG10_2_DIGITS
from fastlog.utils.data_type_manager import constants_like
from .approximants import fast_log2_p6
from .rational import Numeric

Log2Function = Callable[[Any], Numeric]


def _rescale(digits: str, log2_value: Numeric) -> Numeric:
    factor, = constants_like((digits,), log2_value)
    return factor * log2_value


def fast_ln(value: Any, log2func: Log2Function = fast_log2_p6) -> Numeric:
    """快速自然对数"""
    return _rescale(LN2_DIGITS, log2func(value))


def fast_log10(value: Any, log2func: Log2Function = fast_log2_p6) -> Numeric:
    """快速常用对数"""
    return _rescale(LOG10_2_DIGITS, log2func(value))
