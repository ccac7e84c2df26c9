"""
数据类型管理器
统一管理 float32 / float64 / longdouble 数据类型，保证近似计算在输入自身的精度下进行
"""

import numbers
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np
import torch

from fastlog.base.constants import SUPPORTED_DTYPES, TORCH_SUPPORTED_DTYPES, DEFAULT_DTYPE
from fastlog.base.exceptions import UnsupportedDataTypeError, validate_dtype
from fastlog.base.logs import get_logger


class DataType(Enum):
    """支持的数据类型枚举"""
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    LONGDOUBLE = "longdouble"


# 数据映射(将str映射到dtype)
NUMPY_DTYPE_MAP = {
    'float32': np.dtype(np.float32),
    'float64': np.dtype(np.float64),
    'longdouble': np.dtype(np.longdouble),
}

TORCH_DTYPE_MAP = {
    'float32': torch.float32,
    'float64': torch.float64,
}

ArrayLike = Union[float, np.generic, np.ndarray, torch.Tensor]


@lru_cache(maxsize=None)
def materialize_constants(digits: Tuple[str, ...], dtype: Optional[np.dtype]) -> tuple:
    """
    把十进制字符串常量实例化为指定精度的标量

    Args:
        digits: 十进制字符串序列
        dtype: numpy 数据类型；None 表示 Python float（同时用于 torch 张量）

    Returns:
        与 digits 一一对应的标量元组
    """
    if dtype is None:
        return tuple(float(d) for d in digits)
    scalar_type = dtype.type
    return tuple(scalar_type(d) for d in digits)


class DataTypeManager:
    """数据类型管理器"""

    def __init__(self):
        self.logger = get_logger()
        self._extended_supported = self._check_extended_precision()

        if not self._extended_supported:
            self.logger.debug("当前平台 longdouble 与 float64 精度相同")

    def _check_extended_precision(self) -> bool:
        """检查 longdouble 是否比 float64 精度更高"""
        return np.finfo(np.longdouble).eps < np.finfo(np.float64).eps

    def numpy_dtype(self, dtype: str) -> np.dtype:
        """数据类型名称 -> numpy dtype"""
        validate_dtype(dtype, SUPPORTED_DTYPES)
        return NUMPY_DTYPE_MAP[dtype]

    def torch_dtype(self, dtype: str) -> torch.dtype:
        """数据类型名称 -> torch dtype（torch 不支持 longdouble）"""
        validate_dtype(dtype, TORCH_SUPPORTED_DTYPES)
        return TORCH_DTYPE_MAP[dtype]

    def dtype_name(self, value: ArrayLike) -> str:
        """获取输入值对应的数据类型名称"""
        if isinstance(value, torch.Tensor):
            for name, torch_dtype in TORCH_DTYPE_MAP.items():
                if value.dtype == torch_dtype:
                    return name
            raise UnsupportedDataTypeError(str(value.dtype), TORCH_SUPPORTED_DTYPES)
        if isinstance(value, (np.ndarray, np.generic)):
            for name, np_dtype in NUMPY_DTYPE_MAP.items():
                if value.dtype == np_dtype:
                    return name
            raise UnsupportedDataTypeError(str(value.dtype), SUPPORTED_DTYPES)
        return DEFAULT_DTYPE

    def as_floating(self, value: Any) -> ArrayLike:
        """
        把整数输入提升为浮点类型，浮点输入原样返回

        Args:
            value: Python 数值、numpy 标量/数组、torch 张量或数值序列

        Returns:
            浮点类型的输入
        """
        if isinstance(value, torch.Tensor):
            if value.is_floating_point():
                return value
            return value.to(torch.get_default_dtype())
        if isinstance(value, np.ndarray):
            if np.issubdtype(value.dtype, np.floating):
                return value
            return value.astype(np.float64)
        if isinstance(value, np.generic):
            if np.issubdtype(value.dtype, np.floating):
                return value
            return np.float64(value)
        if isinstance(value, float):
            return value
        if isinstance(value, numbers.Real):
            return float(value)
        if isinstance(value, (list, tuple)):
            return np.asarray(value, dtype=np.float64)
        raise TypeError(f"不支持的输入类型: {type(value).__name__}")

    def constants_like(self, digits: Sequence[str], value: ArrayLike) -> tuple:
        """按 value 的精度实例化常量（带缓存）"""
        if isinstance(value, (np.ndarray, np.generic)):
            return materialize_constants(tuple(digits), value.dtype)
        return materialize_constants(tuple(digits), None)

    def ensure_dtype(self, values: Union[np.ndarray, torch.Tensor], target_dtype: str) -> Union[np.ndarray, torch.Tensor]:
        """
        确保数组/张量具有目标数据类型

        Args:
            values: 输入数组或张量
            target_dtype: 目标数据类型名称

        Returns:
            转换后的数组或张量
        """
        if isinstance(values, torch.Tensor):
            torch_dtype = self.torch_dtype(target_dtype)
            return values if values.dtype == torch_dtype else values.to(torch_dtype)

        np_dtype = self.numpy_dtype(target_dtype)
        values = np.asarray(values)
        return values if values.dtype == np_dtype else values.astype(np_dtype)

    def is_extended_precision_supported(self) -> bool:
        """检查 longdouble 是否为扩展精度"""
        return self._extended_supported

    def get_dtype_info(self, dtype: str) -> dict:
        """
        获取数据类型信息

        Args:
            dtype: 数据类型名称

        Returns:
            数据类型信息
        """
        np_dtype = self.numpy_dtype(dtype)
        finfo = np.finfo(np_dtype)
        return {
            'numpy_dtype': np_dtype,
            'torch_dtype': TORCH_DTYPE_MAP.get(dtype),
            'eps': float(finfo.eps),
            'min_normal': float(finfo.tiny),
            'max_value': finfo.max,
            'bits': np_dtype.itemsize * 8,
            'mantissa_bits': int(finfo.nmant)
        }


# 全局数据类型管理器
_data_type_manager: Optional[DataTypeManager] = None


def get_data_type_manager() -> DataTypeManager:
    """获取全局数据类型管理器"""
    global _data_type_manager
    if _data_type_manager is None:
        _data_type_manager = DataTypeManager()
    return _data_type_manager


def as_floating(value: Any) -> ArrayLike:
    """整数提升为浮点的便捷函数"""
    return get_data_type_manager().as_floating(value)


def constants_like(digits: Sequence[str], value: ArrayLike) -> tuple:
    """按输入精度实例化常量的便捷函数"""
    return get_data_type_manager().constants_like(digits, value)


def ensure_dtype(values: Union[np.ndarray, torch.Tensor], target_dtype: str) -> Union[np.ndarray, torch.Tensor]:
    """确保数组类型的便捷函数"""
    return get_data_type_manager().ensure_dtype(values, target_dtype)
