"""
工具模块
包含数据类型管理
"""

from .data_type_manager import (
    DataType,
    DataTypeManager,
    NUMPY_DTYPE_MAP,
    TORCH_DTYPE_MAP,
    materialize_constants,
    get_data_type_manager,
    as_floating,
    constants_like,
    ensure_dtype
)

__all__ = [
    # 数据类型管理
    'DataType', 'DataTypeManager', 'NUMPY_DTYPE_MAP', 'TORCH_DTYPE_MAP',
    'materialize_constants', 'get_data_type_manager', 'as_floating',
    'constants_like', 'ensure_dtype'
]
