"""
数据类型管理器测试模块
提供数据类型转换、类型信息与执行时间记录测试
"""

import pytest
import numpy as np
import torch

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastlog.base.exceptions import UnsupportedDataTypeError
from fastlog.base.logs import log_execution_time, get_accuracy_logger
from fastlog.utils import get_data_type_manager, ensure_dtype


class TestDataTypeManager:
    """数据类型管理器测试类"""

    def setup_method(self):
        """测试前准备"""
        self.manager = get_data_type_manager()

    def test_ensure_dtype_array(self):
        """numpy 数组按需转换，类型一致时原样返回"""
        values = np.linspace(1.0, 2.0, 5)
        converted = ensure_dtype(values, 'float32')
        assert converted.dtype == np.float32
        assert np.allclose(converted, values)
        assert ensure_dtype(values, 'float64') is values

    def test_ensure_dtype_tensor(self):
        """torch 张量按需转换"""
        values = torch.linspace(1.0, 2.0, 5, dtype=torch.float64)
        converted = self.manager.ensure_dtype(values, 'float32')
        assert converted.dtype == torch.float32
        assert self.manager.ensure_dtype(values, 'float64') is values

    def test_torch_rejects_longdouble(self):
        """torch 没有 longdouble"""
        assert self.manager.torch_dtype('float64') == torch.float64
        with pytest.raises(UnsupportedDataTypeError):
            self.manager.torch_dtype('longdouble')
        with pytest.raises(UnsupportedDataTypeError):
            ensure_dtype(torch.ones(3), 'longdouble')

    def test_unsupported_numpy_dtype(self):
        """不支持的类型名称"""
        with pytest.raises(UnsupportedDataTypeError):
            self.manager.numpy_dtype('float16')
        with pytest.raises(UnsupportedDataTypeError):
            self.manager.dtype_name(np.ones(3, dtype=np.float16))

    def test_dtype_name(self):
        """数组、张量与 Python 标量的类型名称"""
        assert self.manager.dtype_name(np.ones(3, dtype=np.float32)) == 'float32'
        assert self.manager.dtype_name(np.float32(1.5)) == 'float32'
        assert self.manager.dtype_name(torch.ones(3, dtype=torch.float64)) == 'float64'
        assert self.manager.dtype_name(1.5) == 'float64'

    def test_dtype_info(self):
        """类型信息与 numpy finfo 一致"""
        info = self.manager.get_dtype_info('float32')
        assert info['eps'] == float(np.finfo(np.float32).eps)
        assert info['bits'] == 32
        assert info['mantissa_bits'] == 23
        assert info['torch_dtype'] == torch.float32
        assert self.manager.get_dtype_info('longdouble')['torch_dtype'] is None

    def test_extended_precision(self):
        """longdouble 是否为扩展精度取决于平台"""
        expected = bool(np.finfo(np.longdouble).eps < np.finfo(np.float64).eps)
        assert self.manager.is_extended_precision_supported() == expected


class TestExecutionTimeLogging:
    """执行时间记录测试类"""

    def test_return_value_passes_through(self):
        """被装饰函数的返回值与名称保持不变"""
        @log_execution_time("求和")
        def add(a, b):
            """两数相加"""
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == 'add'
        assert add.__doc__ == "两数相加"

    def test_exception_is_reraised(self):
        """被装饰函数的异常原样抛出"""
        @log_execution_time("失败")
        def fail():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            fail()

    def test_accuracy_log_with_theoretical(self):
        """精度日志可附带理论误差"""
        accuracy_logger = get_accuracy_logger()
        accuracy_logger.log_accuracy_test("fast_log2_p6", 3.0e-16, 6.0e-16, True, theoretical=2.7e-16)
        accuracy_logger.log_accuracy_test("fast_log2_p6", 1.0e-6, 6.0e-16, False)
