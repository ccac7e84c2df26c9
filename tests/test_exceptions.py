"""
异常测试模块
提供异常体系与参数校验测试
"""

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastlog.base.exceptions import (
    FastLogBaseException, EvaluationError, ValidationError, InvalidDegreeError,
    InvalidSampleCountError, InvalidWorkerCountError, UnsupportedDataTypeError,
    WorkerFailureError, handle_exception, validate_degree, validate_dtype,
    validate_sample_count, validate_worker_count
)


class TestExceptions:
    """异常测试类"""

    def test_error_code_in_message(self):
        """字符串形式带错误码"""
        error = InvalidSampleCountError(0)
        assert str(error).startswith("[INVALID_SAMPLE_COUNT]")
        assert error.details == {'num_samples': 0}

    def test_hierarchy(self):
        """异常继承关系"""
        assert issubclass(WorkerFailureError, EvaluationError)
        assert issubclass(InvalidWorkerCountError, EvaluationError)
        assert issubclass(UnsupportedDataTypeError, ValidationError)
        assert issubclass(InvalidDegreeError, FastLogBaseException)

    def test_handle_exception(self):
        """统一错误消息"""
        assert handle_exception(InvalidWorkerCountError(0), "run").startswith("[run] [INVALID_WORKER_COUNT]")
        assert handle_exception(KeyError('x')) == "未处理的异常: KeyError: 'x'"

    def test_validators(self):
        """参数校验"""
        validate_sample_count(1)
        validate_worker_count(16)
        validate_degree(6, 1, 6)
        validate_dtype('float64', ['float64'])

        with pytest.raises(InvalidSampleCountError):
            validate_sample_count(False)
        with pytest.raises(InvalidWorkerCountError):
            validate_worker_count(0)
        with pytest.raises(InvalidDegreeError):
            validate_degree(7, 1, 6)
        with pytest.raises(UnsupportedDataTypeError):
            validate_dtype('bfloat16', ['float64'])
