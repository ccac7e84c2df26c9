"""
常量定义模块
统一管理项目中的所有常量，包括近似阶数、误差界和运行参数
"""

from typing import Tuple, List, Dict, Any

# =============================================================================
# 近似函数参数
# =============================================================================

# 有理多项式阶数（1 到 6）
APPROXIMATION_DEGREES: Tuple[int, ...] = (1, 2, 3, 4, 5, 6)
MIN_DEGREE: int = APPROXIMATION_DEGREES[0]
MAX_DEGREE: int = APPROXIMATION_DEGREES[-1]
DEFAULT_DEGREE: int = MAX_DEGREE

# 验证区间 [1.0, 2.0]
VALIDATION_INTERVAL: Tuple[float, float] = (1.0, 2.0)

# 各阶近似在 [1.0, 2.0] 上用 1e11 个采样点测得的最大绝对误差
DOCUMENTED_MAX_ERRORS: Dict[int, float] = {
    1: 1.46e-3,
    2: 3.46e-6,
    3: 7.79e-9,
    4: 1.77e-11,
    5: 1.92e-14,
    6: 5.90e-16
}

# 拟合时由函数极值推得的理论最大误差
THEORETICAL_MAX_ERRORS: Dict[int, float] = {
    1: 1.464579127038346e-03,
    2: 3.458795617805599e-06,
    3: 7.786322031577697e-09,
    4: 1.772559876656032e-11,
    5: 1.887379141862766e-14,
    6: 2.721114280694278e-16
}

# 误差界比较时的容差（相对部分，以及以 eps 为单位的绝对部分，eps 取采样数据类型与 float64 中较大者）
BOUND_RELATIVE_TOLERANCE: float = 0.01
BOUND_ULP_TOLERANCE: int = 4

# =============================================================================
# 换底常数（保留完整十进制位，按数据类型精度实例化）
# =============================================================================

LN2_DIGITS: str = '0.693147180559945309417232121458176568075500134360255254120'
LOG10_2_DIGITS: str = '0.301029995663981195213738894724493026768189881462108541310'

LN2: float = float(LN2_DIGITS)
LOG10_2: float = float(LOG10_2_DIGITS)

# =============================================================================
# 数据类型
# =============================================================================

SUPPORTED_DTYPES: List[str] = ['float32', 'float64', 'longdouble']
TORCH_SUPPORTED_DTYPES: List[str] = ['float32', 'float64']
DEFAULT_DTYPE: str = 'float64'
BASELINE_DTYPE: str = 'float32'

# =============================================================================
# 验证与性能测试参数
# =============================================================================

# 误差界标定时使用的采样点数
CALIBRATION_SAMPLES: int = 10 ** 11

ACCURACY_CONFIG: Dict[str, Any] = {
    'num_samples': 10_000_000,
    'num_threads': 4,
    'chunk_size': 1 << 20,
    'include_float32_baseline': False
}

PERFORMANCE_CONFIG: Dict[str, Any] = {
    'num_samples': 10_000_000
}

# 误差向量中除各阶近似外预留的槽位（单精度系统 log2 基准）
RESERVED_BASELINE_SLOTS: int = 1

# =============================================================================
# 文件路径常量
# =============================================================================

OUTPUT_DIRS: Dict[str, str] = {
    'results': 'results',
    'charts': 'charts',
    'reports': 'reports',
    'data': 'data',
    'logs': 'logs'
}

FILE_EXTENSIONS: Dict[str, str] = {
    'json': '.json',
    'excel': '.xlsx',
    'chart': '.png',
    'log': '.log',
    'config': '.json'
}

# =============================================================================
# 日志配置
# =============================================================================

LOG_LEVELS: List[str] = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
DEFAULT_LOG_LEVEL: str = 'INFO'

LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'

# 报告输出中误差值的有效位数
REPORT_PRECISION: int = 24

# =============================================================================
# 版本信息
# =============================================================================

VERSION_INFO: Dict[str, str] = {
    'version': '1.0.0',
    'author': 'fastlog Team',
    'description': '基于有理多项式的快速 log2 近似与精度验证工具'
}
