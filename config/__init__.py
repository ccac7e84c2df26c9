"""
配置管理模块
提供项目配置管理功能
"""

from .config import (
    AccuracyConfig,
    PerformanceConfig,
    OutputConfig,
    ProjectConfig,
    ConfigManager,
    get_config_manager,
    get_config,
    load_config,
    save_config
)

__all__ = [
    # 配置类
    'AccuracyConfig', 'PerformanceConfig', 'OutputConfig', 'ProjectConfig',

    # 配置管理器
    'ConfigManager', 'get_config_manager', 'get_config', 'load_config', 'save_config'
]
