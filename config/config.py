"""
配置管理模块
提供项目配置的默认值和配置管理功能
"""

import json
import os
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict

from fastlog.base.constants import (
    ACCURACY_CONFIG, PERFORMANCE_CONFIG, DEFAULT_DTYPE, SUPPORTED_DTYPES,
    OUTPUT_DIRS, VERSION_INFO
)
from fastlog.base.exceptions import ConfigParseError, FileOperationError
from fastlog.base.logs import get_logger


@dataclass
class AccuracyConfig:
    """精度验证配置"""
    num_samples: int = ACCURACY_CONFIG['num_samples']
    num_threads: int = ACCURACY_CONFIG['num_threads']
    dtype: str = DEFAULT_DTYPE
    chunk_size: int = ACCURACY_CONFIG['chunk_size']  # 每个工作线程单次向量化处理的索引数
    include_float32_baseline: bool = ACCURACY_CONFIG['include_float32_baseline']  # 是否填充预留的单精度基准槽位


@dataclass
class PerformanceConfig:
    """性能测试配置"""
    num_samples: int = PERFORMANCE_CONFIG['num_samples']
    dtype: str = DEFAULT_DTYPE
    warmup_runs: int = 1


@dataclass
class OutputConfig:
    """输出配置"""
    output_dir: str = OUTPUT_DIRS['results']
    save_reports: bool = True
    generate_excel: bool = False
    save_charts: bool = False


@dataclass
class ProjectConfig:
    """项目主配置"""
    # 基本配置
    project_name: str = "fastlog"
    version: str = VERSION_INFO['version']
    description: str = VERSION_INFO['description']

    # 子配置
    accuracy: AccuracyConfig = None
    performance: PerformanceConfig = None
    output: OutputConfig = None

    def __post_init__(self):
        """初始化后处理"""
        if self.accuracy is None:
            self.accuracy = AccuracyConfig()
        if self.performance is None:
            self.performance = PerformanceConfig()
        if self.output is None:
            self.output = OutputConfig()

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProjectConfig':
        """从字典创建配置"""
        data = dict(data)

        # 处理嵌套配置
        if 'accuracy' in data and isinstance(data['accuracy'], dict):
            data['accuracy'] = AccuracyConfig(**data['accuracy'])

        if 'performance' in data and isinstance(data['performance'], dict):
            data['performance'] = PerformanceConfig(**data['performance'])

        if 'output' in data and isinstance(data['output'], dict):
            data['output'] = OutputConfig(**data['output'])

        return cls(**data)


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_file: Optional[str] = None, create_if_missing: bool = True):
        self.logger = get_logger()
        self.config_file = config_file or "config.json"
        self.create_if_missing = create_if_missing
        self.config: Optional[ProjectConfig] = None
        self._load_config()

    def _load_config(self) -> None:
        """加载配置"""
        if os.path.exists(self.config_file):
            self.config = self._load_from_file(self.config_file)
            self.logger.info(f"从文件加载配置: {self.config_file}")
            return

        self.config = ProjectConfig()
        if self.create_if_missing:
            try:
                self._save_to_file(self.config_file, self.config)
                self.logger.info(f"创建默认配置文件: {self.config_file}")
            except ConfigParseError as e:
                self.logger.warning(f"默认配置文件创建失败，使用内存中的默认配置: {e}")

    def _load_from_file(self, filepath: str) -> ProjectConfig:
        """从文件加载配置"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return ProjectConfig.from_dict(data)
        except json.JSONDecodeError as e:
            raise ConfigParseError(filepath, f"JSON 解析错误: {e}")
        except (OSError, TypeError) as e:
            raise ConfigParseError(filepath, f"文件读取错误: {e}")

    def _save_to_file(self, filepath: str, config: ProjectConfig) -> None:
        """保存配置到文件"""
        try:
            directory = os.path.dirname(filepath)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(config.to_dict(), f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigParseError(filepath, f"文件保存错误: {e}")

    def get_config(self) -> ProjectConfig:
        """获取当前配置"""
        if self.config is None:
            self.config = ProjectConfig()
        return self.config

    def update_config(self, updates: Dict[str, Any]) -> None:
        """更新配置（支持嵌套字典）"""
        config_dict = self.get_config().to_dict()
        self._update_nested_dict(config_dict, updates)
        self.config = ProjectConfig.from_dict(config_dict)

        self.logger.info("配置已更新")

    def _update_nested_dict(self, base_dict: Dict[str, Any],
                            updates: Dict[str, Any]) -> None:
        """递归更新嵌套字典"""
        for key, value in updates.items():
            if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                self._update_nested_dict(base_dict[key], value)
            else:
                base_dict[key] = value

    def save_config(self, filepath: Optional[str] = None) -> None:
        """保存配置"""
        save_path = filepath or self.config_file
        self._save_to_file(save_path, self.get_config())
        self.logger.info(f"配置已保存到: {save_path}")

    def reset_to_default(self) -> None:
        """重置为默认配置"""
        self.config = ProjectConfig()
        self.logger.info("配置已重置为默认值")

    def validate_config(self) -> List[str]:
        """验证配置，返回错误信息列表"""
        errors = []
        config = self.get_config()

        # 验证精度配置
        if config.accuracy.num_samples < 1:
            errors.append("采样点数必须大于 0")

        if config.accuracy.num_threads < 1:
            errors.append("工作线程数必须大于 0")

        if config.accuracy.chunk_size < 1:
            errors.append("分块大小必须大于 0")

        if config.accuracy.dtype not in SUPPORTED_DTYPES:
            errors.append(f"数据类型必须是 {SUPPORTED_DTYPES} 之一")

        # 验证性能配置
        if config.performance.num_samples < 1:
            errors.append("性能测试样本数必须大于 0")

        if config.performance.dtype not in SUPPORTED_DTYPES:
            errors.append(f"性能测试数据类型必须是 {SUPPORTED_DTYPES} 之一")

        if config.performance.warmup_runs < 0:
            errors.append("预热次数不能为负数")

        return errors

    def export_config(self, filepath: str) -> None:
        """导出配置"""
        self._save_to_file(filepath, self.get_config())
        self.logger.info(f"配置已导出到: {filepath}")

    def import_config(self, filepath: str) -> None:
        """导入配置"""
        if not os.path.exists(filepath):
            raise FileOperationError(f"文件不存在: {filepath}", "FILE_NOT_FOUND", {'file_path': filepath})

        self.config = self._load_from_file(filepath)
        self.logger.info(f"配置已从 {filepath} 导入")


# 全局配置管理器
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """获取全局配置管理器"""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(config_file)
    return _config_manager


def get_config() -> ProjectConfig:
    """获取当前配置便捷函数"""
    manager = get_config_manager()
    return manager.get_config()


def load_config(filepath: str) -> ProjectConfig:
    """加载配置文件便捷函数"""
    manager = ConfigManager(filepath, create_if_missing=False)
    return manager.get_config()


def save_config(config: ProjectConfig, filepath: str) -> None:
    """保存配置便捷函数"""
    manager = ConfigManager(filepath, create_if_missing=False)
    manager.config = config
    manager.save_config(filepath)
