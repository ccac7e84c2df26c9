"""
配置测试模块
提供配置管理功能测试
"""

import json

import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import ConfigManager, ProjectConfig, AccuracyConfig, load_config, save_config
from fastlog.base.exceptions import ConfigParseError, FileOperationError


class TestConfigManager:
    """配置管理器测试类"""

    def setup_method(self):
        """测试前准备"""
        self.config = ProjectConfig(accuracy=AccuracyConfig(num_samples=1000, num_threads=3))

    def test_default_file_created(self, tmp_path):
        """配置文件不存在时创建默认配置"""
        config_file = tmp_path / "config.json"
        manager = ConfigManager(str(config_file))

        assert config_file.exists()
        assert manager.get_config().accuracy.dtype == 'float64'
        assert manager.validate_config() == []

    def test_round_trip(self, tmp_path):
        """保存后重新加载"""
        config_file = str(tmp_path / "nested" / "config.json")
        save_config(self.config, config_file)

        loaded = load_config(config_file)
        assert loaded.accuracy.num_samples == 1000
        assert loaded.accuracy.num_threads == 3
        assert loaded.to_dict() == self.config.to_dict()

    def test_update_config(self, tmp_path):
        """嵌套更新"""
        manager = ConfigManager(str(tmp_path / "config.json"))
        manager.update_config({'accuracy': {'num_threads': 8}, 'output': {'save_charts': True}})

        config = manager.get_config()
        assert config.accuracy.num_threads == 8
        assert config.accuracy.num_samples == AccuracyConfig().num_samples
        assert config.output.save_charts is True

    def test_validate_config(self, tmp_path):
        """非法值被报告"""
        manager = ConfigManager(str(tmp_path / "config.json"))
        manager.update_config({'accuracy': {'num_samples': 0, 'num_threads': 0, 'dtype': 'float16'}})

        errors = manager.validate_config()
        assert len(errors) == 3

    def test_invalid_json(self, tmp_path):
        """损坏的配置文件"""
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json", encoding='utf-8')

        with pytest.raises(ConfigParseError):
            ConfigManager(str(config_file))

    def test_import_missing_file(self, tmp_path):
        """导入不存在的文件"""
        manager = ConfigManager(str(tmp_path / "config.json"))
        with pytest.raises(FileOperationError):
            manager.import_config(str(tmp_path / "missing.json"))

    def test_export_and_import(self, tmp_path):
        """导出再导入"""
        manager = ConfigManager(str(tmp_path / "config.json"), create_if_missing=False)
        manager.config = self.config
        export_file = tmp_path / "exported.json"
        manager.export_config(str(export_file))

        data = json.loads(export_file.read_text(encoding='utf-8'))
        assert data['accuracy']['num_threads'] == 3

        manager.reset_to_default()
        assert manager.get_config().accuracy.num_threads == AccuracyConfig().num_threads
        manager.import_config(str(export_file))
        assert manager.get_config().accuracy.num_threads == 3
