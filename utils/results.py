"""
结果管理模块
提供精度验证和性能测试结果的存储和检索功能
"""

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from evaluation.accuracy import AccuracyReport
from evaluation.benchmark import PerformanceReport
from fastlog.base.constants import OUTPUT_DIRS, FILE_EXTENSIONS
from fastlog.base.exceptions import FileOperationError
from fastlog.base.logs import get_logger


@dataclass
class SavedReport:
    """已保存报告的索引信息"""
    report_id: str
    report_type: str  # 'accuracy', 'performance'
    timestamp: str
    path: str


class ResultManager:
    """结果管理器"""

    REPORT_TYPES = ('accuracy', 'performance')

    def __init__(self, base_dir: str = OUTPUT_DIRS['results']):
        self.base_dir = Path(base_dir)
        self.logger = get_logger()
        self._ensure_directories()

    @property
    def reports_dir(self) -> Path:
        return self.base_dir / OUTPUT_DIRS['reports']

    @property
    def charts_dir(self) -> Path:
        return self.base_dir / OUTPUT_DIRS['charts']

    def _ensure_directories(self) -> None:
        """确保目录存在"""
        for directory in (self.base_dir, self.reports_dir, self.charts_dir):
            directory.mkdir(parents=True, exist_ok=True)

    def _new_report_id(self, report_type: str) -> str:
        return f"{report_type}_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}"

    def _save(self, report_type: str, payload: Dict[str, Any]) -> str:
        report_id = self._new_report_id(report_type)
        report_file = self.reports_dir / f"{report_id}{FILE_EXTENSIONS['json']}"
        data = {
            'report_id': report_id,
            'report_type': report_type,
            'timestamp': datetime.now().isoformat(),
            'result': payload
        }

        try:
            with open(report_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError) as e:
            raise FileOperationError(f"保存{report_type}报告失败: {e}", "SAVE_FAILED",
                                     {'file_path': str(report_file)})

        self.logger.info(f"报告已保存: {report_file}")
        return str(report_file)

    def save_accuracy_report(self, report: AccuracyReport) -> str:
        """保存精度验证报告，返回文件路径"""
        payload = report.to_dict()
        payload['summary'] = report.format_max_errors()
        return self._save('accuracy', payload)

    def save_performance_report(self, report: PerformanceReport) -> str:
        """保存性能测试报告，返回文件路径"""
        payload = report.to_dict()
        payload['summary'] = report.format_speed()
        return self._save('performance', payload)

    def load_report(self, filepath: str) -> Dict[str, Any]:
        """加载报告"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise FileOperationError(f"加载报告失败: {e}", "LOAD_FAILED", {'file_path': filepath})

    def list_reports(self, report_type: Optional[str] = None) -> List[SavedReport]:
        """列出已保存的报告，按时间排序"""
        reports = []
        for file_path in sorted(self.reports_dir.glob(f"*{FILE_EXTENSIONS['json']}")):
            if report_type and not file_path.name.startswith(report_type):
                continue

            try:
                data = self.load_report(str(file_path))
            except FileOperationError as e:
                self.logger.warning(f"跳过无法读取的报告: {file_path}, 错误: {e}")
                continue

            reports.append(SavedReport(
                report_id=data.get('report_id', file_path.stem),
                report_type=data.get('report_type', ''),
                timestamp=data.get('timestamp', ''),
                path=str(file_path)
            ))

        return reports


# 全局结果管理器
_result_manager: Optional[ResultManager] = None


def get_result_manager(base_dir: Optional[str] = None) -> ResultManager:
    """获取全局结果管理器"""
    global _result_manager
    if _result_manager is None or (base_dir is not None and Path(base_dir) != _result_manager.base_dir):
        _result_manager = ResultManager(base_dir or OUTPUT_DIRS['results'])
    return _result_manager


def save_accuracy_report(report: AccuracyReport, base_dir: Optional[str] = None) -> str:
    """保存精度验证报告便捷函数"""
    return get_result_manager(base_dir).save_accuracy_report(report)


def save_performance_report(report: PerformanceReport, base_dir: Optional[str] = None) -> str:
    """保存性能测试报告便捷函数"""
    return get_result_manager(base_dir).save_performance_report(report)
