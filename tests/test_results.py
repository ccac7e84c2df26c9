"""
结果输出测试模块
提供 JSON 报告、Excel 报告和图表输出测试
"""

import pytest
import pandas as pd

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from evaluation import AccuracyReport, PerformanceReport
from fastlog.base.exceptions import FileOperationError
from utils import (
    ResultManager, generate_accuracy_excel_report, generate_performance_excel_report,
    plot_accuracy_results, plot_performance_results
)


class TestResultOutputs:
    """结果输出测试类"""

    def setup_method(self):
        """测试前准备"""
        self.accuracy_report = AccuracyReport(
            num_samples=1000, num_threads=2, dtype='float64',
            degrees=[1, 2, 3, 4, 5, 6],
            max_errors=[1.4e-3, 3.4e-6, 7.7e-9, 1.7e-11, 1.9e-14, 4.4e-16, 0.0],
            partitions=[(0, 500), (500, 1001)]
        )
        self.performance_report = PerformanceReport(
            num_samples=1000, dtype='float64',
            timings_us={'log2': 20, 'fast_log2_p1': 5, 'log2f': 10},
            checksums={'log2': 8.0, 'fast_log2_p1': 8.001, 'log2f': 8.0}
        )

    def test_save_and_list_reports(self, tmp_path):
        """JSON 报告保存与检索"""
        manager = ResultManager(str(tmp_path / "results"))
        accuracy_file = manager.save_accuracy_report(self.accuracy_report)
        performance_file = manager.save_performance_report(self.performance_report)

        data = manager.load_report(accuracy_file)
        assert data['report_type'] == 'accuracy'
        assert data['result']['max_errors'] == self.accuracy_report.max_errors
        assert data['result']['summary'].startswith("Max errors: ")

        assert manager.load_report(performance_file)['result']['summary'] == "speed:20,5,10"
        assert len(manager.list_reports()) == 2
        assert [r.report_type for r in manager.list_reports('performance')] == ['performance']

    def test_load_missing_report(self, tmp_path):
        """加载不存在的报告"""
        manager = ResultManager(str(tmp_path))
        with pytest.raises(FileOperationError):
            manager.load_report(str(tmp_path / "missing.json"))

    def test_excel_reports(self, tmp_path):
        """Excel 报告"""
        accuracy_file = tmp_path / "data" / "accuracy.xlsx"
        assert generate_accuracy_excel_report(self.accuracy_report, str(accuracy_file))

        df = pd.read_excel(accuracy_file, sheet_name='Accuracy Results')
        assert df['Degree'].tolist() == [1, 2, 3, 4, 5, 6]
        assert df['Passed'].all()

        performance_file = tmp_path / "data" / "performance.xlsx"
        assert generate_performance_excel_report(self.performance_report, str(performance_file))
        df = pd.read_excel(performance_file, sheet_name='Performance Results')
        assert df['Variant'].tolist() == ['log2', 'fast_log2_p1', 'log2f']

    def test_charts(self, tmp_path):
        """图表输出"""
        accuracy_chart = tmp_path / "charts" / "accuracy.png"
        performance_chart = tmp_path / "charts" / "performance.png"

        assert plot_accuracy_results(self.accuracy_report, str(accuracy_chart))
        assert plot_performance_results(self.performance_report, str(performance_chart))
        assert accuracy_chart.stat().st_size > 0
        assert performance_chart.stat().st_size > 0
