"""
Excel 报告生成模块
提供 Excel 格式的验证报告生成功能
"""

import os
from typing import Any, Dict, List

import pandas as pd

from evaluation.accuracy import AccuracyReport
from evaluation.benchmark import PerformanceReport
from fastlog.base.constants import DOCUMENTED_MAX_ERRORS
from fastlog.base.logs import get_logger


class ExcelReportGenerator:
    """Excel 报告生成器"""

    def __init__(self):
        self.logger = get_logger()

    def _ensure_parent(self, output_file: str) -> None:
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def _config_rows(self, config: Dict[str, Any]) -> List[Dict[str, str]]:
        return [{'Configuration Key': key, 'Configuration Value': str(value)} for key, value in config.items()]

    def generate_accuracy_report(self, report: AccuracyReport, output_file: str) -> bool:
        """生成精度验证报告: 每阶一行（阶数、实测误差、误差界、是否通过）"""
        try:
            self._ensure_parent(output_file)
            status = report.bound_status()

            data = []
            for degree in report.degrees:
                bound = DOCUMENTED_MAX_ERRORS.get(degree)
                data.append({
                    'Degree': degree,
                    'Function Name': f"fast_log2_p{degree}",
                    'Max Error': report.error_for(degree),
                    'Documented Bound': bound,
                    'Threshold': report.threshold_for(degree) if bound is not None else None,
                    'Passed': status.get(degree)
                })

            if report.baseline_included:
                data.append({
                    'Degree': None,
                    'Function Name': 'log2f',
                    'Max Error': report.baseline_error,
                    'Documented Bound': None,
                    'Threshold': None,
                    'Passed': None
                })

            df = pd.DataFrame(data)
            config_df = pd.DataFrame(self._config_rows({
                'num_samples': report.num_samples,
                'num_threads': report.num_threads,
                'dtype': report.dtype,
                'elapsed': report.elapsed,
                'partitions': report.partitions
            }))

            with pd.ExcelWriter(output_file, engine='openpyxl', mode='w') as writer:
                df.to_excel(writer, sheet_name='Accuracy Results', index=False)
                config_df.to_excel(writer, sheet_name='Configuration', index=False)

            self.logger.info(f"精度验证 Excel 报告已生成: {output_file}")
            return True

        except (OSError, ValueError) as e:
            self.logger.error(f"生成精度验证 Excel 报告失败: {e}")
            return False

    def generate_performance_report(self, report: PerformanceReport, output_file: str) -> bool:
        """生成性能测试报告: 每个变体一行（耗时、加速比、校验和）"""
        try:
            self._ensure_parent(output_file)

            data = [{
                'Variant': name,
                'Elapsed (us)': elapsed,
                'Speedup': report.speedup(name),
                'Checksum': report.checksums.get(name)
            } for name, elapsed in report.timings_us.items()]

            df = pd.DataFrame(data)
            config_df = pd.DataFrame(self._config_rows({
                'num_samples': report.num_samples,
                'dtype': report.dtype
            }))

            with pd.ExcelWriter(output_file, engine='openpyxl', mode='w') as writer:
                df.to_excel(writer, sheet_name='Performance Results', index=False)
                config_df.to_excel(writer, sheet_name='Configuration', index=False)

            self.logger.info(f"性能测试 Excel 报告已生成: {output_file}")
            return True

        except (OSError, ValueError) as e:
            self.logger.error(f"生成性能测试 Excel 报告失败: {e}")
            return False


def generate_accuracy_excel_report(report: AccuracyReport, output_file: str) -> bool:
    """生成精度验证 Excel 报告便捷函数"""
    generator = ExcelReportGenerator()
    return generator.generate_accuracy_report(report, output_file)


def generate_performance_excel_report(report: PerformanceReport, output_file: str) -> bool:
    """生成性能测试 Excel 报告便捷函数"""
    generator = ExcelReportGenerator()
    return generator.generate_performance_report(report, output_file)
