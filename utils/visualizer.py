"""
可视化模块
提供验证结果的可视化功能
"""

import os

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from evaluation.accuracy import AccuracyReport
from evaluation.benchmark import PerformanceReport
from fastlog.base.constants import DOCUMENTED_MAX_ERRORS
from fastlog.base.logs import get_logger

# 设置中文字体
plt.rcParams['font.sans-serif'] = ['SimHei', 'DejaVu Sans']
plt.rcParams['axes.unicode_minus'] = False


class ResultVisualizer:
    """结果可视化器"""

    def __init__(self):
        self.logger = get_logger()

    def _prepare_output(self, output_file: str) -> None:
        directory = os.path.dirname(output_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if os.path.exists(output_file):
            os.remove(output_file)

    def plot_accuracy_results(self, report: AccuracyReport, output_file: str) -> bool:
        """绘制各阶最大误差柱状图（对数坐标，叠加记录的误差界）"""
        try:
            self._prepare_output(output_file)

            degrees = list(report.degrees)
            # 误差为 0 时在对数坐标下无法显示
            errors = [max(report.error_for(d), np.finfo(np.float64).tiny) for d in degrees]
            bounds = [DOCUMENTED_MAX_ERRORS.get(d, np.nan) for d in degrees]
            positions = np.arange(len(degrees))

            fig, ax = plt.subplots(figsize=(10, 6))
            ax.bar(positions, errors, color='skyblue', alpha=0.7, label='实测最大误差')
            ax.plot(positions, bounds, 'r--', marker='o', label='误差界')
            ax.set_yscale('log')
            ax.set_title(f'log2 近似最大误差 (N={report.num_samples}, {report.dtype})')
            ax.set_xlabel('阶数')
            ax.set_ylabel('最大绝对误差')
            ax.set_xticks(positions)
            ax.set_xticklabels([f"p{d}" for d in degrees])
            ax.grid(True, which='both', alpha=0.3)
            ax.legend()

            plt.tight_layout()
            plt.savefig(output_file, dpi=150, bbox_inches='tight')
            plt.close(fig)

            self.logger.info(f"精度图表已生成: {output_file}")
            return True

        except (OSError, ValueError) as e:
            self.logger.error(f"绘制精度图表失败: {e}")
            return False

    def plot_performance_results(self, report: PerformanceReport, output_file: str) -> bool:
        """绘制各变体耗时柱状图"""
        try:
            self._prepare_output(output_file)

            names = report.variants
            timings = [report.timings_us[name] for name in names]
            positions = np.arange(len(names))

            fig, ax = plt.subplots(figsize=(10, 6))
            ax.bar(positions, timings, color='lightgreen', alpha=0.7)
            ax.set_title(f'log2 变体耗时 (N={report.num_samples}, {report.dtype})')
            ax.set_xlabel('变体')
            ax.set_ylabel('耗时 (微秒)')
            ax.set_xticks(positions)
            ax.set_xticklabels(names, rotation=45)
            ax.grid(True, axis='y', alpha=0.3)

            plt.tight_layout()
            plt.savefig(output_file, dpi=150, bbox_inches='tight')
            plt.close(fig)

            self.logger.info(f"性能图表已生成: {output_file}")
            return True

        except (OSError, ValueError) as e:
            self.logger.error(f"绘制性能图表失败: {e}")
            return False


def plot_accuracy_results(report: AccuracyReport, output_file: str) -> bool:
    """绘制精度图表便捷函数"""
    visualizer = ResultVisualizer()
    return visualizer.plot_accuracy_results(report, output_file)


def plot_performance_results(report: PerformanceReport, output_file: str) -> bool:
    """绘制性能图表便捷函数"""
    visualizer = ResultVisualizer()
    return visualizer.plot_performance_results(report, output_file)
