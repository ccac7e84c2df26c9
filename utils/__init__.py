"""
工具模块
提供结果管理、Excel 报告和可视化功能
"""

from .results import (
    SavedReport,
    ResultManager,
    get_result_manager,
    save_accuracy_report,
    save_performance_report
)

from .excels import (
    ExcelReportGenerator,
    generate_accuracy_excel_report,
    generate_performance_excel_report
)

from .visualizer import (
    ResultVisualizer,
    plot_accuracy_results,
    plot_performance_results
)

__all__ = [
    # 结果管理
    'SavedReport', 'ResultManager', 'get_result_manager',
    'save_accuracy_report', 'save_performance_report',

    # Excel 报告
    'ExcelReportGenerator', 'generate_accuracy_excel_report', 'generate_performance_excel_report',

    # 可视化
    'ResultVisualizer', 'plot_accuracy_results', 'plot_performance_results'
]
