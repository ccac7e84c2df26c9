"""
fastlog 主程序
支持命令行接口，提供精度验证和性能测试功能
"""
import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# 添加项目根目录到 Python 路径
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config import ConfigManager, ProjectConfig
from evaluation import AccuracyValidator, PerformanceBenchmark
from fastlog.base.constants import SUPPORTED_DTYPES, LOG_LEVELS, DEFAULT_LOG_LEVEL, FILE_EXTENSIONS
from fastlog.base.exceptions import FastLogBaseException, AccuracyThresholdExceededError
from fastlog.base.logs import FastLogLogger, setup_logging, get_logger
from utils import (
    ResultManager, generate_accuracy_excel_report, generate_performance_excel_report,
    plot_accuracy_results, plot_performance_results
)


class FastLogMain:
    """fastlog 主程序类"""

    def __init__(self, config: Optional[ProjectConfig] = None):
        self.logger: FastLogLogger = get_logger()
        self.config = config or ProjectConfig()
        self.result_manager = ResultManager(self.config.output.output_dir)

    def run_accuracy(self, **kwargs) -> Dict[str, Any]:
        """运行精度验证"""
        validator = AccuracyValidator(self.config.accuracy)

        try:
            report = validator.validate_accuracy()
        except FastLogBaseException as e:
            self.logger.error(f"精度验证失败: {e}")
            return {'mode': 'accuracy', 'success': False, 'error': str(e)}

        print(report.format_max_errors())

        result = {'mode': 'accuracy', 'success': True, 'report': report.to_dict()}
        try:
            report.check_bounds()
        except AccuracyThresholdExceededError as e:
            self.logger.error(str(e))
            result.update(success=False, error=str(e))

        if kwargs.get('generate_report', self.config.output.save_reports):
            self._generate_accuracy_outputs(report)

        return result

    def run_performance(self, **kwargs) -> Dict[str, Any]:
        """运行性能测试"""
        benchmark = PerformanceBenchmark(self.config.performance)

        try:
            report = benchmark.run()
        except FastLogBaseException as e:
            self.logger.error(f"性能测试失败: {e}")
            return {'mode': 'performance', 'success': False, 'error': str(e)}

        print(report.format_checksums())
        print(report.format_speed())

        if kwargs.get('generate_report', self.config.output.save_reports):
            self._generate_performance_outputs(report)

        return {'mode': 'performance', 'success': True, 'report': report.to_dict()}

    def run_all(self, **kwargs) -> Dict[str, Any]:
        """依次运行精度验证和性能测试"""
        results = {
            'accuracy': self.run_accuracy(**kwargs),
            'performance': self.run_performance(**kwargs)
        }
        self._generate_summary_report(results)
        return results

    def _generate_accuracy_outputs(self, report) -> None:
        """生成精度验证报告文件"""
        try:
            self.result_manager.save_accuracy_report(report)
        except FastLogBaseException as e:
            self.logger.error(f"生成报告文件失败: {e}")
            return

        if self.config.output.generate_excel:
            excel_file = self.result_manager.base_dir / "data" / f"accuracy_results{FILE_EXTENSIONS['excel']}"
            generate_accuracy_excel_report(report, str(excel_file))

        if self.config.output.save_charts:
            chart_file = self.result_manager.charts_dir / f"accuracy_errors{FILE_EXTENSIONS['chart']}"
            plot_accuracy_results(report, str(chart_file))

    def _generate_performance_outputs(self, report) -> None:
        """生成性能测试报告文件"""
        try:
            self.result_manager.save_performance_report(report)
        except FastLogBaseException as e:
            self.logger.error(f"生成报告文件失败: {e}")
            return

        if self.config.output.generate_excel:
            excel_file = self.result_manager.base_dir / "data" / f"performance_results{FILE_EXTENSIONS['excel']}"
            generate_performance_excel_report(report, str(excel_file))

        if self.config.output.save_charts:
            chart_file = self.result_manager.charts_dir / f"performance_timings{FILE_EXTENSIONS['chart']}"
            plot_performance_results(report, str(chart_file))

    def _generate_summary_report(self, results: Dict[str, Any]) -> None:
        """生成摘要报告"""
        successful = [name for name, r in results.items() if r.get('success', False)]
        failed = [name for name, r in results.items() if not r.get('success', False)]

        self.logger.info("=== 摘要报告 ===")
        self.logger.info(f"成功: {len(successful)}")
        self.logger.info(f"失败: {len(failed)}")

        for name in failed:
            self.logger.warning(f"  - {name}: {results[name].get('error', 'Unknown error')}")


def create_argument_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        description='fastlog 有理多项式 log2 近似验证工具',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  python main.py --mode accuracy --samples 1000000 --threads 8
  python main.py --mode performance --samples 10000000 --dtype float32
  python main.py --mode all --dtype longdouble --include_baseline
        """
    )

    # 基本参数
    parser.add_argument('--mode', choices=['accuracy', 'performance', 'all'],
                        default='accuracy', help='运行模式')

    # 验证参数
    parser.add_argument('--samples', type=int, default=None,
                        help='采样点数 N（步长 1/N）')
    parser.add_argument('--threads', type=int, default=None,
                        help='工作线程数')
    parser.add_argument('--dtype', choices=SUPPORTED_DTYPES, default=None,
                        help='数据类型')
    parser.add_argument('--chunk_size', type=int, default=None,
                        help='每个线程单次向量化处理的索引数')
    parser.add_argument('--include_baseline', action='store_true',
                        help='测量单精度系统 log2 作为基准')

    # 输出参数
    parser.add_argument('--output_dir', type=str, default=None,
                        help='输出目录')
    parser.add_argument('--config', type=str, default='config.json',
                        help='配置文件路径')
    parser.add_argument('--generate_report', action='store_true',
                        help='生成 Excel 报告和图表')

    # 日志参数
    parser.add_argument('--log_level', choices=LOG_LEVELS, default=DEFAULT_LOG_LEVEL,
                        help='日志级别')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='详细输出')

    return parser


def apply_arguments(config: ProjectConfig, args: argparse.Namespace) -> ProjectConfig:
    """命令行参数覆盖配置文件中的值"""
    if args.samples is not None:
        config.accuracy.num_samples = args.samples
        config.performance.num_samples = args.samples
    if args.threads is not None:
        config.accuracy.num_threads = args.threads
    if args.dtype is not None:
        config.accuracy.dtype = args.dtype
        config.performance.dtype = args.dtype
    if args.chunk_size is not None:
        config.accuracy.chunk_size = args.chunk_size
    if args.include_baseline:
        config.accuracy.include_float32_baseline = True
    if args.output_dir is not None:
        config.output.output_dir = args.output_dir
    if args.generate_report:
        config.output.save_reports = True
        config.output.generate_excel = True
        config.output.save_charts = True
    return config


def main(argv=None) -> int:
    """主函数"""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    # 设置日志
    log_level = 'DEBUG' if args.verbose else args.log_level
    setup_logging(level=log_level)
    logger = get_logger()

    logger.info("fastlog 启动")
    logger.info(f"运行模式: {args.mode}")

    try:
        config_manager = ConfigManager(args.config, create_if_missing=False)
        config = apply_arguments(config_manager.get_config(), args)
        config_manager.config = config

        errors = config_manager.validate_config()
        if errors:
            for error in errors:
                logger.error(f"配置错误: {error}")
            return 1

        main_app = FastLogMain(config)

        if args.mode == 'accuracy':
            results = {'accuracy': main_app.run_accuracy()}
        elif args.mode == 'performance':
            results = {'performance': main_app.run_performance()}
        else:
            results = main_app.run_all()

        if not all(result.get('success', False) for result in results.values()):
            logger.error("存在失败的运行")
            return 1

        logger.info("程序执行完成")
        return 0

    except KeyboardInterrupt:
        logger.info("程序被用户中断")
        return 1
    except FastLogBaseException as e:
        logger.error(f"程序执行失败: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
