"""CLIメインインターフェース"""
import argparse
import datetime
import sys
import traceback
from pathlib import Path

from ...application.use_cases.request_models import GenerationReport, ValidateScheduleResult
from ...domain.constants import get_day_name
from ...domain.exceptions import TimetableGenerationError
from ...infrastructure.config.generation_config_loader import GenerationConfigLoader
from ...infrastructure.config.logging_config import LoggingConfig
from ...infrastructure.config.path_config import PathConfig
from ...infrastructure.di_container import configure_container
from ...shared.mixins.logging_mixin import LoggingMixin


class TimetableCLI(LoggingMixin):
    """時間割エンジンのCLIインターフェース"""
    
    def run(self, args=None) -> int:
        """CLIメイン実行"""
        parser = self.create_parser()
        parsed_args = parser.parse_args(args)
        
        if parsed_args.verbose:
            LoggingConfig.setup_development_logging(parsed_args.log_file)
        elif parsed_args.quiet:
            LoggingConfig.setup_quiet_logging()
        else:
            LoggingConfig.setup_production_logging(parsed_args.log_file)
        
        handlers = {
            "generate": self.handle_generate_command,
            "validate": self.handle_validate_command,
            "stats": self.handle_stats_command,
            "empty-slots": self.handle_empty_slots_command,
        }
        handler = handlers.get(parsed_args.command)
        if handler is None:
            parser.print_help()
            return 1
        
        try:
            self.container = configure_container(PathConfig(parsed_args.data_dir))
            return handler(parsed_args)
        except TimetableGenerationError as e:
            self.log_error(f"実行エラー: {e.message}")
            return 1
        except Exception as e:
            self.log_error(f"予期しないエラー: {e}")
            if parsed_args.verbose:
                traceback.print_exc()
            return 1
    
    def create_parser(self) -> argparse.ArgumentParser:
        """コマンドライン引数パーサーを作成"""
        parser = argparse.ArgumentParser(
            prog="timetable-engine",
            description="学級・教員・授業の制約を満たす週間時間割を生成する",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
使用例:
  %(prog)s generate                              # 全学級の時間割を生成
  %(prog)s generate --grade 6                    # 6年生の学級のみ再生成
  %(prog)s generate --config generation.json     # 生成設定を指定
  %(prog)s generate --export-grid grid.csv       # 生成後に学級別の表を出力
  %(prog)s validate                              # 登録済み時間割の重複を検査
  %(prog)s stats                                 # 統計を表示
  %(prog)s empty-slots                           # どの学級も使っていない枠を表示
            """
        )
        
        parser.add_argument("--verbose", "-v", action="store_true", help="詳細なログを出力")
        parser.add_argument("--quiet", "-q", action="store_true", help="エラーのみ出力")
        parser.add_argument(
            "--data-dir",
            type=Path,
            default=None,
            help="データファイルのディレクトリ (デフォルト: $TIMETABLE_DATA_DIR または ./data)"
        )
        parser.add_argument("--log-file", type=Path, default=None, help="ログをファイルにも出力する")
        
        subparsers = parser.add_subparsers(dest="command", help="利用可能なコマンド")
        
        generate_parser = subparsers.add_parser("generate", help="時間割を生成")
        generate_parser.add_argument(
            "--config",
            type=Path,
            default=None,
            help="生成設定JSON (デフォルト: <data-dir>/generation_config.json)"
        )
        generate_parser.add_argument("--grade", type=int, default=None, help="対象の学年")
        generate_parser.add_argument(
            "--export-grid",
            type=Path,
            default=None,
            help="生成後に学級×曜日の表をCSVで出力するファイル"
        )
        
        subparsers.add_parser("validate", help="登録済み時間割の重複を検査")
        subparsers.add_parser("stats", help="時間割の統計を表示")
        subparsers.add_parser("empty-slots", help="どの学級も使っていない時間枠を表示")
        
        return parser
    
    def handle_generate_command(self, args) -> int:
        """時間割生成コマンドを処理"""
        self.print_header("時間割生成")
        
        config_path = args.config or self.container.path_config.generation_config_json
        config = GenerationConfigLoader(config_path).load(grade=args.grade)
        
        use_case = self.container.create_generate_schedule_use_case()
        report = use_case.execute(config)
        self.log_performance("時間割生成", report.execution_time, report.placed_count)
        self.print_generation_result(report)
        
        if args.export_grid:
            exporter = self.container.create_exporter()
            exporter.export_grid(args.export_grid)
            print(f"学級別の表を出力しました: {args.export_grid}")
        
        self.print_footer(report.success)
        return 0 if report.success else 1
    
    def handle_validate_command(self, args) -> int:
        """時間割検証コマンドを処理"""
        self.print_header("時間割検証")
        result = self.container.create_validate_schedule_use_case().execute()
        self.print_validation_result(result)
        return 0 if result.is_valid else 1
    
    def handle_stats_command(self, args) -> int:
        statistics = self.container.create_statistics_service().collect()
        
        print("【時間割統計】")
        print(f"エントリ数: {statistics.total_entries}")
        print(f"時間割のある学級数: {statistics.classes_with_schedule}")
        print(f"時間割のある教員数: {statistics.teachers_with_schedule}")
        print(f"重複数: {statistics.conflict_count}")
        print("\n曜日別:")
        for day, count in statistics.daily_distribution.items():
            print(f"  {get_day_name(day)}: {count}")
        print("\n校時別:")
        for period, count in statistics.hourly_distribution.items():
            print(f"  {period}限: {count}")
        return 0
    
    def handle_empty_slots_command(self, args) -> int:
        slots = self.container.create_statistics_service().empty_slots()
        
        print(f"【空き枠】{len(slots)}件")
        for day, period in slots:
            print(f"  {get_day_name(day)}{period}限")
        return 0
    
    def print_header(self, title: str):
        print("=" * 60)
        print(f"　　　　{title}")
        print("=" * 60)
        print(f"実行日時: {datetime.datetime.now().strftime('%Y年%m月%d日 %H:%M:%S')}")
        print()
    
    def print_generation_result(self, report: GenerationReport):
        """生成結果を表示"""
        print("【生成結果】")
        print(report.message)
        print(f"実行時間: {report.execution_time:.2f}秒")
        
        failed = report.failed_lessons
        if failed:
            print(f"\n配置できなかった授業 ({len(failed)}件):")
            for result in failed[:10]:
                print(f"  学級{result.class_id} 授業{result.lesson_id}: "
                      f"{result.failed_hours}/{result.required_hours}時間 [{result.strategy}]")
        
        if report.remaining_conflicts:
            print(f"\n⚠️  重複が {len(report.remaining_conflicts)} 件残っています")
            for conflict in report.remaining_conflicts[:5]:
                print(f"  - {conflict.message}")
        print()
    
    def print_validation_result(self, result: ValidateScheduleResult):
        """検証結果を表示"""
        print("【検証結果】")
        print(f"重複数: {result.conflicts_count}件")
        print(f"検証結果: {result.message}")
        
        if result.is_valid:
            print("✓ 時間割は有効です")
            return
        
        print("✗ 時間割に問題があります")
        print("\n重複の詳細 (最初の10件):")
        for i, conflict in enumerate(result.conflicts[:10]):
            ids = ", ".join(str(entry_id) for entry_id in conflict.affected_entry_ids)
            print(f"  {i+1}. [{conflict.severity.value}] {conflict.message} (エントリ: {ids})")
    
    def print_footer(self, success: bool = True):
        print("=" * 60)
        if success:
            print("時間割生成処理が正常に完了しました。")
        else:
            print("時間割生成処理が完了しましたが、問題があります。")
        print("=" * 60)


def main(args=None) -> int:
    """メイン関数"""
    cli = TimetableCLI()
    return cli.run(args)


if __name__ == "__main__":
    sys.exit(main())
