"""
구조체 분석 / POJO 생성기의 메인 진입점입니다.
커맨드 라인 인자를 처리하고 분석 또는 생성 작업을 시작합니다.
"""
import argparse
import sys
from typing import List, Optional

from shared_config.logger import logger, set_console_level, setup_file_logging
from shared_config.settings import ConfigError, Settings, load_settings
from struct_extractor import (
    ErrorSink,
    ReportError,
    SourceRootError,
    StructScanner,
    load_json_report,
    write_json_report,
    write_text_report,
)
from pojo_generator import PojoGenerator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='C 구조체 분석 및 Java POJO 생성기',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  # 소스 분석 (보고서 생성)
  python main.py analyze -c config.yaml

  # 보고서 기반 POJO 생성
  python main.py generate -c config.yaml --top-n 10
"""
    )
    subparsers = parser.add_subparsers(dest='command', help='명령어')

    for name, help_text in (('analyze', '소스 분석 후 보고서 저장'),
                            ('generate', '보고서에서 POJO 생성')):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument('-c', '--config', default='config.yaml', help='YAML 설정 파일 경로')
        sub.add_argument('--source-root', help='소스 루트 (설정 파일 값 덮어쓰기)')
        sub.add_argument('--output-dir', help='출력 디렉토리 (설정 파일 값 덮어쓰기)')
        sub.add_argument('--log-level', help='로그 레벨 (DEBUG, INFO, WARNING ...)')
        if name == 'generate':
            sub.add_argument('--top-n', type=int, help='생성할 상위 구조체 수')

    return parser


def configure_logging(settings: Settings) -> None:
    set_console_level(settings.log_level)
    setup_file_logging(str(settings.log_path), level=settings.log_level)


def run_analyze(settings: Settings) -> int:
    errors = ErrorSink(settings.error_file_path, truncate=True)
    scanner = StructScanner.from_settings(settings, errors)
    registry = scanner.scan()

    write_json_report(registry, settings.report_json_path)
    if settings.report_txt_path:
        write_text_report(registry, settings.report_txt_path)
    else:
        logger.warning("report_txt 미지정, TXT 보고서 생략")

    if len(errors):
        logger.warning(f"오류 {len(errors)}건 기록됨")
    return 0


def run_generate(settings: Settings) -> int:
    registry = load_json_report(settings.report_json_path)
    errors = ErrorSink(settings.error_file_path)
    result = PojoGenerator.from_settings(settings, registry, errors).generate()

    for file_name, class_names in result.classes.items():
        logger.info(f"{file_name}: {', '.join(class_names)}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    overrides = {
        'source_root': args.source_root,
        'output_dir': args.output_dir,
        'log_level': args.log_level,
        'top_n': getattr(args, 'top_n', None),
    }

    try:
        settings = load_settings(args.config, overrides)
        configure_logging(settings)
        if args.command == 'analyze':
            return run_analyze(settings)
        return run_generate(settings)
    except (ConfigError, SourceRootError, ReportError) as e:
        logger.error(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Error in main: {type(e).__name__} - {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
