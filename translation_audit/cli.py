"""Command-line interface for translation-audit."""

import argparse
import sys
from pathlib import Path

from .__version__ import __version__
from .core.errors import AuditError
from .core.history import GitHistory, HistoryAnnotator
from .core.report import ReportAssembler
from .features.exporter import TemplateExporter
from .features.ingestor import PatchIngestor
from .reports.console_reporter import ConsoleReporter
from .reports.json_reporter import JSONReporter
from .utils.colors import Colors
from .utils.config import CONFIG_FILENAME, Config, ConfigValidationError, create_default_config
from .utils.logging import configure_logging, get_logger


def load_and_validate_config(config_path: Path = None, verbose: bool = False) -> Config:
    """
    Load configuration and validate it.

    Raises:
        ConfigValidationError: If validation fails with errors
    """
    config = Config.from_file(config_path)
    errors, warnings = config.validate()

    if verbose and warnings:
        for warning in warnings:
            print(f"{Colors.warning('⚠️')}  Config warning: {warning}")

    if errors:
        print(f"{Colors.error('❌')} Configuration errors:")
        for error in errors:
            print(f"   • {error}")
        raise ConfigValidationError(errors)

    return config


def cmd_init(args):
    """Write a default configuration file."""
    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists() and not args.force:
        print(f"{Colors.error('❌')} Config already exists: {config_path}")
        print("   Use --force to overwrite")
        return 1

    create_default_config().save(config_path)

    print(f"{Colors.success('✅')} Created: {config_path}")
    print(f"\n{Colors.bold('Next steps:')}")
    print(f"1. List your locales and namespaces in {CONFIG_FILENAME}")
    print("2. Run: translation-audit generate")
    return 0


def cmd_generate(args):
    """Audit all locales and write translation templates."""
    try:
        config = load_and_validate_config(args.config, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    workers = args.workers or config.history.workers
    annotator = HistoryAnnotator(
        oracle=GitHistory(config.root),
        root=config.root,
        workers=workers,
        show_progress=config.history.progress and not args.no_progress and not args.quiet,
    )

    try:
        report = ReportAssembler(config, annotator).assemble()
    except AuditError as e:
        print(f"{Colors.error('❌')} {e}")
        return 1

    if not args.quiet:
        ConsoleReporter.print_audit(report, show_details=not args.summary_only)

    output_dir = Path(args.output_dir) if args.output_dir else config.templates_dir()
    TemplateExporter().export_report(report, output_dir)

    if args.json:
        JSONReporter.generate(report, Path(args.json))

    warnings = get_logger().warning_count
    if warnings and not args.quiet:
        print(f"{Colors.warning('⚠️')}  {warnings} warning(s) during the audit, see the log output above")

    if args.fail_on_missing and report.has_work:
        return 1

    return 0


def cmd_ingest(args):
    """Apply a filled-out template for one locale."""
    try:
        config = load_and_validate_config(args.config, verbose=args.verbose)
    except ConfigValidationError:
        return 1

    if args.locale not in config.languages.targets:
        print(f"{Colors.error('❌')} Unknown locale: {args.locale}")
        print(f"   Configured: {', '.join(config.languages.targets)}")
        return 1

    csv_path = Path(args.file)
    if not csv_path.exists():
        print(f"{Colors.error('❌')} File not found: {csv_path}")
        return 1

    ingestor = PatchIngestor(config, backup=False if args.no_backup else None)
    try:
        summary = ingestor.ingest_file(args.locale, csv_path, dry_run=args.dry_run)
    except AuditError as e:
        print(f"{Colors.error('❌')} {e}")
        return 1

    ConsoleReporter.print_ingest(summary)
    return 0 if summary.succeeded else 1


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='translation-audit',
        description='Find missing and out-of-date translations using git history',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', '-c', metavar='PATH', type=Path,
                        help=f'Config file (default: ./{CONFIG_FILENAME})')
    parser.add_argument('--log-file', metavar='PATH', type=Path, help='Also write logs to this file')
    parser.add_argument('--no-color', action='store_true', help='Disable colored output')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # init command
    init_parser = subparsers.add_parser('init', help='Create a default configuration file')
    init_parser.add_argument('--force', action='store_true', help='Overwrite existing config')

    # generate command
    generate_parser = subparsers.add_parser('generate', help='Output translation template CSVs')
    generate_parser.add_argument('--output-dir', '-o', metavar='DIR', help='Template directory (default: from config)')
    generate_parser.add_argument('--json', metavar='PATH', help='Also write a JSON audit report')
    generate_parser.add_argument('--workers', type=int, metavar='N', help='Parallel history lookups')
    generate_parser.add_argument('--no-progress', action='store_true', help='Hide progress bars')
    generate_parser.add_argument('--summary-only', action='store_true', help='Only print counts')
    generate_parser.add_argument('--fail-on-missing', action='store_true',
                                 help='Exit with error if anything is missing or out of date')
    generate_parser.add_argument('--verbose', '-v', action='store_true', help='Show debug output')
    generate_parser.add_argument('--quiet', '-q', action='store_true', help='Only warnings and errors')

    # ingest command
    ingest_parser = subparsers.add_parser('ingest', help='Ingest a filled out translation CSV into the translations')
    ingest_parser.add_argument('locale', help='The locale (language) the CSV applies to')
    ingest_parser.add_argument('file', help='The CSV file to ingest')
    ingest_parser.add_argument('--dry-run', action='store_true', help='Preview only, write nothing')
    ingest_parser.add_argument('--no-backup', action='store_true', help='Skip backup creation')
    ingest_parser.add_argument('--verbose', '-v', action='store_true', help='Show debug output')
    ingest_parser.add_argument('--quiet', '-q', action='store_true', help='Only warnings and errors')

    args = parser.parse_args(argv)

    Colors.enabled = not args.no_color
    configure_logging(
        verbose=getattr(args, 'verbose', False),
        quiet=getattr(args, 'quiet', False),
        log_file=args.log_file,
        use_colors=not args.no_color,
    )

    if args.command == 'init':
        return cmd_init(args)
    elif args.command == 'generate':
        return cmd_generate(args)
    elif args.command == 'ingest':
        return cmd_ingest(args)
    else:
        parser.print_help()
        return 0


if __name__ == '__main__':
    sys.exit(main())
