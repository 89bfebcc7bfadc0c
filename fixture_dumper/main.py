#!/usr/bin/env python3
"""
MySQL Fixture Dumper - CLI Entry Point
======================================
Dump a MySQL test database (whole or per table) and restore it between
test runs, skipping tables whose checksum did not change.
"""

import argparse
import logging
import sys

import yaml

from . import dump_manager
from .config import ConfigLoader
from .utils import log_restore_summary, mask_password, setup_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog='fixture-dumper',
        description='MySQL Fixture Dumper - Dump and restore test fixture databases'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)
    subparsers.add_parser('create', help='Dump the whole database')
    subparsers.add_parser('dump-tables', help='Dump each table with its checksum')
    subparsers.add_parser('check', help='Check that the database dump exists')
    subparsers.add_parser('restore', help='Restore the whole database dump')

    force_help = 'Restore tables even if their checksum is unchanged'

    restore_tables = subparsers.add_parser('restore-tables', help='Restore the given tables')
    restore_tables.add_argument('tables', nargs='+', help='Table names without prefix')
    restore_tables.add_argument('--force', action='store_true', help=force_help)

    restore_all = subparsers.add_parser('restore-all-tables', help='Restore all modified tables')
    restore_all.add_argument('--force', action='store_true', help=force_help)

    restore_matching = subparsers.add_parser(
        'restore-matching', help='Restore modified tables matching a regular expression'
    )
    restore_matching.add_argument('pattern', help='Regular expression on table names without prefix')
    restore_matching.add_argument('--force', action='store_true', help=force_help)

    return parser


def run_command(args: argparse.Namespace, config: ConfigLoader) -> None:
    """Dispatch a parsed command to the matching dump_manager entry point."""
    connection_config = config.get_connection_config()
    settings = config.get_dump_settings()

    if args.command == 'create':
        dump_manager.create(connection_config, settings)
        logging.info("Database dump created")
    elif args.command == 'dump-tables':
        tables = dump_manager.dump_tables(connection_config, settings)
        logging.info(f"Dumped {len(tables)} table(s)")
    elif args.command == 'check':
        dump_manager.check_dump(connection_config, settings)
        logging.info("Database dump found")
    elif args.command == 'restore':
        dump_manager.restore_db(connection_config, settings)
        logging.info("Database restored")
    elif args.command == 'restore-tables':
        log_restore_summary(dump_manager.restore_tables(
            connection_config, settings, args.tables, args.force
        ))
    elif args.command == 'restore-all-tables':
        log_restore_summary(dump_manager.restore_all_tables(
            connection_config, settings, args.force
        ))
    elif args.command == 'restore-matching':
        log_restore_summary(dump_manager.restore_matching_tables(
            connection_config, settings, args.pattern, args.force
        ))


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = ConfigLoader(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}")
        sys.exit(1)

    # Setup logging
    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    try:
        run_command(args, config)
    except Exception as e:
        password = str(config.get_database_settings().get('password') or '')
        logging.error(f"Fatal error: {mask_password(str(e), password)}")
        sys.exit(1)


if __name__ == '__main__':
    main()
