"""Command line interface: ``topoguide check|resolve|normalize|rules``."""
from __future__ import annotations

import argparse
import logging
import os
import sys

from topoguide import paths
from topoguide.checker import Checker
from topoguide.config import load_config
from topoguide.conventions import AVOIDED_TERMS
from topoguide.conventions import PREFERRED_TERMS
from topoguide.conventions import RULES
from topoguide.exceptions import ConfigurationError
from topoguide.exceptions import PathNotFoundError
from topoguide.exceptions import TopoGuideError

logger = logging.getLogger(__name__)

_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog='topoguide',
                                     description='Check simulator sources against the contributor conventions.')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Log more details (repeat for debug output)')
    parser.add_argument('--config', type=str,
                        help='Path to YAML configuration file')
    # Accept --config after the subcommand too.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config', type=str, default=argparse.SUPPRESS,
                        help='Path to YAML configuration file')
    subparsers = parser.add_subparsers(dest='command', required=True)

    check = subparsers.add_parser('check', parents=[common], help='Check files and directories')
    check.add_argument('paths', nargs='+',
                       help='Files or directories to check')
    check.add_argument('--select', action='append', default=[],
                       help='Only report rule codes with this prefix (repeatable)')
    check.add_argument('--ignore', action='append', default=[],
                       help='Do not report rule codes with this prefix (repeatable)')
    check.add_argument('--format', choices=('text', 'json'), default='text',
                       help='Output format')
    check.add_argument('--strict', action='store_true',
                       help='Fail on warnings as well as errors')

    resolve = subparsers.add_parser('resolve', parents=[common],
                                    help='Locate an existing file through the search paths')
    resolve.add_argument('path')
    resolve.add_argument('--search-path', action='append', default=[], dest='search_paths',
                         help='Directory to search (repeatable, in order)')
    kind = resolve.add_mutually_exclusive_group()
    kind.add_argument('--folder', action='store_const', const=False, dest='path_to_file',
                      help='Look for a folder instead of a file')
    kind.add_argument('--any', action='store_const', const=None, dest='path_to_file',
                      help='Accept a file or a folder')
    resolve.set_defaults(path_to_file=True)

    normalize = subparsers.add_parser('normalize', parents=[common], help='Prepare a path for writing')
    normalize.add_argument('path')
    normalize.add_argument('--prefix', type=str,
                           help='Directory that relative paths are joined onto')

    subparsers.add_parser('rules', parents=[common], help='List the rule codes')
    return parser.parse_args(argv)


def setup_logging(verbosity: int):
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = os.environ.get('TOPOGUIDE_LOG_LEVEL', 'WARNING').upper()
    try:
        logging.basicConfig(level=level, format=_LOG_FORMAT, stream=sys.stderr)
    except ValueError:
        logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT, stream=sys.stderr, force=True)
        logger.warning('Unknown log level {}; using WARNING.'.format(level))


def _check(args, config) -> int:
    config.select.extend(args.select)
    config.ignore.extend(args.ignore)
    report = Checker(config).check_paths(args.paths)
    if args.format == 'json':
        print(report.to_json())
    else:
        print(report.format_text())
    return report.exit_code(strict=args.strict)


def _resolve(args, config) -> int:
    try:
        print(paths.resolve_path(args.path, search_paths=args.search_paths or None, path_to_file=args.path_to_file))
    except PathNotFoundError as e:
        print(str(e), file=sys.stderr)
        return 1
    return 0


def _normalize(args, config) -> int:
    print(paths.normalize_path(args.path, prefix=args.prefix))
    return 0


def _rules(args, config) -> int:
    for rule in RULES.values():
        print('{}  {:<7}  {}'.format(rule.code, rule.severity, rule.summary))
    print()
    print('Preferred terms: {}'.format(', '.join(PREFERRED_TERMS)))
    print('Avoided terms: {}'.format(', '.join(sorted(AVOIDED_TERMS))))
    return 0


_COMMANDS = {'check': _check, 'resolve': _resolve, 'normalize': _normalize, 'rules': _rules}


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        config = load_config(args.config)
        context = config.path_context()
        with paths.search_paths(*context.search_paths, prefix=context.prefix):
            return _COMMANDS[args.command](args, config)
    except ConfigurationError as e:
        print('Configuration error: {}'.format(e), file=sys.stderr)
        return 2
    except TopoGuideError as e:
        logger.error(str(e))
        return 2


if __name__ == '__main__':
    sys.exit(main())
