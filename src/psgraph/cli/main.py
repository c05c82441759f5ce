"""CLI entry point: psgraph paper|bar|xy subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, NoReturn, cast

from psgraph.charts import BarChart, XYChart
from psgraph.config import get_output_dir, get_paper_name
from psgraph.constants import PAPER_SIZES
from psgraph.errors import ConfigurationError, DataShapeError, ResourceError
from psgraph.rendering.document import PostScriptDocument
from psgraph.rendering.paper import GraphPaper

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or PSGRAPH_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('PSGRAPH_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _output_path(args: argparse.Namespace) -> Path:
    if args.output:
        return Path(args.output)
    return get_output_dir() / args.command


def _options(args: argparse.Namespace) -> dict[str, dict[str, Any]]:
    """Collect chart options given on the command line; unset ones are left out."""
    layout: dict[str, Any] = {}
    x_axis: dict[str, Any] = {}
    y_axis: dict[str, Any] = {}
    if args.heading is not None:
        layout['heading'] = args.heading
    if args.x_title is not None:
        x_axis['title'] = args.x_title
    if args.y_title is not None:
        y_axis['title'] = args.y_title
    for name, group in (('x', x_axis), ('y', y_axis)):
        for end in ('low', 'high'):
            value = getattr(args, f'{name}_{end}', None)
            if value is not None:
                group[end] = value
    return {'layout': layout, 'x_axis': x_axis, 'y_axis': y_axis}


def _document(args: argparse.Namespace) -> PostScriptDocument:
    return PostScriptDocument(
        paper=args.paper,
        landscape=args.landscape,
        title=args.heading or '',
    )


def _paper_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Draw empty graph paper (paper subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; axis ranges, titles, paper and output.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        paper = GraphPaper(_options(args), _document(args))
        path = paper.output(_output_path(args))
    except (ConfigurationError, ResourceError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    print(path)
    return 0


def _chart_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Draw a bar or XY chart from a CSV file (bar and xy subcommands).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; data file, titles, paper and output.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    chart_cls = BarChart if args.command == 'bar' else XYChart
    key: bool | None = False if args.no_key else None
    try:
        chart = chart_cls(_options(args), key=key, document=_document(args))
        if args.data == '-':
            chart.build_chart(sys.stdin)
        else:
            chart.build_chart(args.data)
        path = chart.output(_output_path(args))
    except (ConfigurationError, DataShapeError, ResourceError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    print(path)
    return 0


def _add_common(sub: argparse.ArgumentParser) -> None:
    sub.add_argument(
        '-o',
        '--output',
        type=str,
        default=None,
        help='PostScript file (.ps added); default: subcommand name in PSGRAPH_OUTPUT_DIR',
    )
    sub.add_argument(
        '--paper',
        type=str,
        default=get_paper_name(),
        choices=list(PAPER_SIZES),
        help='Paper size; env: PSGRAPH_PAPER',
    )
    sub.add_argument('--landscape', action='store_true', help='Landscape orientation')
    sub.add_argument('--heading', type=str, default=None, help='Title above the graph')
    sub.add_argument('--x-title', type=str, default=None, help='X axis title')
    sub.add_argument('--y-title', type=str, default=None, help='Y axis title')
    sub.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')


def main() -> int:
    """Entry point for psgraph CLI (paper | bar | xy).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='psgraph',
        description='PostScript graph paper, bar charts and XY charts.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    paper_parser = subparsers.add_parser('paper', help='Draw empty graph paper')
    _add_common(paper_parser)
    for name in ('x', 'y'):
        paper_parser.add_argument(
            f'--{name}-low', type=float, default=None, help=f'{name.upper()} axis low value'
        )
        paper_parser.add_argument(
            f'--{name}-high', type=float, default=None, help=f'{name.upper()} axis high value'
        )
    paper_parser.set_defaults(func=_paper_cmd)

    bar_parser = subparsers.add_parser('bar', help='Bar chart from CSV (labels, then series)')
    bar_parser.add_argument('data', type=str, help="CSV file with a heading row, or '-' for stdin")
    bar_parser.add_argument('--no-key', action='store_true', help='Omit the key')
    _add_common(bar_parser)
    bar_parser.set_defaults(func=_chart_cmd)

    xy_parser = subparsers.add_parser('xy', help='XY chart from CSV (x, then y series)')
    xy_parser.add_argument('data', type=str, help="CSV file with a heading row, or '-' for stdin")
    xy_parser.add_argument('--no-key', action='store_true', help='Omit the key')
    for name in ('x', 'y'):
        xy_parser.add_argument(
            f'--{name}-low', type=float, default=None, help=f'{name.upper()} axis low value'
        )
        xy_parser.add_argument(
            f'--{name}-high', type=float, default=None, help=f'{name.upper()} axis high value'
        )
    _add_common(xy_parser)
    xy_parser.set_defaults(func=_chart_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    logger.debug('Command: %s', args.command)
    return cast(int, args.func(parser, args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
