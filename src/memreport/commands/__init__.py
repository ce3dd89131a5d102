import argparse
import logging
import sys
import textwrap
from typing import List
from typing import Optional

from rich.console import Console
from rich.markup import escape

from memreport._errors import MemreportCommandError
from memreport._errors import MemreportError
from memreport._utils import set_log_level
from memreport._version import __version__

from .analyze import AnalyzeCommand
from .protocol import Command

_EPILOG = textwrap.dedent(
    """\
    The report is written as JSON next to the capture unless --output is given.
    """
)

_DESCRIPTION = textwrap.dedent(
    """\
    Memory analysis for allocation captures

    Builds a call tree, a per-function summary, leak candidates, a page view
    and a per-type summary from the snapshots stored in a capture.

        Example:

        $ python3 -m memreport capture.json
    """
)


def get_argument_parser(command: Optional[Command] = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=_DESCRIPTION,
        prog="memreport",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=_EPILOG,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity. Option is additive and can be specified up to 2 times",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=__version__,
        help="Displays the current version of memreport",
    )

    command = command if command is not None else AnalyzeCommand()
    parser.set_defaults(entrypoint=command.run)
    command.prepare_parser(parser)
    return parser


def determine_logging_level_from_verbosity(
    verbose_level: int,
) -> int:  # pragma: no cover
    if verbose_level == 0:
        return logging.WARNING
    elif verbose_level == 1:
        return logging.INFO
    else:
        return logging.DEBUG


def main(args: Optional[List[str]] = None, command: Optional[Command] = None) -> int:
    if args is None:
        args = sys.argv[1:]

    parser = get_argument_parser(command)
    arg_values = parser.parse_args(args=args)
    set_log_level(determine_logging_level_from_verbosity(arg_values.verbose))

    try:
        arg_values.entrypoint(arg_values, parser)
    except MemreportCommandError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    except MemreportError as e:
        print(e, file=sys.stderr)
        return 1
    except Exception as e:
        console = Console(stderr=True)
        console.print(f"[bold red]Error:[/] {escape(str(e))}")
        console.print_exception()
        return 1
    else:
        return 0
