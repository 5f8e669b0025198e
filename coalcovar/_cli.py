"""
_cli.py
=======
Command line interface for coalcovar.

Usage
-----
::

    coalcovar sim.out > etitj.txt           # matrix mode
    coalcovar --scalar sim.out              # single aggregate value
    python -m coalcovar -v sim.out          # with INFO logging on stderr

Matrix mode prints one value per line: first E(T_2·T_j) for j = 2..n, then
E(T_3·T_j) for j = 2..n, and so on.  Results go to stdout, log messages and
errors to stderr.  Any fatal error exits with status 1.
"""

import argparse
import logging
import os
import signal
import sys

import coalcovar
from coalcovar._estimate import estimate_etitj_file
from coalcovar._exceptions import (
    CoalcovarError,
    NewickParseError,
    TimeConsistencyError,
)
from coalcovar._utils import (
    DEFAULT_PRECISION,
    format_matrix_lines,
    format_scalar_result,
)


def set_sigpipe_handler():
    if os.name == "posix":
        # Set signal handler for SIGPIPE to quietly kill the program.
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)


def exit(message):
    sys.exit(message)


def configure_logging(verbosity: int) -> None:
    """
    Send package log records to stderr.

    verbosity < 0 shows errors only, 0 warnings, 1 info, 2 or more debug.
    """
    if verbosity < 0:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    logging.basicConfig(
        level=level, format="%(levelname)s: %(message)s", stream=sys.stderr
    )
    logging.getLogger("coalcovar").setLevel(level)


def run_estimate(args):
    mode = "scalar" if args.scalar else "matrix"
    try:
        accumulator = estimate_etitj_file(args.input, mode=mode)
        result = accumulator.result()
    except TimeConsistencyError:
        exit("Error in times")
    except NewickParseError as e:
        exit(f"Parse error: {e}")
    except CoalcovarError as e:
        exit(f"Error: {e}")
    except OSError as e:
        exit(f"Error reading {args.input}: {e.strerror or e}")

    if mode == "scalar":
        print(format_scalar_result(result))
    else:
        for line in format_matrix_lines(result, args.precision):
            print(line)


def non_negative_int(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0 (got {value})")
    return value


def get_coalcovar_parser():
    parser = argparse.ArgumentParser(
        prog="coalcovar",
        description=(
            "Estimate E(T_iT_j), the expected products of inter-coalescence "
            "intervals, from coalescent simulator tree output."
        ),
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {coalcovar.__version__}",
    )
    parser.add_argument(
        "input",
        help="Simulator output: a header ending with a '//' line, then one "
        "NEWICK tree per line",
    )
    parser.add_argument(
        "--scalar",
        "-s",
        action="store_true",
        default=False,
        help="Print a single E(T_iT_j) averaged over all interval pairs "
        "instead of the full matrix",
    )
    parser.add_argument(
        "--precision",
        "-p",
        type=non_negative_int,
        default=DEFAULT_PRECISION,
        help="Digits after the decimal point in matrix output "
        f"(default {DEFAULT_PRECISION})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log progress to stderr (-v info, -vv debug)",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        default=False,
        help="Only log errors",
    )
    parser.set_defaults(runner=run_estimate)
    return parser


def coalcovar_main(arg_list=None):
    set_sigpipe_handler()
    parser = get_coalcovar_parser()
    args = parser.parse_args(arg_list)
    configure_logging(-1 if args.quiet else args.verbose)
    args.runner(args)
