#
# Copyright (C) 2024 University of Oxford
#
# This file is part of cumfreq.
#
# cumfreq is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# cumfreq is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with cumfreq.  If not, see <http://www.gnu.org/licenses/>.
#
"""
Command line interface to the cumfreq library.
"""
import argparse
import os
import signal
import sys

import daiquiri

import cumfreq
from . import core
from . import exceptions
from . import verification


def set_sigpipe_handler():
    if os.name == "posix":
        # Set signal handler for SIGPIPE to quietly kill the program.
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)


def setup_logging(args):
    log_level = "INFO"
    if args.quiet:
        log_level = "WARN"
    if args.debug or getattr(args, "verbose", False):
        log_level = "DEBUG"
    log_output = daiquiri.output.Stream(
        sys.stderr,
        formatter=daiquiri.formatter.ColorFormatter(fmt="[%(levelname)s] %(message)s"),
    )
    daiquiri.setup(level=log_level, outputs=[log_output])


def max_bits_value(value):
    int_value = int(value)
    if not 1 <= int_value <= core.MAX_VERIFY_BITS:
        msg = f"{value} is not between 1 and {core.MAX_VERIFY_BITS}"
        raise argparse.ArgumentTypeError(msg)
    return int_value


def run_verify(args):
    reports = verification.run_verification(args.max_bits, verbose=args.verbose)
    for report in reports:
        print(
            f"n={report.num_positions:<5d}",
            f"total={report.total:<8d}",
            f"prefix={report.num_prefix_checks:<6d}",
            f"range={report.num_range_checks:<8d}",
            f"inversion={report.num_inversion_checks}",
            sep="\t",
        )
    print(f"{len(reports)} trees verified")


def run_show(args):
    tree = cumfreq.FenwickTree.build(args.weights)
    print(tree, end="")
    for target in args.find:
        p = tree.find_by_cumulative(target)
        print(f"find_by_cumulative({target}) = {p}")


def add_verify_subcommand(subparsers):
    parser = subparsers.add_parser(
        "verify", help="Check trees of every power of two size against brute force."
    )
    parser.add_argument(
        "--max-bits",
        "-b",
        type=max_bits_value,
        default=10,
        help="Verify sizes up to 2**max_bits. Default: 10",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        default=False,
        help="Log a diagnostic line for every position and target checked",
    )
    parser.set_defaults(runner=run_verify)


def add_show_subcommand(subparsers):
    parser = subparsers.add_parser(
        "show", help="Build a tree from the given weights and display it."
    )
    parser.add_argument("weights", type=int, nargs="+", help="The weights")
    parser.add_argument(
        "--find",
        "-f",
        type=int,
        action="append",
        default=[],
        help="Print the result of find_by_cumulative for this target. "
        "May be given multiple times.",
    )
    parser.set_defaults(runner=run_show)


def get_cumfreq_parser():
    top_parser = argparse.ArgumentParser(
        description="Command line interface for cumfreq."
    )
    top_parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {cumfreq.__version__}"
    )
    group = top_parser.add_mutually_exclusive_group()
    group.add_argument(
        "--quiet", "-q", action="store_true", help="Only log warnings and errors"
    )
    group.add_argument(
        "--debug", "-D", action="store_true", help="Write out debug output"
    )
    subparsers = top_parser.add_subparsers(dest="subcommand")
    subparsers.required = True

    add_verify_subcommand(subparsers)
    add_show_subcommand(subparsers)

    return top_parser


def cumfreq_main(arg_list=None):
    set_sigpipe_handler()
    parser = get_cumfreq_parser()
    args = parser.parse_args(arg_list)
    setup_logging(args)
    try:
        args.runner(args)
    except exceptions.CumfreqException as e:
        parser.error(str(e))
