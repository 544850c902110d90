"""Argument parsing functionality for gitstamp."""

import argparse
from constants import Constants

def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="gitstamp",
        description=(
            "gitstamp - Derive a release version from the nearest git tag"
        ),
        add_help=True,
    )

    parser.add_argument("-d", "--directory",
                        dest="DIRECTORY",
                        help="Path inside the git repository (default: current directory)",
                        action="store", type=str,
                        default=".")
    parser.add_argument("--ref",
                        dest="REFERENCE",
                        help="Commit to describe (default: HEAD)",
                        action="store", type=str)
    parser.add_argument("-p", "--pattern",
                        dest="PATTERN",
                        help="Version mask, e.g. 00.00.0 or 0000.00-0+0",
                        action="store", type=str)
    parser.add_argument("--nightly",
                        dest="NIGHTLY",
                        help="Publish the next patch version of the resolved tag.",
                        action="store_true")

    parser.add_argument("-f", "--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (properties, json or env); defaults to properties.",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS,
                        default="properties")
    parser.add_argument("--env-file",
                        dest="ENV_FILE",
                        help="Rewrite GIT_* assignments in this environment file",
                        action="append",
                        type=str,
                        default=[])
    parser.add_argument("--build-number",
                        dest="BUILD_NUMBER_ONLY",
                        help="Print only the build number and exit.",
                        action="store_true")
    parser.add_argument("--error-on-missing",
                        dest="ERROR_ON_MISSING",
                        help="Exit with a non-zero status code if no version tag is found.",
                        action="store_true")

    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level (default: GITSTAMP_LOG_LEVEL or INFO)",
                        action="store",
                        type=str,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only log errors to the console.",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
