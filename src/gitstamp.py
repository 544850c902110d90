"""gitstamp - Derive a release version from the nearest reachable git tag.

    Returns:
        int: Exit code
"""
import logging
import sys

import yaml

from constants import ExitCodes, Constants
from common.logging_utils import add_file_handler, configure_logging
from args import parse_args
from env_file import rewrite_env_file
from properties import build_properties, render_properties
from stamp_config import load_config

# Version resolution imports support both source and installed modes:
# - Source/tests: import via src.versioning.*
# - Installed console script: import via versioning.*
try:
    from src.versioning.build_number import build_ordinal
    from src.versioning.errors import NotFoundError
    from src.versioning.service import VersionResolutionService
except ImportError:  # Fall back when 'src' package is not available
    from versioning.build_number import build_ordinal
    from versioning.errors import NotFoundError
    from versioning.service import VersionResolutionService

logger = logging.getLogger(__name__)


def _setup_logging(args):
    """Configure logging based on CLI arguments."""
    level = None
    if args.LOG_LEVEL:
        level = getattr(logging, str(args.LOG_LEVEL).upper(), logging.INFO)
    configure_logging(level, quiet=args.QUIET)
    if args.LOG_FILE:
        add_file_handler(args.LOG_FILE)
        logger.debug("Logging to file: %s", args.LOG_FILE)


def run(args, service=None):
    """Resolve, publish and optionally stamp environment files.

    Args:
        args: Parsed CLI arguments namespace.
        service: VersionResolutionService to use (default: GitPython backed).

    Returns:
        int: Exit code
    """
    if args.BUILD_NUMBER_ONLY:
        print(build_ordinal())
        return ExitCodes.SUCCESS.value

    location = args.DIRECTORY
    try:
        config = load_config(args, location)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error("Config file couldn't be loaded: %s", e)
        return ExitCodes.FILE_ERROR.value

    if service is None:
        service = VersionResolutionService(hash_length=config.hash_length)

    try:
        resolved = service.resolve(location, config.reference)
    except NotFoundError as e:
        logger.error("Couldn't calculate git version: %s", e)
        return ExitCodes.NOT_FOUND.value

    if resolved is None:
        logger.warning("No git version found in '%s'", location)
        if args.ERROR_ON_MISSING:
            return ExitCodes.NO_VERSION.value
        return ExitCodes.SUCCESS.value

    properties = build_properties(resolved, config)
    for key, value in properties.items():
        logger.info("GIT %s=%s", key, value)

    for path in args.ENV_FILE:
        try:
            rewrite_env_file(path, resolved, config)
        except OSError as e:
            logger.error("Environment file couldn't be updated: %s", e)
            return ExitCodes.FILE_ERROR.value

    print(render_properties(properties, args.OUTPUT_FORMAT))
    return ExitCodes.SUCCESS.value


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    _setup_logging(args)
    logger.debug("Resolving %s in %s", args.REFERENCE or Constants.DEFAULT_REFERENCE, args.DIRECTORY)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
