"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    NOT_FOUND = 2
    NO_VERSION = 3


class OutputFormats(Enum):
    """Output formats supported by the program.

    Args:
        Enum (string): Output formats supported by the program.
    """

    PROPERTIES = "properties"
    JSON = "json"
    ENV = "env"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    SUPPORTED_FORMATS = [
        OutputFormats.PROPERTIES.value,
        OutputFormats.JSON.value,
        OutputFormats.ENV.value,
    ]
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

    DEFAULT_REFERENCE = "HEAD"
    DEFAULT_PATTERN = "00.00.0"
    RELEASE_PATTERN = "00.00"
    HASH_LENGTH = 9
    CONFIG_FILE = "gitstamp.yml"

    # Environment overrides
    ENV_LOG_LEVEL = "GITSTAMP_LOG_LEVEL"
    ENV_PATTERN = "GITSTAMP_PATTERN"
    ENV_NIGHTLY = "GITSTAMP_NIGHTLY"
    ENV_REFERENCE = "GITSTAMP_REFERENCE"

    # Published property keys
    PROP_COMMIT_DATE = "git.commit.date"
    PROP_COMMIT_HASH = "git.commit.hash"
    PROP_COMMIT_BRANCH = "git.commit.branch"
    PROP_BUILD_NUMBER = "git.buildnumber"
    PROP_TAG = "git.tag"
    PROP_VERSION = "git.version"
    PROP_RELEASE = "git.release"
