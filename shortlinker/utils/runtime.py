"""Runtime environment detection

Functions:
    env_flag(name, default=False) -> bool:
        Parse a boolean environment variable strictly.
    running_locally() -> bool:
        True under `sam local invoke` or a local APP_ENV.

Example:
    >>> os.environ['SHORTLINKER_ATOMIC_WRITES'] = 'yes'
    >>> env_flag('SHORTLINKER_ATOMIC_WRITES')
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from shortlinker.constants import ENV
from shortlinker.exceptions import BadConfigurationError


TRUE_VALUES = frozenset({'1', 'true', 'yes', 'on'})
FALSE_VALUES = frozenset({'0', 'false', 'no', 'off', ''})
LOCAL_ENVIRONMENTS = frozenset({'local'})


def env_flag(name: str, default: bool = False) -> bool:
    """Read environment variable `name` as a boolean

    Raises:
        BadConfigurationError:
            If the variable is set to something that isn't a recognizable boolean.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default

    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise BadConfigurationError(f'Expected a boolean value for {name} (given value: {raw!r}).')


def running_locally() -> bool:
    # Never raises: guarantee_500_response calls this while handling errors
    if os.getenv(ENV.App.APP_ENV, '').strip().lower() in LOCAL_ENVIRONMENTS:
        return True
    return os.getenv(ENV.App.AWS_SAM_LOCAL, '').strip().lower() in TRUE_VALUES
