"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if the application runs in a local environment, False otherwise.

Example:
    >>> from linkshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from linkshortener.utils.constants import APP_ENV_ENV, AWS_SAM_LOCAL_ENV


def running_locally() -> bool:
    """Check if the application is running locally

    An unset APP_ENV counts as local.

    Returns:
        bool: True if running locally, False otherwise.
    """
    env = os.getenv(APP_ENV_ENV, 'local').lower()
    return env == 'local' or os.getenv(AWS_SAM_LOCAL_ENV) == 'true'
