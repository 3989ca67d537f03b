# Configuration settings should be set in app.config
# The JARES class attributes hold the defaults, environment variables are used as a last resort
import os
import logging
from flask import current_app
import jares
from typing import Any


def get_config(option: str) -> Any:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # KeyError: not set in the app config, RuntimeError: no app context
        result = getattr(jares.JARES, option, os.environ.get(option, None))
    return result


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return jares.log.getEffectiveLevel() < logging.INFO
