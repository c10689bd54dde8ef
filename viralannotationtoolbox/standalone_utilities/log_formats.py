"""Colorized logger used throughout the toolbox."""
import logging
import re
from os import environ

from viralannotationtoolbox.standalone_utilities.configuration_settings import LOG_LEVEL_VARIABLE


class CustomFormatter(logging.Formatter):
    """A colorizing formatter, one format per level."""
    green = '\u001b[32m'
    bold_green = '\u001b[32;1m'
    magenta = '\u001b[35m'
    bold_yellow = '\u001b[33;1m'
    bold_red = '\u001b[31;1m'
    blue = '\u001b[34m'
    cyan = '\u001b[0;36m'
    div = '┃'
    reset = '\u001b[0m'

    prefix = blue + '%(asctime)s ' + reset + magenta
    location = blue + '%(lineno)3d' + reset + ' ' + magenta + '%(name)-37s' + reset
    suffix = cyan + div + reset + ' %(message)s'

    FORMATS = {
        logging.DEBUG:    prefix + '[ ' + reset +               '%(levelname)s' + reset + magenta + ' ] ' + location + suffix,
        logging.INFO:     prefix + '[ ' + reset + bold_green  + '%(levelname)s' + reset + magenta + '  ] ' + magenta + '%(name)-41s' + reset + suffix,
        logging.WARNING:  prefix + '['  + reset + bold_yellow + '%(levelname)s' + reset + magenta + '] ' + location + suffix,
        logging.ERROR:    prefix + '[ ' + reset + bold_red    + '%(levelname)s' + reset + magenta + ' ] ' + location + suffix,
        logging.CRITICAL: prefix + '['  + reset + bold_red    + '%(levelname)s' + reset + magenta + '] ' + location + suffix,
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno)
        formatter = logging.Formatter(log_fmt, datefmt='%m-%d %H:%M:%S')
        return formatter.format(record)


def get_log_level() -> int:
    name = environ.get(LOG_LEVEL_VARIABLE, 'DEBUG').upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.DEBUG
    return level


def colorized_logger(name):
    """A lightweight customization of the Python standard library's ``logging`` module
    loggers, to provide colorized log messages.

    Args:
        name (str):
            The name of the logger to requisition. Typically a module's
            ``__name__`` attribute.

    Returns:
        The logger.
    """
    logger = logging.getLogger(re.sub(r'^viralannotationtoolbox\.', '', name))
    level = get_log_level()
    logger.setLevel(level)
    if not logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setLevel(level)
        stream_handler.setFormatter(CustomFormatter())
        logger.addHandler(stream_handler)
    return logger
