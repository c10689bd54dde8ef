"""Configuration settings."""
from importlib.metadata import version
from importlib.metadata import PackageNotFoundError
from warnings import warn

PACKAGE_NAME = 'viralannotationtoolbox'
LOG_LEVEL_VARIABLE = 'VAT_LOG_LEVEL'


def get_version():
    _version = 'unknown'
    try:
        _version = version(PACKAGE_NAME)
    except PackageNotFoundError:
        warn(f'{PACKAGE_NAME} package is used but not installed.')
    return _version
