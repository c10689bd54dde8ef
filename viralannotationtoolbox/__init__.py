"""Viral annotation toolbox python package."""
from viralannotationtoolbox.standalone_utilities.configuration_settings import get_version

submodule_names = ['workflow']

__version__ = get_version()
