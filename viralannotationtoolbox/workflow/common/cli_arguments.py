"""CLI arguments solicitation."""
from argparse import ArgumentParser
from typing import Literal
from typing import get_args

from viralannotationtoolbox.workflow.common.parameters import PARAMETERS
from viralannotationtoolbox.workflow.common.resource_units import ResourceKind

SettingArgumentName = Literal['config file', 'resource kind', 'resource value']


def add_argument(parser: ArgumentParser, name: SettingArgumentName):
    if name == 'config file':
        parser.add_argument('--config-file', dest='config_file', type=str, required=False,
                            help='An INI file with a [general] section of parameter values and an'
                            ' optional [reporting] section.')
    if name == 'resource kind':
        parser.add_argument('--kind', dest='kind', choices=get_args(ResourceKind), required=True,
                            help='The kind of resource being requested.')
    if name == 'resource value':
        parser.add_argument('--value', dest='value', type=str, required=True,
                            help='The requested value, e.g. 32, "128GB" or "72h".')


def add_parameter_arguments(parser: ArgumentParser, names: list[str] | None = None) -> None:
    """Adds one ``--<name>`` option per pipeline parameter.

    Values are kept as strings and default to ``None``, so that values not given on the command
    line do not override the configuration file, and malformed values do not stop ``--help``.
    """
    for spec in PARAMETERS:
        if names is not None and spec.name not in names:
            continue
        if spec.is_flag:
            parser.add_argument(f'--{spec.name}', dest=spec.name, action='store_true',
                                default=None, help=spec.description)
        else:
            parser.add_argument(f'--{spec.name}', dest=spec.name, type=str, default=None,
                                metavar=spec.metavar or None, help=spec.description)
