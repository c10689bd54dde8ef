"""Renders the Nextflow configuration file for a governed run."""
from importlib.resources import as_file
from importlib.resources import files
from os.path import join
import re

from jinja2 import BaseLoader
from jinja2 import Environment

from viralannotationtoolbox import __version__
from viralannotationtoolbox.workflow.common.governor import GovernedRun
from viralannotationtoolbox.workflow.common.parameters import REPORT_NAMES
from viralannotationtoolbox.workflow.common.process_defaults import ERROR_STRATEGY
from viralannotationtoolbox.workflow.common.process_defaults import MAX_RETRIES
from viralannotationtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

NF_CONFIG_FILE = 'nextflow.config'


def groovy_literal(value: object) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    text = str(value).replace('\\', '\\\\').replace("'", "\\'")
    return f"'{text}'"


def _retrieve_from_library(subpackage: str, filename: str) -> str:
    filepath = files('.'.join(('viralannotationtoolbox.workflow', subpackage))).joinpath(filename)
    with as_file(filepath) as path:
        with open(path, 'rt', encoding='utf-8') as file:
            contents = file.read()
    return contents


def _create_environment() -> Environment:
    environment = Environment(loader=BaseLoader(), trim_blocks=True, lstrip_blocks=True,
                              keep_trailing_newline=True)
    environment.filters['groovy'] = groovy_literal
    return environment


def render_nextflow_config(run: GovernedRun) -> str:
    parameters = run.config.workflow_parameters()
    flags = [flag for profile in run.profiles for flag in profile.enabled_flags()]
    flags += [key for profile in run.profiles for key, _ in profile.settings]
    flags.append('process.executor')
    template = _create_environment().from_string(
        _retrieve_from_library('templates', NF_CONFIG_FILE + '.jinja')
    )
    contents = template.render(
        version=__version__,
        parameters=parameters,
        parameter_width=max(len(name) for name in parameters),
        processes=run.processes,
        error_strategy=ERROR_STRATEGY,
        max_retries=MAX_RETRIES,
        profiles=run.profiles,
        flag_width=max(len(flag) for flag in flags),
        reporting={name: getattr(run.config, name) for name in REPORT_NAMES},
    )
    return re.sub(r'\n{3,}', '\n\n', contents)


def write_config_file(run: GovernedRun, directory: str) -> str:
    path = join(directory, NF_CONFIG_FILE)
    with open(path, 'wt', encoding='utf-8') as file:
        file.write(render_nextflow_config(run))
    logger.info('Wrote %s.', path)
    return path
