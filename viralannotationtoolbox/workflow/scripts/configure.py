"""CLI utility to configure a consensus annotation run in the current directory."""
from argparse import ArgumentParser
from os import chmod
from os import getcwd
from os import stat
from os.path import abspath
from os.path import join
from shlex import quote
from stat import S_IEXEC

from viralannotationtoolbox.workflow.common.cli_arguments import add_argument
from viralannotationtoolbox.workflow.common.cli_arguments import add_parameter_arguments
from viralannotationtoolbox.workflow.common.governor import GovernedRun
from viralannotationtoolbox.workflow.common.governor import govern
from viralannotationtoolbox.workflow.common.nextflow_config import NF_CONFIG_FILE
from viralannotationtoolbox.workflow.common.nextflow_config import write_config_file
from viralannotationtoolbox.workflow.common.parameters import get_parameter_names
from viralannotationtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger('vat workflow configure')


def _write_executable(path: str, lines: list[str]) -> None:
    with open(path, 'wt', encoding='utf-8') as file:
        file.write('#!/bin/sh\n\n')
        file.write('\n'.join(lines))
        file.write('\n')
    file_stat = stat(path)
    chmod(path, file_stat.st_mode | S_IEXEC)


def _record_configuration_command(
    cli_values: dict[str, str | bool | None],
    config_file: str | None,
    directory: str,
) -> None:
    tokens = ['vat workflow configure']
    if config_file is not None:
        tokens.append(f'--config-file={quote(abspath(config_file))}')
    for name in get_parameter_names():
        value = cli_values.get(name)
        if value is None or name == 'help':
            continue
        tokens.append(f'--{name}={quote(str(value))}')
    _write_executable(join(directory, 'configure.sh'), [' \\\n '.join(tokens)])


def _record_run_command(run: GovernedRun, directory: str) -> None:
    command = f'nextflow run . -c {NF_CONFIG_FILE} -profile {quote(run.profile.name)}'
    _write_executable(join(directory, 'run.sh'), [command])


def parse_arguments(argv: list[str] | None = None):
    """Process command line arguments."""
    parser = ArgumentParser(
        prog='vat workflow configure',
        add_help=False,
        description='Configure a consensus annotation run in the current directory. Writes '
        f'{NF_CONFIG_FILE}, configure.sh and run.sh.',
    )
    add_argument(parser, 'config file')
    add_parameter_arguments(parser)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, directory: str | None = None) -> GovernedRun:
    args = parse_arguments(argv)
    cli_values = {name: getattr(args, name) for name in get_parameter_names()}
    run = govern(cli_values, config_file=args.config_file)
    working_directory = getcwd() if directory is None else directory
    write_config_file(run, working_directory)
    _record_configuration_command(cli_values, args.config_file, working_directory)
    _record_run_command(run, working_directory)
    logger.info('Configured run with profile %s. Start it with ./run.sh', run.profile.name)
    return run


if __name__ == '__main__':
    main()
