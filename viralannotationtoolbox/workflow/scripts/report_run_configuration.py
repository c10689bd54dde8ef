"""CLI entry point into the utility that reports (for informational purposes or debugging) the
configuration of a Nextflow-managed run before it starts.
"""
import argparse

from viralannotationtoolbox.workflow.common.cli_arguments import add_argument
from viralannotationtoolbox.workflow.common.cli_arguments import add_parameter_arguments
from viralannotationtoolbox.workflow.common.governor import govern
from viralannotationtoolbox.workflow.common.parameters import get_parameter_names
from viralannotationtoolbox.workflow.common.run_configuration_reporter import \
    RunConfigurationReporter


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog='vat workflow report-run-configuration',
        add_help=False,
        description='''Log information about a consensus annotation run configuration.'''
    )
    add_argument(parser, 'config file')
    add_parameter_arguments(parser)
    args = parser.parse_args(argv)
    cli_values = {name: getattr(args, name) for name in get_parameter_names()}
    RunConfigurationReporter(govern(cli_values, config_file=args.config_file))


if __name__ == '__main__':
    main()
