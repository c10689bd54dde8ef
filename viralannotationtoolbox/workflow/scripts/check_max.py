"""CLI utility that clamps one requested resource value to the configured maximum."""
from argparse import ArgumentParser

from viralannotationtoolbox.workflow.common.cli_arguments import add_argument
from viralannotationtoolbox.workflow.common.cli_arguments import add_parameter_arguments
from viralannotationtoolbox.workflow.common.parameters import load_pipeline_config
from viralannotationtoolbox.workflow.common.resource_limits import ResourceCeiling
from viralannotationtoolbox.workflow.common.resource_limits import check_max

CEILING_PARAMETERS = ['max_cpus', 'max_memory', 'max_time']


def parse_arguments(argv: list[str] | None = None):
    parser = ArgumentParser(
        prog='vat workflow check-max',
        description='Print the requested value clamped to the configured ceiling. Malformed '
        'values are printed unchanged.',
    )
    add_argument(parser, 'resource kind')
    add_argument(parser, 'resource value')
    add_argument(parser, 'config file')
    add_parameter_arguments(parser, names=CEILING_PARAMETERS)
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> str:
    args = parse_arguments(argv)
    config = load_pipeline_config(
        {name: getattr(args, name) for name in CEILING_PARAMETERS},
        config_file=args.config_file,
    )
    result = check_max(args.value, args.kind, ResourceCeiling.from_config(config))
    resolved = str(result.resolved)
    print(resolved)
    return resolved


if __name__ == '__main__':
    main()
