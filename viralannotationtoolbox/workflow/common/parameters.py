"""Pipeline parameters: defaults, configuration file, command-line overrides and validation."""
from configparser import ConfigParser
from configparser import Error as ConfigParserError
from os.path import exists
from os.path import expanduser
from os.path import join
from typing import Any
from typing import NamedTuple

from viralannotationtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

GENERAL_SECTION = 'general'
REPORTING_SECTION = 'reporting'
PIPELINE_INFO_DIRECTORY = 'pipeline_info'


class ConfigurationError(ValueError):
    """The pipeline configuration cannot be used to start a run."""


class PipelineConfig(NamedTuple):
    """The parameters of one run. Built once at startup, read-only afterwards.

    Parameters
    ----------
    consensus_dir: str | None
        Directory of consensus FASTA files to annotate. Required.
    output_dir: str
        Directory where the workflow publishes its results.
    vadr_model_dir: str | None
        VADR model library. When unset, the models bundled in the container are used.
    vadr_options: str
        Extra command-line options passed to ``v-annotate.pl``.
    table2asn_template: str | None
        Submission template (``.sbt``) passed to table2asn.
    table2asn_preprocess_script: str | None
    table2asn_postprocess_script: str | None
        Scripts run before and after table2asn, converting VADR output to and from its inputs.
    classification_script: str | None
    assembly_script: str | None
        Downstream classification and genome assembly scripts.
    publish_dir_mode: str
        How Nextflow publishes results into ``output_dir``.
    max_cpus: int | str
    max_memory: str
    max_time: str
        Ceilings that no single process request may exceed.
    profile: str
        Execution profile written into ``run.sh``.
    help: bool
        Print usage and exit.
    timeline: bool
    report: bool
    trace: bool
    dag: bool
        Execution reports written under ``<output_dir>/pipeline_info``.
    """
    consensus_dir: str | None = None
    output_dir: str = 'results'
    vadr_model_dir: str | None = None
    vadr_options: str = ''
    table2asn_template: str | None = None
    table2asn_preprocess_script: str | None = None
    table2asn_postprocess_script: str | None = None
    classification_script: str | None = None
    assembly_script: str | None = None
    publish_dir_mode: str = 'copy'
    max_cpus: int | str = 16
    max_memory: str = '64GB'
    max_time: str = '48h'
    profile: str = 'docker'
    help: bool = False
    timeline: bool = True
    report: bool = True
    trace: bool = True
    dag: bool = True

    @property
    def tracedir(self) -> str:
        return join(self.output_dir, PIPELINE_INFO_DIRECTORY)

    def workflow_parameters(self) -> dict[str, Any]:
        """The values that appear in the ``params`` scope of the workflow configuration."""
        values = {name: getattr(self, name) for name in NEXTFLOW_PARAMETERS}
        if isinstance(self.max_cpus, str) and self.max_cpus.strip().isdigit():
            values['max_cpus'] = int(self.max_cpus)
        values['tracedir'] = self.tracedir
        return values


class ParameterSpec(NamedTuple):
    name: str
    description: str
    metavar: str = ''
    is_flag: bool = False
    required: bool = False


PARAMETERS: tuple[ParameterSpec, ...] = (
    ParameterSpec('consensus_dir', 'Directory containing consensus FASTA files.', 'DIR',
                  required=True),
    ParameterSpec('output_dir', 'Directory for published results.', 'DIR'),
    ParameterSpec('vadr_model_dir', 'VADR model directory.', 'DIR'),
    ParameterSpec('vadr_options', 'Additional options for v-annotate.pl.', 'OPTIONS'),
    ParameterSpec('table2asn_template', 'Submission template (.sbt) for table2asn.', 'FILE'),
    ParameterSpec('table2asn_preprocess_script', 'Script preparing table2asn inputs.', 'FILE'),
    ParameterSpec('table2asn_postprocess_script', 'Script processing table2asn outputs.', 'FILE'),
    ParameterSpec('classification_script', 'Classification script.', 'FILE'),
    ParameterSpec('assembly_script', 'Genome assembly script.', 'FILE'),
    ParameterSpec('publish_dir_mode', 'Nextflow publishDir mode.', 'MODE'),
    ParameterSpec('max_cpus', 'Maximum CPUs any process may request.', 'N'),
    ParameterSpec('max_memory', 'Maximum memory any process may request.', 'SIZE'),
    ParameterSpec('max_time', 'Maximum time any process may request.', 'DURATION'),
    ParameterSpec('profile', 'Execution profile used in run.sh.', 'NAME'),
    ParameterSpec('help', 'Show this message and exit.', is_flag=True),
)

NEXTFLOW_PARAMETERS = tuple(spec.name for spec in PARAMETERS if spec.name != 'profile')
REPORT_NAMES = ('timeline', 'report', 'trace', 'dag')


def get_parameter_names() -> list[str]:
    return [spec.name for spec in PARAMETERS]


def _read_configuration_file(config_file: str) -> dict[str, Any]:
    path = expanduser(config_file)
    if not exists(path):
        raise ConfigurationError(f'Configuration file not found: {config_file}')
    parser = ConfigParser(interpolation=None)
    try:
        parser.read(path)
    except ConfigParserError as error:
        raise ConfigurationError(f'Could not parse {config_file}: {error}') from error
    values: dict[str, Any] = {}
    if parser.has_section(GENERAL_SECTION):
        known = get_parameter_names()
        for key, value in parser.items(GENERAL_SECTION):
            if key not in known:
                raise ConfigurationError(
                    f'Unknown parameter "{key}" in [{GENERAL_SECTION}] of {config_file}. '
                    f'Known parameters: {", ".join(known)}'
                )
            if key == 'help':
                values[key] = _read_boolean(parser, GENERAL_SECTION, key)
            else:
                values[key] = value
    if parser.has_section(REPORTING_SECTION):
        for key in parser.options(REPORTING_SECTION):
            if key not in REPORT_NAMES:
                raise ConfigurationError(
                    f'Unknown report "{key}" in [{REPORTING_SECTION}]. '
                    f'Expected one of: {", ".join(REPORT_NAMES)}'
                )
            values[key] = _read_boolean(parser, REPORTING_SECTION, key)
    logger.debug('Read %s values from %s.', len(values), path)
    return values


def _read_boolean(parser: ConfigParser, section: str, key: str) -> bool:
    try:
        return parser.getboolean(section, key)
    except ValueError as error:
        raise ConfigurationError(f'[{section}] {key} must be a boolean.') from error


def load_pipeline_config(
    cli_values: dict[str, Any] | None = None,
    config_file: str | None = None,
) -> PipelineConfig:
    """Defaults, overridden by the configuration file, overridden by command-line values.

    Command-line values that are ``None`` were not supplied and do not override anything.
    """
    values: dict[str, Any] = {}
    if config_file is not None:
        values.update(_read_configuration_file(config_file))
    if cli_values is not None:
        values.update({
            key: value for key, value in cli_values.items()
            if value is not None and key in PipelineConfig._fields
        })
    return PipelineConfig(**values)


def validate_required_inputs(config: PipelineConfig) -> None:
    for spec in PARAMETERS:
        if not spec.required:
            continue
        value = getattr(config, spec.name)
        if value is None or (isinstance(value, str) and value.strip() == ''):
            logger.error('Missing required parameter --%s.', spec.name)
            raise ConfigurationError(
                f'--{spec.name} is required. Use --help for usage information.'
            )
    if not exists(expanduser(config.consensus_dir)):
        logger.warning(
            'Consensus directory %s is not present locally; the workflow engine must be able '
            'to reach it.',
            config.consensus_dir,
        )
