"""Single-pass startup sequence: help, validation, profile selection, process defaults."""
from typing import Any
from typing import NamedTuple

from viralannotationtoolbox.workflow.common.parameters import PipelineConfig
from viralannotationtoolbox.workflow.common.parameters import load_pipeline_config
from viralannotationtoolbox.workflow.common.parameters import validate_required_inputs
from viralannotationtoolbox.workflow.common.process_defaults import ResolvedProcess
from viralannotationtoolbox.workflow.common.process_defaults import assign_process_defaults
from viralannotationtoolbox.workflow.common.profiles import ExecutionProfile
from viralannotationtoolbox.workflow.common.profiles import PROFILES
from viralannotationtoolbox.workflow.common.profiles import select_profile
from viralannotationtoolbox.workflow.common.resource_limits import ResourceCeiling
from viralannotationtoolbox.workflow.common.usage import emit_help
from viralannotationtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


class GovernedRun(NamedTuple):
    config: PipelineConfig
    profile: ExecutionProfile
    ceiling: ResourceCeiling
    processes: list[ResolvedProcess]
    profiles: tuple[ExecutionProfile, ...] = PROFILES


def govern(cli_values: dict[str, Any], config_file: str | None = None) -> GovernedRun:
    """Resolve everything the workflow engine needs before it schedules any process.

    The help flag is honored before the configuration file is read or any value is validated,
    and required inputs are validated before any resource is clamped.
    """
    if cli_values.get('help'):
        emit_help()
    config = load_pipeline_config(cli_values, config_file)
    if config.help:
        emit_help()
    validate_required_inputs(config)
    profile = select_profile(config.profile)
    ceiling = ResourceCeiling.from_config(config)
    logger.info(
        'Ceilings: %s CPUs, %s memory, %s time.',
        ceiling.max_cpus, ceiling.max_memory, ceiling.max_time,
    )
    processes = assign_process_defaults(ceiling)
    return GovernedRun(config, profile, ceiling, processes)
