"""Execution profiles: which container backend or scheduler runs the workflow processes."""
from typing import Literal
from typing import NamedTuple
from typing import get_args

from viralannotationtoolbox.workflow.common.parameters import ConfigurationError
from viralannotationtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

ContainerBackend = Literal['docker', 'singularity', 'podman', 'conda']


class ExecutionProfile(NamedTuple):
    """A named bundle of execution settings.

    At most one container backend is enabled by a profile. Scheduler profiles enable none, and
    instead name the Nextflow executor that submits each process.
    """
    name: str
    description: str
    backend: ContainerBackend | None = None
    executor: str = 'local'
    settings: tuple[tuple[str, str | bool], ...] = ()

    def enabled_flags(self) -> dict[str, bool]:
        return {
            f'{backend}.enabled': backend == self.backend
            for backend in get_args(ContainerBackend)
        }

    @property
    def is_scheduler(self) -> bool:
        return self.executor != 'local'


PROFILES: tuple[ExecutionProfile, ...] = (
    ExecutionProfile(
        'docker', 'Run each process in a Docker container.', backend='docker',
        settings=(('docker.runOptions', '-u $(id -u):$(id -g)'),),
    ),
    ExecutionProfile(
        'singularity', 'Run each process in a Singularity container.', backend='singularity',
        settings=(('singularity.autoMounts', True),),
    ),
    ExecutionProfile('podman', 'Run each process in a Podman container.', backend='podman'),
    ExecutionProfile(
        'conda', 'Run each process in a Conda environment.', backend='conda',
        settings=(('conda.useMamba', False),),
    ),
    ExecutionProfile('slurm', 'Submit processes to a SLURM cluster.', executor='slurm'),
    ExecutionProfile('sge', 'Submit processes to a Sun Grid Engine cluster.', executor='sge'),
    ExecutionProfile('pbs', 'Submit processes to a PBS/Torque cluster.', executor='pbs'),
    ExecutionProfile('lsf', 'Submit processes to an LSF cluster.', executor='lsf'),
)


def get_profile_names() -> list[str]:
    return [profile.name for profile in PROFILES]


def select_profile(name: str) -> ExecutionProfile:
    by_name = {profile.name: profile for profile in PROFILES}
    key = name.strip().lower()
    if key not in by_name:
        raise ConfigurationError(
            f'Unknown profile "{name}". Choose one of: {", ".join(get_profile_names())}'
        )
    profile = by_name[key]
    if profile.backend is None:
        logger.info('Profile %s submits to the %s scheduler.', profile.name, profile.executor)
    else:
        logger.info('Profile %s enables the %s backend.', profile.name, profile.backend)
    return profile
