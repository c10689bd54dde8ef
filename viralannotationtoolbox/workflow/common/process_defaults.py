"""Default process resources, resolved against the ceilings before the workflow starts."""
from typing import NamedTuple

from viralannotationtoolbox.workflow.common.resource_limits import ResourceCeiling
from viralannotationtoolbox.workflow.common.resource_limits import check_max
from viralannotationtoolbox.workflow.common.resource_units import CpuCount
from viralannotationtoolbox.workflow.common.resource_units import ResourceKind
from viralannotationtoolbox.workflow.common.resource_units import coerce

RETRY_EXIT_STATUS = 143
MAX_RETRIES = 1
ERROR_STRATEGY = f"{{ task.exitStatus == {RETRY_EXIT_STATUS} ? 'retry' : 'finish' }}"


class ProcessResources(NamedTuple):
    """Base request for processes carrying ``label``, or for every process when ``label`` is
    None. Unset dimensions inherit the default process request. Memory and time grow with the
    attempt number; CPUs only when ``scale_cpus`` is set.
    """
    label: str | None
    cpus: int | None = None
    memory: str | None = None
    time: str | None = None
    scale_cpus: bool = False


PROCESS_RESOURCES: tuple[ProcessResources, ...] = (
    ProcessResources(None, cpus=1, memory='6 GB', time='4h', scale_cpus=True),
    ProcessResources('process_single', cpus=1, memory='6 GB', time='4h'),
    ProcessResources('process_low', cpus=2, memory='12 GB', time='4h'),
    ProcessResources('process_medium', cpus=6, memory='36 GB', time='8h'),
    ProcessResources('process_high', cpus=12, memory='72 GB', time='16h'),
    ProcessResources('process_long', time='20h'),
    ProcessResources('process_high_memory', memory='200 GB'),
)


class ResolvedDirective(NamedTuple):
    name: ResourceKind
    first_attempt: object
    retry_attempt: object

    @property
    def expression(self) -> str:
        first = _literal(self.name, self.first_attempt)
        retry = _literal(self.name, self.retry_attempt)
        if first == retry:
            return first
        return f'{{ task.attempt > 1 ? {retry} : {first} }}'


class ResolvedProcess(NamedTuple):
    label: str | None
    directives: tuple[ResolvedDirective, ...]


def _literal(kind: ResourceKind, value: object) -> str:
    if kind == 'cpus' and isinstance(value, (CpuCount, int)) and not isinstance(value, bool):
        return str(value)
    text = str(value).replace('\\', '\\\\').replace("'", "\\'")
    return f"'{text}'"


def _resolve(kind: ResourceKind, value: object, scale: bool,
             ceiling: ResourceCeiling) -> ResolvedDirective:
    first = check_max(value, kind, ceiling).resolved
    retry_request = coerce(value, kind).scaled(1 + MAX_RETRIES) if scale else value
    retry = check_max(retry_request, kind, ceiling).resolved
    return ResolvedDirective(kind, first, retry)


def assign_process_defaults(ceiling: ResourceCeiling) -> list[ResolvedProcess]:
    resolved = []
    for process in PROCESS_RESOURCES:
        directives = []
        for kind in ('cpus', 'memory', 'time'):
            value = getattr(process, kind)
            if value is None:
                continue
            scale = process.scale_cpus if kind == 'cpus' else True
            directives.append(_resolve(kind, value, scale, ceiling))
        resolved.append(ResolvedProcess(process.label, tuple(directives)))
    return resolved
