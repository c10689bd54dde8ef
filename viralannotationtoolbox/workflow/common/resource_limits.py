"""Clamping of per-process resource requests to the configured ceilings."""
from typing import NamedTuple
from typing import Union

from viralannotationtoolbox.workflow.common.parameters import PipelineConfig
from viralannotationtoolbox.workflow.common.resource_units import (
    CpuCount,
    Duration,
    MemorySize,
    Resource,
    ResourceCoercionError,
    ResourceKind,
    coerce,
)
from viralannotationtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)


class ResourceRequest(NamedTuple):
    cpus: object
    memory: object
    time: object


class ResourceCeiling(NamedTuple):
    """Upper bounds for every process. A dimension is ``None`` when its configured value was
    malformed, in which case requests of that kind pass through unclamped.
    """
    max_cpus: CpuCount | None
    max_memory: MemorySize | None
    max_time: Duration | None

    @classmethod
    def from_config(cls, config: PipelineConfig) -> 'ResourceCeiling':
        limits = {}
        for kind, name in (('cpus', 'max_cpus'), ('memory', 'max_memory'), ('time', 'max_time')):
            raw = getattr(config, name)
            try:
                limits[name] = coerce(raw, kind)
            except ResourceCoercionError as error:
                logger.warning('Ignoring --%s %r: %s', name, raw, error)
                limits[name] = None
        return cls(**limits)

    def limit_for(self, kind: ResourceKind) -> Resource | None:
        match kind:
            case 'cpus':
                return self.max_cpus
            case 'memory':
                return self.max_memory
            case 'time':
                return self.max_time
        raise ValueError(f'Unknown resource kind {kind!r}.')


class Clamped(NamedTuple):
    value: Resource
    kind: ResourceKind

    @property
    def resolved(self) -> Resource:
        return self.value


class CoercionWarning(NamedTuple):
    original: object
    kind: ResourceKind
    reason: str

    @property
    def resolved(self) -> object:
        return self.original


ClampResult = Union[Clamped, CoercionWarning]


def clamp(requested: Resource, ceiling: ResourceCeiling) -> Resource:
    """The smaller of the request and the ceiling of its kind, compared in native units."""
    match requested:
        case CpuCount(count=count):
            limit = ceiling.max_cpus
            if limit is not None and count > limit.count:
                return limit
        case MemorySize(size_bytes=size_bytes):
            limit = ceiling.max_memory
            if limit is not None and size_bytes > limit.size_bytes:
                return limit
        case Duration(milliseconds=milliseconds):
            limit = ceiling.max_time
            if limit is not None and milliseconds > limit.milliseconds:
                return limit
    return requested


def check_max(value: object, kind: ResourceKind, ceiling: ResourceCeiling) -> ClampResult:
    """Clamp a raw requested value of the given kind.

    A malformed request, or a malformed ceiling for that kind, is logged and reported as a
    CoercionWarning carrying the original value, which callers use unclamped.
    """
    if ceiling.limit_for(kind) is None:
        reason = f'No valid maximum {kind} is configured.'
        logger.warning('%s Using %r unclamped.', reason, value)
        return CoercionWarning(value, kind, reason)
    try:
        requested = coerce(value, kind)
    except ResourceCoercionError as error:
        logger.warning('Requested %s is not valid, using %r unclamped. %s', kind, value, error)
        return CoercionWarning(value, kind, str(error))
    clamped = clamp(requested, ceiling)
    if clamped is not requested:
        logger.debug('Clamped %s request %s to %s.', kind, requested, clamped)
    return Clamped(clamped, kind)


def clamp_request(request: ResourceRequest, ceiling: ResourceCeiling) -> ResourceRequest:
    return ResourceRequest(
        cpus=check_max(request.cpus, 'cpus', ceiling).resolved,
        memory=check_max(request.memory, 'memory', ceiling).resolved,
        time=check_max(request.time, 'time', ceiling).resolved,
    )
