"""Typed resource payloads: CPU counts, memory sizes, and durations.

Memory sizes and durations are parsed from the textual forms accepted by Nextflow process
directives, e.g. ``64GB``, ``64.GB``, ``1.5 GB``, ``48h``, ``1d 2h``, ``1h30m``. Values keep the
text they were parsed from, so that a clamped value renders exactly as the user wrote it.
"""
from fractions import Fraction
import re
from typing import Literal
from typing import NamedTuple
from typing import Union
from typing import get_args

ResourceKind = Literal['cpus', 'memory', 'time']

MEMORY_UNITS = ('B', 'KB', 'MB', 'GB', 'TB', 'PB', 'EB')
MEMORY_PATTERN = re.compile(r'^(\d+(?:\.\d+)?)(?:\s*|\.)([kmgtpe])?b?$', re.IGNORECASE)

MILLISECOND = 1
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR

DURATION_UNITS = {
    'ms': MILLISECOND, 'milli': MILLISECOND, 'millis': MILLISECOND,
    's': SECOND, 'sec': SECOND, 'second': SECOND, 'seconds': SECOND,
    'm': MINUTE, 'min': MINUTE, 'mins': MINUTE, 'minute': MINUTE, 'minutes': MINUTE,
    'h': HOUR, 'hour': HOUR, 'hours': HOUR,
    'd': DAY, 'day': DAY, 'days': DAY,
}
DURATION_GROUP = re.compile(r'(\d+(?:\.\d+)?)\s*([a-z]+)', re.IGNORECASE)
DURATION_PATTERN = re.compile(r'^(?:\s*\d+(?:\.\d+)?\s*[a-z]+)+\s*$', re.IGNORECASE)


class ResourceCoercionError(ValueError):
    """A resource value could not be interpreted as the expected kind."""

    def __init__(self, value: object, kind: ResourceKind, detail: str = ''):
        message = f'Cannot interpret {value!r} as {kind}.'
        if detail:
            message = f'{message} {detail}'
        super().__init__(message)
        self.value = value
        self.kind = kind


class CpuCount(NamedTuple):
    count: int

    def scaled(self, factor: int) -> 'CpuCount':
        return CpuCount(self.count * factor)

    def __str__(self) -> str:
        return str(self.count)


class MemorySize(NamedTuple):
    size_bytes: int
    text: str

    @classmethod
    def from_bytes(cls, number_bytes: int) -> 'MemorySize':
        return cls(number_bytes, format_memory(number_bytes))

    def scaled(self, factor: int) -> 'MemorySize':
        return MemorySize.from_bytes(self.size_bytes * factor)

    def __str__(self) -> str:
        return self.text


class Duration(NamedTuple):
    milliseconds: int
    text: str

    @classmethod
    def from_milliseconds(cls, milliseconds: int) -> 'Duration':
        return cls(milliseconds, format_duration(milliseconds))

    def scaled(self, factor: int) -> 'Duration':
        return Duration.from_milliseconds(self.milliseconds * factor)

    def __str__(self) -> str:
        return self.text


Resource = Union[CpuCount, MemorySize, Duration]


def parse_cpus(value: object) -> CpuCount:
    if isinstance(value, CpuCount):
        return value
    if isinstance(value, bool):
        raise ResourceCoercionError(value, 'cpus', 'A boolean is not a CPU count.')
    if isinstance(value, int):
        count = value
    elif isinstance(value, str) and re.fullmatch(r'\s*\d+\s*', value):
        count = int(value)
    else:
        raise ResourceCoercionError(value, 'cpus', 'Expected a non-negative integer.')
    if count < 0:
        raise ResourceCoercionError(value, 'cpus', 'Expected a non-negative integer.')
    return CpuCount(count)


def parse_memory(value: object) -> MemorySize:
    if isinstance(value, MemorySize):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return MemorySize(value, str(value))
    if not isinstance(value, str):
        raise ResourceCoercionError(value, 'memory', 'Expected a size like "64GB".')
    text = value.strip()
    match = MEMORY_PATTERN.match(text)
    if match is None:
        raise ResourceCoercionError(value, 'memory', 'Expected a size like "64GB".')
    number, prefix = match.groups()
    exponent = 0 if prefix is None else MEMORY_UNITS.index(f'{prefix.upper()}B')
    return MemorySize(int(Fraction(number) * 1024 ** exponent), text)


def parse_duration(value: object) -> Duration:
    if isinstance(value, Duration):
        return value
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return Duration(value, str(value))
    if not isinstance(value, str):
        raise ResourceCoercionError(value, 'time', 'Expected a duration like "48h".')
    text = value.strip()
    if re.fullmatch(r'\d+', text):
        return Duration(int(text), text)
    if not DURATION_PATTERN.match(text):
        raise ResourceCoercionError(value, 'time', 'Expected a duration like "48h".')
    total = Fraction(0)
    for number, unit in DURATION_GROUP.findall(text):
        multiplier = DURATION_UNITS.get(unit.lower())
        if multiplier is None:
            raise ResourceCoercionError(value, 'time', f'Unknown time unit "{unit}".')
        total += Fraction(number) * multiplier
    return Duration(int(total), text)


def coerce(value: object, kind: ResourceKind) -> Resource:
    """Interpret ``value`` as a resource of the given kind.

    Raises ResourceCoercionError when the value is malformed for that kind.
    """
    match kind:
        case 'cpus':
            return parse_cpus(value)
        case 'memory':
            return parse_memory(value)
        case 'time':
            return parse_duration(value)
        case _:
            raise ValueError(f'Resource kind must be one of {get_args(ResourceKind)}, got {kind!r}.')


def format_memory(number_bytes: int) -> str:
    exponent = 0
    while number_bytes > 0 and exponent < len(MEMORY_UNITS) - 1 \
            and number_bytes % 1024 ** (exponent + 1) == 0:
        exponent += 1
    return f'{number_bytes // 1024 ** exponent} {MEMORY_UNITS[exponent]}'


def format_duration(milliseconds: int) -> str:
    if milliseconds == 0:
        return '0ms'
    parts = []
    remainder = milliseconds
    for unit, size in (('d', DAY), ('h', HOUR), ('m', MINUTE), ('s', SECOND), ('ms', MILLISECOND)):
        quantity, remainder = divmod(remainder, size)
        if quantity:
            parts.append(f'{quantity}{unit}')
    return ' '.join(parts)
