import pytest

from viralannotationtoolbox.workflow.common.resource_units import (
    CpuCount,
    Duration,
    MemorySize,
    ResourceCoercionError,
    HOUR,
    MINUTE,
    DAY,
    coerce,
    format_duration,
    format_memory,
    parse_cpus,
    parse_duration,
    parse_memory,
)

GB = 1024 ** 3


def test_parse_cpus():
    assert parse_cpus(4) == CpuCount(4)
    assert parse_cpus('32') == CpuCount(32)
    assert parse_cpus(' 8 ') == CpuCount(8)
    for malformed in ('abc', '4.5', '', -1, True, None, 2.0):
        with pytest.raises(ResourceCoercionError):
            parse_cpus(malformed)


def test_parse_memory_forms():
    assert parse_memory('64GB').size_bytes == 64 * GB
    assert parse_memory('64.GB').size_bytes == 64 * GB
    assert parse_memory('64 GB').size_bytes == 64 * GB
    assert parse_memory('64 gb').size_bytes == 64 * GB
    assert parse_memory('64G').size_bytes == 64 * GB
    assert parse_memory('1.5 GB').size_bytes == int(1.5 * GB)
    assert parse_memory('512 MB').size_bytes == 512 * 1024 ** 2
    assert parse_memory('2 TB').size_bytes == 2 * 1024 ** 4
    assert parse_memory('100').size_bytes == 100
    assert parse_memory(2048).size_bytes == 2048


def test_parse_is_exact_for_large_values():
    assert parse_memory('9007199254740993').size_bytes == 9007199254740993
    assert parse_memory('9007199254740993 B').size_bytes == 9007199254740993
    assert parse_memory('8 PB').size_bytes == 9007199254740992
    assert parse_memory('0.1 KB').size_bytes == 102
    assert parse_duration('9007199254740993ms').milliseconds == 9007199254740993
    assert parse_duration('0.1s').milliseconds == 100


def test_parse_memory_keeps_text():
    assert str(parse_memory('64GB')) == '64GB'
    assert str(parse_memory('  12 GB ')) == '12 GB'


def test_parse_memory_malformed():
    for malformed in ('lots', '64 XB', 'GB', '', '-4GB', '64..GB', '64. GB', None, 1.5,
                      False):
        with pytest.raises(ResourceCoercionError):
            parse_memory(malformed)


def test_parse_duration_forms():
    assert parse_duration('48h').milliseconds == 48 * HOUR
    assert parse_duration('2d').milliseconds == 2 * DAY
    assert parse_duration('1d 2h').milliseconds == DAY + 2 * HOUR
    assert parse_duration('1h30m').milliseconds == HOUR + 30 * MINUTE
    assert parse_duration('2.5h').milliseconds == int(2.5 * HOUR)
    assert parse_duration('90 minutes').milliseconds == 90 * MINUTE
    assert parse_duration('3 hours').milliseconds == 3 * HOUR
    assert parse_duration('500ms').milliseconds == 500
    assert parse_duration('1500').milliseconds == 1500
    assert str(parse_duration('48h')) == '48h'


def test_parse_duration_malformed():
    for malformed in ('soon', '48x', 'h48', '', '1d-2h', None, 3.5):
        with pytest.raises(ResourceCoercionError):
            parse_duration(malformed)


def test_coerce_dispatches_on_kind():
    assert isinstance(coerce('4', 'cpus'), CpuCount)
    assert isinstance(coerce('4GB', 'memory'), MemorySize)
    assert isinstance(coerce('4h', 'time'), Duration)
    with pytest.raises(ValueError):
        coerce('4', 'disk')


def test_coercion_error_carries_value_and_kind():
    with pytest.raises(ResourceCoercionError) as error:
        parse_duration('forever')
    assert error.value.value == 'forever'
    assert error.value.kind == 'time'
    assert 'forever' in str(error.value)


def test_scaling():
    assert CpuCount(2).scaled(2) == CpuCount(4)
    assert str(parse_memory('6 GB').scaled(2)) == '12 GB'
    assert str(parse_duration('4h').scaled(2)) == '8h'
    assert str(parse_duration('16h').scaled(2)) == '1d 8h'


def test_formatting():
    assert format_memory(64 * GB) == '64 GB'
    assert format_memory(1536 * 1024 ** 2) == '1536 MB'
    assert format_memory(1000) == '1000 B'
    assert format_memory(0) == '0 B'
    assert format_duration(0) == '0ms'
    assert format_duration(90 * MINUTE) == '1h 30m'
    assert format_duration(DAY + 1500) == '1d 1s 500ms'
