"""Usage text for the workflow parameters."""
import sys

from viralannotationtoolbox import __version__
from viralannotationtoolbox.workflow.common.parameters import PARAMETERS
from viralannotationtoolbox.workflow.common.parameters import PipelineConfig
from viralannotationtoolbox.workflow.common.profiles import PROFILES

USAGE_HEADER = """viralannotationtoolbox v{version}

Annotates viral consensus sequences with VADR, converts the annotations with table2asn, then
hands the results to the classification and assembly scripts.

Usage:
    vat workflow configure --consensus_dir <dir> [options]
    ./run.sh
"""


def _describe_default(name: str) -> str:
    default = PipelineConfig._field_defaults.get(name)
    if default is None or default == '' or isinstance(default, bool):
        return ''
    return f' (default: {default})'


def get_usage_text() -> str:
    width = max(len(spec.name) + len(spec.metavar) for spec in PARAMETERS) + 4
    lines = [USAGE_HEADER.format(version=__version__)]
    for title, required in (('Required arguments:', True), ('Optional arguments:', False)):
        lines.append(title)
        for spec in PARAMETERS:
            if spec.required != required:
                continue
            flag = f'--{spec.name} {spec.metavar}'.rstrip()
            lines.append(f'    {flag.ljust(width)} {spec.description}{_describe_default(spec.name)}')
        lines.append('')
    lines.append('Profiles:')
    profile_width = max(len(profile.name) for profile in PROFILES) + 2
    for profile in PROFILES:
        lines.append(f'    {profile.name.ljust(profile_width)} {profile.description}')
    lines.append('')
    lines.append('A configuration file (--config-file) may set any parameter under [general], and')
    lines.append('enable or disable the timeline, report, trace and dag outputs under [reporting].')
    return '\n'.join(lines)


def emit_help() -> None:
    """Print the usage text and exit successfully."""
    print(get_usage_text())
    sys.exit(0)
