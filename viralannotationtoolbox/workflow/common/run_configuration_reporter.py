"""Logs a summary of a governed run before it starts."""
from os import listdir
from os.path import expanduser
from os.path import getsize
from os.path import isdir
from os.path import join
import re

from viralannotationtoolbox.standalone_utilities.configuration_settings import get_version
from viralannotationtoolbox.workflow.common.governor import GovernedRun
from viralannotationtoolbox.workflow.common.parameters import REPORT_NAMES
from viralannotationtoolbox.standalone_utilities.log_formats import colorized_logger

logger = colorized_logger(__name__)

CONSENSUS_FILE_PATTERN = re.compile(r'\.(fa|fasta|fna|fas)(\.gz)?$', re.IGNORECASE)


def list_consensus_files(consensus_dir: str) -> list[str]:
    directory = expanduser(consensus_dir)
    if not isdir(directory):
        return []
    return sorted(
        join(directory, name) for name in listdir(directory)
        if CONSENSUS_FILE_PATTERN.search(name)
    )


class RunConfigurationReporter:
    def __init__(self, run: GovernedRun):
        config = run.config
        logger.info('Version: viralannotationtoolbox v%s', get_version())
        logger.info('Profile: %s (executor %s)', run.profile.name, run.profile.executor)
        logger.info('Consensus directory: %s', config.consensus_dir)
        logger.info('Output directory: %s', config.output_dir)
        logger.info('VADR models: %s', config.vadr_model_dir or 'bundled with the container')

        consensus_files = list_consensus_files(config.consensus_dir)
        logger.info('Number of consensus files: %s', len(consensus_files))
        if consensus_files:
            sizes = [getsize(filename) for filename in consensus_files]
            logger.info('Total consensus file size: %s MB', self.format_mb(sum(sizes)))
            logger.info('Largest consensus file: %s MB', self.format_mb(max(sizes)))
        else:
            logger.warning('No consensus FASTA files found in %s.', config.consensus_dir)

        logger.info(
            'Ceilings: %s CPUs, %s memory, %s time',
            run.ceiling.max_cpus, run.ceiling.max_memory, run.ceiling.max_time,
        )
        for process in run.processes:
            label = 'default' if process.label is None else process.label
            logger.info('%s: %s', label, self.describe_directives(process.directives))
        enabled = [name for name in REPORT_NAMES if getattr(config, name)]
        logger.info('Reports in %s: %s', config.tracedir, ', '.join(enabled) or 'none')

    def describe_directives(self, directives) -> str:
        return '; '.join(
            f'{directive.name} {directive.first_attempt}'
            + ('' if directive.retry_attempt == directive.first_attempt
               else f' (retry {directive.retry_attempt})')
            for directive in directives
        )

    def format_mb(self, number_bytes):
        return int(10 * number_bytes / 1000000) / 10
