import logging
from os import access
from os import X_OK
from os.path import join

import pytest

from viralannotationtoolbox.entry_point.cli import get_commands
from viralannotationtoolbox.entry_point.cli import get_executable_and_script
from viralannotationtoolbox.entry_point.cli import main_program
from viralannotationtoolbox.workflow.common.parameters import ConfigurationError
from viralannotationtoolbox.workflow.common.run_configuration_reporter import \
    list_consensus_files
from viralannotationtoolbox.workflow.scripts import check_max
from viralannotationtoolbox.workflow.scripts import configure
from viralannotationtoolbox.workflow.scripts import report_run_configuration


def test_workflow_commands():
    assert get_commands('workflow') == ['check-max', 'configure', 'report-run-configuration']
    assert get_commands('standalone_utilities') == []


def test_locate_script():
    _, script_path = get_executable_and_script('workflow', 'check-max')
    assert str(script_path).endswith('check_max.py')
    with pytest.raises(ValueError):
        get_executable_and_script('workflow', 'assemble')


@pytest.mark.parametrize('flag', ['-h', '--help'])
def test_top_level_help(flag, monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['vat', flag])
    with pytest.raises(SystemExit) as exit_info:
        main_program()
    assert not exit_info.value.code
    output = capsys.readouterr().out
    assert output.startswith('usage: vat')
    assert 'The specific submodule the command is from.' in output
    assert 'vat workflow configure' in output


def test_unknown_module_is_rejected(monkeypatch, capsys):
    monkeypatch.setattr('sys.argv', ['vat', 'assembly'])
    with pytest.raises(SystemExit) as exit_info:
        main_program()
    assert exit_info.value.code == 2
    assert 'invalid choice' in capsys.readouterr().err


def test_configure_writes_run_files(tmp_path):
    consensus = tmp_path / 'consensus'
    consensus.mkdir()
    run = configure.main(
        [f'--consensus_dir={consensus}', '--profile', 'singularity', '--max_cpus', '8'],
        directory=str(tmp_path),
    )
    assert run.profile.name == 'singularity'
    with open(join(str(tmp_path), 'nextflow.config'), 'rt', encoding='utf-8') as file:
        assert 'withLabel:process_high' in file.read()
    with open(join(str(tmp_path), 'run.sh'), 'rt', encoding='utf-8') as file:
        assert 'nextflow run . -c nextflow.config -profile singularity' in file.read()
    with open(join(str(tmp_path), 'configure.sh'), 'rt', encoding='utf-8') as file:
        command = file.read()
    assert command.startswith('#!/bin/sh')
    assert f'--consensus_dir={consensus}' in command
    assert '--max_cpus=8' in command
    assert access(join(str(tmp_path), 'run.sh'), X_OK)
    assert access(join(str(tmp_path), 'configure.sh'), X_OK)


def test_configure_help(tmp_path, capsys):
    with pytest.raises(SystemExit) as exit_info:
        configure.main(['--help', '--max_memory', 'bogus'], directory=str(tmp_path))
    assert exit_info.value.code == 0
    assert 'Required arguments:' in capsys.readouterr().out
    assert not (tmp_path / 'nextflow.config').exists()


def test_configure_without_consensus_dir(tmp_path):
    with pytest.raises(ConfigurationError):
        configure.main([], directory=str(tmp_path))
    assert not (tmp_path / 'nextflow.config').exists()


@pytest.mark.parametrize('arguments,expected', [
    (['--kind', 'cpus', '--value', '32', '--max_cpus', '16'], '16'),
    (['--kind', 'memory', '--value', '128GB', '--max_memory', '64GB'], '64GB'),
    (['--kind', 'time', '--value', '72h', '--max_time', '48h'], '48h'),
    (['--kind', 'time', '--value', '12h'], '12h'),
    (['--kind', 'cpus', '--value', 'lots'], 'lots'),
])
def test_check_max(arguments, expected, capsys):
    assert check_max.main(arguments) == expected
    assert capsys.readouterr().out.strip() == expected


def test_check_max_reads_config_file(tmp_path):
    config_file = tmp_path / 'workflow.config'
    config_file.write_text('[general]\nmax_memory = 8 GB\n', encoding='utf-8')
    result = check_max.main(['--kind', 'memory', '--value', '12 GB',
                             f'--config-file={config_file}'])
    assert result == '8 GB'


def test_report_run_configuration(tmp_path, caplog):
    consensus = tmp_path / 'consensus'
    consensus.mkdir()
    (consensus / 'sample1.fasta').write_text('>sample1\nACGT\n', encoding='utf-8')
    (consensus / 'sample2.fa.gz').write_bytes(b'')
    (consensus / 'notes.txt').write_text('not a sequence', encoding='utf-8')
    assert [name.split('/')[-1] for name in list_consensus_files(str(consensus))] == [
        'sample1.fasta', 'sample2.fa.gz',
    ]
    with caplog.at_level(logging.INFO):
        report_run_configuration.main([f'--consensus_dir={consensus}', '--profile=conda'])
    assert 'Number of consensus files: 2' in caplog.text
    assert 'Profile: conda' in caplog.text
    assert 'process_high' in caplog.text
