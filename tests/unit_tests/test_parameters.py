from os.path import join

import pytest

from viralannotationtoolbox.workflow.common.parameters import (
    ConfigurationError,
    PipelineConfig,
    get_parameter_names,
    load_pipeline_config,
    validate_required_inputs,
)


def write_config(directory, contents):
    path = join(str(directory), 'workflow.config')
    with open(path, 'wt', encoding='utf-8') as file:
        file.write(contents)
    return path


def test_defaults():
    config = load_pipeline_config()
    assert config.consensus_dir is None
    assert config.output_dir == 'results'
    assert config.max_cpus == 16
    assert config.max_memory == '64GB'
    assert config.max_time == '48h'
    assert config.help is False
    assert config.profile == 'docker'
    assert config.tracedir == join('results', 'pipeline_info')


def test_config_is_immutable():
    config = load_pipeline_config({'consensus_dir': 'consensus'})
    with pytest.raises(AttributeError):
        config.consensus_dir = 'elsewhere'


def test_command_line_overrides_file(tmp_path):
    config_file = write_config(tmp_path, '\n'.join([
        '[general]',
        'consensus_dir = /data/from_file',
        'output_dir = /data/out',
        'max_memory = 32GB',
        '',
        '[reporting]',
        'dag = false',
    ]))
    config = load_pipeline_config(
        {'consensus_dir': '/data/from_cli', 'max_memory': None, 'help': None},
        config_file=config_file,
    )
    assert config.consensus_dir == '/data/from_cli'
    assert config.output_dir == '/data/out'
    assert config.max_memory == '32GB'
    assert config.dag is False
    assert config.timeline is True


def test_unknown_parameter_in_file(tmp_path):
    config_file = write_config(tmp_path, '[general]\nconsensus_directory = /data\n')
    with pytest.raises(ConfigurationError):
        load_pipeline_config(config_file=config_file)


def test_unknown_report_in_file(tmp_path):
    config_file = write_config(tmp_path, '[reporting]\nflamegraph = true\n')
    with pytest.raises(ConfigurationError):
        load_pipeline_config(config_file=config_file)


def test_non_boolean_report_toggle(tmp_path):
    config_file = write_config(tmp_path, '[reporting]\ntrace = sometimes\n')
    with pytest.raises(ConfigurationError):
        load_pipeline_config(config_file=config_file)


def test_non_boolean_help_in_file(tmp_path):
    config_file = write_config(tmp_path, '[general]\nhelp = maybe\n')
    with pytest.raises(ConfigurationError):
        load_pipeline_config(config_file=config_file)


def test_percent_signs_are_read_verbatim(tmp_path):
    config_file = write_config(tmp_path, '\n'.join([
        '[general]',
        'consensus_dir = /data/consensus',
        'vadr_options = --minpvlen 50% --alt_pass %(dupregin)s',
    ]))
    config = load_pipeline_config(config_file=config_file)
    assert config.vadr_options == '--minpvlen 50% --alt_pass %(dupregin)s'


@pytest.mark.parametrize('contents', [
    'consensus_dir = /data/consensus\n',
    '[general]\nmax_cpus = 4\nmax_cpus = 8\n',
    '[general]\n[general]\n',
])
def test_malformed_config_file(tmp_path, contents):
    config_file = write_config(tmp_path, contents)
    with pytest.raises(ConfigurationError):
        load_pipeline_config(config_file=config_file)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        load_pipeline_config(config_file=join(str(tmp_path), 'absent.config'))


@pytest.mark.parametrize('consensus_dir', [None, '', '   '])
def test_missing_consensus_dir(consensus_dir):
    with pytest.raises(ConfigurationError):
        validate_required_inputs(PipelineConfig(consensus_dir=consensus_dir))


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_consensus_dir_not_present_locally_is_a_warning(caplog):
    validate_required_inputs(PipelineConfig(consensus_dir='s3://bucket/consensus'))
    assert 'not present locally' in caplog.text


def test_present_consensus_dir(tmp_path, caplog):
    validate_required_inputs(PipelineConfig(consensus_dir=str(tmp_path)))
    assert 'not present locally' not in caplog.text


def test_workflow_parameters():
    config = PipelineConfig(consensus_dir='consensus', max_cpus='8', output_dir='out')
    parameters = config.workflow_parameters()
    assert parameters['max_cpus'] == 8
    assert parameters['tracedir'] == join('out', 'pipeline_info')
    assert 'profile' not in parameters
    assert set(get_parameter_names()) - set(parameters) == {'profile'}
