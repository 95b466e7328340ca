"""Test the topoguide command line interface."""
import json
import logging
import os

import pytest

from topoguide.cli import main

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    topo = tmp_path / 'topo'
    topo.mkdir()
    (topo / 'sheet.py').write_text('"""Sheet."""\n\n\nclass Sheet:\n    """A Sheet."""\n')
    (topo / 'plotting.py').write_text('"""Plotting."""\nregion = 1\n')
    (topo / 'bad_name.py').write_text('"""Bad name."""\n')
    return tmp_path


def test_rules(capsys):
    assert main(['rules']) == 0
    out = capsys.readouterr().out
    assert 'N101' in out
    assert 'F605' in out
    assert 'Preferred terms: Sheet, Unit, ConnectionField' in out
    assert 'receptive field' in out


def test_check(workspace, capsys):
    assert main(['check', 'topo']) == 1
    out = capsys.readouterr().out
    assert 'bad_name.py:1:1: N105 [error]' in out
    assert 'T401 [warning]' in out
    assert out.splitlines()[-1] == '3 file(s) checked: 1 error(s), 1 warning(s).'


def test_check_select_and_strict(workspace, capsys):
    assert main(['check', 'topo', '--select', 'T']) == 0
    assert main(['check', 'topo', '--select', 'T', '--strict']) == 1
    assert main(['check', 'topo/sheet.py', '--strict']) == 0
    assert main(['check', 'topo', '--ignore', 'N', '--ignore', 'T']) == 0


def test_check_json(workspace, capsys):
    main(['check', '--format', 'json', 'topo'])
    report = json.loads(capsys.readouterr().out)
    assert report['files_checked'] == 3
    assert {violation['code'] for violation in report['violations']} == {'N105', 'T401'}


def test_check_with_config_file(workspace, capsys):
    (workspace / 'topoguide.yaml').write_text('ignore: [N105]\n')
    assert main(['check', 'topo']) == 0
    (workspace / 'strict.yaml').write_text('select: [T]\n')
    capsys.readouterr()
    main(['--config', 'strict.yaml', 'check', '--format', 'json', 'topo'])
    report = json.loads(capsys.readouterr().out)
    assert [violation['code'] for violation in report['violations']] == ['T401']
    main(['check', 'topo', '--config', 'strict.yaml', '--format', 'json'])
    report = json.loads(capsys.readouterr().out)
    assert [violation['code'] for violation in report['violations']] == ['T401']
    assert main(['rules', '--config', 'missing.yaml']) == 2


def test_configuration_error(workspace, capsys):
    assert main(['--config', 'missing.yaml', 'rules']) == 2
    assert 'Configuration error' in capsys.readouterr().err
    (workspace / 'topoguide.yaml').write_text('unknown: 1\n')
    assert main(['rules']) == 2


def test_resolve(workspace, capsys):
    assert main(['resolve', 'topo/sheet.py', '--search-path', str(workspace / 'nowhere'),
                 '--search-path', str(workspace)]) == 0
    assert capsys.readouterr().out.strip() == os.path.join(str(workspace), 'topo', 'sheet.py')

    assert main(['resolve', 'topo', '--folder']) == 0
    assert capsys.readouterr().out.strip() == os.path.join(os.getcwd(), 'topo')

    assert main(['resolve', 'topo']) == 1
    assert 'File topo was not found' in capsys.readouterr().err

    assert main(['resolve', 'topo', '--any']) == 0


def test_normalize(workspace, capsys):
    assert main(['normalize', 'output/../run.log', '--prefix', '/tmp/topo']) == 0
    assert capsys.readouterr().out.strip() == os.path.normpath('/tmp/topo/run.log')
    assert main(['normalize', 'run.log']) == 0
    assert capsys.readouterr().out.strip() == os.path.join(os.getcwd(), 'run.log')


def test_resolve_with_configured_search_paths(workspace, capsys):
    data = workspace / 'data'
    data.mkdir()
    (data / 'retina.ty').write_text('')
    (workspace / 'topoguide.yaml').write_text('search_paths: [{}]\n'.format(json.dumps(str(data))))
    assert main(['resolve', 'retina.ty']) == 0
    assert capsys.readouterr().out.strip() == os.path.join(str(data), 'retina.ty')
