"""Test the platform-independent path helpers."""
import logging
import ntpath
import os
import posixpath

import pytest

from topoguide import paths
from topoguide.exceptions import PathNotFoundError
from topoguide.exceptions import TopoGuideError
from topoguide.paths import context_from_environment
from topoguide.paths import get_path_context
from topoguide.paths import normalize_path
from topoguide.paths import resolve_path
from topoguide.paths import search_paths
from topoguide.paths import set_prefix
from topoguide.paths import set_search_paths

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


@pytest.fixture
def distribution(tmp_path):
    icons = tmp_path / 'topo' / 'tkgui' / 'icons'
    icons.mkdir(parents=True)
    (icons / 'topo.xbm').write_text('#define topo_width 1\n')
    return tmp_path


def test_resolve_relative_path(distribution, tmp_path):
    missing = str(tmp_path / 'nowhere')
    result = resolve_path('topo/tkgui/icons/topo.xbm', search_paths=[missing, str(distribution)])
    assert result == os.path.join(str(distribution), 'topo', 'tkgui', 'icons', 'topo.xbm')
    assert os.path.isfile(result)


def test_first_search_path_wins(tmp_path):
    first = tmp_path / 'first'
    second = tmp_path / 'second'
    for directory in (first, second):
        directory.mkdir()
        (directory / 'model.ty').write_text('')
    assert resolve_path('model.ty', search_paths=[str(second), str(first)]) == str(second / 'model.ty')


def test_resolve_not_found(tmp_path):
    a = str(tmp_path / 'a')
    b = str(tmp_path / 'b')
    with pytest.raises(PathNotFoundError) as info:
        resolve_path('topo/missing.txt', search_paths=[a, b])
    error = info.value
    assert isinstance(error, FileNotFoundError)
    assert isinstance(error, IOError)
    assert isinstance(error, TopoGuideError)
    assert 'File missing.txt was not found in the following place(s)' in str(error)
    assert error.tried == (os.path.join(a, 'topo', 'missing.txt'), os.path.join(b, 'topo', 'missing.txt'))


def test_resolve_kinds(distribution):
    where = [str(distribution)]
    with pytest.raises(PathNotFoundError, match='^File'):
        resolve_path('topo/tkgui', search_paths=where)
    with pytest.raises(PathNotFoundError, match='^Folder'):
        resolve_path('topo/tkgui/icons/topo.xbm', search_paths=where, path_to_file=False)
    assert resolve_path('topo/tkgui', search_paths=where, path_to_file=False) == str(distribution / 'topo' / 'tkgui')
    assert resolve_path('topo/tkgui', search_paths=where, path_to_file=None) == str(distribution / 'topo' / 'tkgui')
    assert resolve_path('topo/tkgui/icons/topo.xbm', search_paths=where, path_to_file=None).endswith('topo.xbm')
    with pytest.raises(PathNotFoundError, match='^Path'):
        resolve_path('topo/gone', search_paths=where, path_to_file=None)


def test_resolve_bad_kind():
    with pytest.raises(ValueError):
        resolve_path('x', path_to_file='file')


def test_resolve_absolute_path(distribution):
    absolute = str(distribution / 'topo' / 'tkgui' / 'icons' / 'topo.xbm')
    assert resolve_path(absolute, search_paths=['/does/not/matter']) == absolute
    missing = str(distribution / 'absent.txt')
    with pytest.raises(PathNotFoundError) as info:
        resolve_path(missing)
    assert str(info.value) == "File '{}' not found.".format(missing)


def test_resolve_defaults_to_working_directory(tmp_path, monkeypatch):
    (tmp_path / 'a.txt').write_text('')
    monkeypatch.chdir(tmp_path)
    assert resolve_path('a.txt') == os.path.join(os.getcwd(), 'a.txt')
    assert resolve_path('a.txt', search_paths=[]) == os.path.join(os.getcwd(), 'a.txt')


def test_resolve_accepts_path_objects(distribution):
    result = resolve_path(distribution / 'topo' / 'tkgui' / 'icons' / 'topo.xbm')
    assert isinstance(result, str)


def test_search_paths_context(distribution, path_context):
    with search_paths(str(distribution)) as context:
        assert get_path_context() is context
        assert resolve_path('topo/tkgui/icons/topo.xbm').startswith(str(distribution))
        with search_paths(prefix='/output') as inner:
            assert inner.search_paths == [str(distribution)]
            assert inner.prefix == '/output'
        assert get_path_context() is context
    assert get_path_context() is path_context


def test_search_paths_context_restored_on_error(tmp_path, path_context):
    with pytest.raises(RuntimeError):
        with search_paths(str(tmp_path)):
            raise RuntimeError('fail')
    assert get_path_context() is path_context


def test_search_paths_exited_out_of_order(path_context):
    outer = search_paths('/opt/topo')
    inner = search_paths('/home/user/topo')
    outer_context = outer.__enter__()
    inner_context = inner.__enter__()
    with pytest.warns(UserWarning, match='out of order'):
        outer.__exit__(None, None, None)
    assert get_path_context() is inner_context
    assert outer_context not in paths._context
    inner.__exit__(None, None, None)
    assert get_path_context() is path_context


def test_set_search_paths_and_prefix(tmp_path, path_context):
    set_search_paths([tmp_path])
    set_prefix(tmp_path / 'out')
    assert path_context.search_paths == [str(tmp_path)]
    assert path_context.prefix == str(tmp_path / 'out')
    with pytest.raises(TypeError):
        set_search_paths(str(tmp_path))
    set_prefix(None)
    assert path_context.effective_prefix() == os.getcwd()


def test_normalize_path(tmp_path):
    prefix = str(tmp_path)
    result = normalize_path('topo/new_file.txt', prefix=prefix)
    assert result == os.path.join(prefix, 'topo', 'new_file.txt')
    assert not os.path.exists(result)
    assert normalize_path('topo/../out/./x.txt', prefix=prefix) == os.path.join(prefix, 'out', 'x.txt')
    assert normalize_path(prefix + '/a//b.txt', prefix='/elsewhere') == os.path.join(prefix, 'a', 'b.txt')
    assert normalize_path(prefix=prefix) == prefix


def test_normalize_path_uses_context_prefix(tmp_path, monkeypatch):
    with search_paths(prefix=str(tmp_path)):
        assert normalize_path('run.log') == os.path.join(str(tmp_path), 'run.log')
    monkeypatch.chdir(tmp_path)
    assert normalize_path('run.log') == os.path.join(os.getcwd(), 'run.log')
    assert normalize_path('run.log', prefix='') == os.path.join(os.getcwd(), 'run.log')


def test_forward_slashes_become_native():
    assert paths._normalize('topo/tkgui/icons', pathmod=ntpath) == 'topo\\tkgui\\icons'
    # No conversion in the other direction.
    assert paths._normalize('topo\\tkgui', pathmod=posixpath) == 'topo\\tkgui'


def test_context_from_environment():
    environ = {'TOPOGUIDE_SEARCH_PATHS': os.pathsep.join(['/opt/topo', '', '/home/user/topo']),
               'TOPOGUIDE_PREFIX': '/tmp/output'}
    context = context_from_environment(environ)
    assert context.search_paths == ['/opt/topo', '/home/user/topo']
    assert context.prefix == '/tmp/output'
    empty = context_from_environment({})
    assert empty.search_paths == []
    assert empty.prefix is None
    assert empty.effective_search_paths() == [os.getcwd()]
