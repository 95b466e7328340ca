"""Test the Checker driver, Report and inline suppression."""
import json
import logging
import textwrap

import pytest

from topoguide.checker import Checker
from topoguide.checker import Report
from topoguide.config import Config
from topoguide.conventions import RULES
from topoguide.conventions import Violation
from topoguide.exceptions import SourceError
from topoguide.source import SourceFile

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

CONFORMING_SHEET = '''
"""Sheet, a two-dimensional array of processing units."""
import param


class Sheet(param.Parameterized):
    """Base class for a two-dimensional array of Units."""

    density = param.Number(default=10.0, bounds=(0.0, 100.0), doc="Number of units per unit length.")


    def activity_sum(self, scale=1.0):
        """Return the scaled sum of the activity of all Units."""
        total = 0.0
        for value in self.values():
            total += value

        return total * scale


    def values(self):
        """Return the activity values."""
        return []



class GeneratorSheet(Sheet):
    """Sheet whose activity is supplied by a pattern generator."""
'''


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text))
    return path


def test_conforming_source(run_check):
    assert run_check(CONFORMING_SHEET) == []


def test_rule_catalog():
    assert all(rule.severity in ('error', 'warning') for rule in RULES.values())
    assert all(code == rule.code for code, rule in RULES.items())
    violation = Violation(path='topo/sheet.py', line=3, column=4, code='T401', message='Avoid "layer".')
    assert violation.severity == 'warning'
    assert str(violation) == 'topo/sheet.py:3:5: T401 [warning] Avoid "layer".'
    assert violation.as_dict()['column'] == 5


def test_suppression(run_check):
    violations = run_check('''
        """Sheet."""
        region = 1  # topoguide: ignore[T401]
        area = 2  # topoguide: ignore
        layer_colour = 3  # topoguide: ignore[T403]
        ''', select=['T'])
    assert [(violation.line, violation.code) for violation in violations] == [(5, 'T401')]


def test_source_errors(tmp_path):
    with pytest.raises(SourceError) as info:
        SourceFile.from_text('def broken(:\n    pass\n', path='broken.py')
    assert info.value.path == 'broken.py'
    assert info.value.line == 1
    with pytest.raises(SourceError):
        SourceFile.from_path(str(tmp_path / 'missing.py'))


def test_source_file_properties():
    source = SourceFile.from_text('x = """a\n\nb"""\n\n', path='examples/models/lissom.ty')
    assert source.is_script
    assert source.file_name == 'lissom.ty'
    assert source.directories == ('examples', 'models')
    assert source.string_lines == frozenset((2, 3))
    assert not source.is_blank(2)
    assert source.is_blank(4)


def test_check_paths(tmp_path):
    write(tmp_path / 'topo' / 'base' / 'sheet.py', CONFORMING_SHEET)
    write(tmp_path / 'topo' / 'misc' / 'array_util.py', '"""Array utilities."""\n')
    write(tmp_path / 'topo' / 'misc' / 'broken.py', 'def broken(:\n')
    write(tmp_path / '.git' / 'hooks' / 'hook.py', 'class bad: pass\n')
    write(tmp_path / 'examples' / 'lissom.ty', '"""LISSOM."""\nfrom topo.base.sheet import _secret\n')
    write(tmp_path / 'README.txt', 'not python')

    report = Checker().check_paths([str(tmp_path)])
    assert report.files_checked == 4
    found = [(violation.path[len(str(tmp_path)) + 1:], violation.code) for violation in report.violations]
    assert sorted(found) == sorted([
        ('examples/lissom.ty', 'F603'),
        ('topo/misc/array_util.py', 'N105'),
        ('topo/misc/broken.py', 'E001'),
    ])
    assert report.error_count == 3
    assert report.warning_count == 0
    assert report.exit_code() == 1


def test_check_single_file(tmp_path):
    path = write(tmp_path / 'topo' / 'base' / 'sheet.py', CONFORMING_SHEET)
    report = Checker().check_paths([str(path)])
    assert report.files_checked == 1
    assert report.violations == []
    assert report.exit_code(strict=True) == 0


def test_select_and_ignore(tmp_path):
    path = write(tmp_path / 'topo' / 'regionmap.py', '''
        class region_map:
            pass
        ''')
    all_codes = [violation.code for violation in Checker().check_file(str(path))]
    assert set(all_codes) == {'N101', 'N106', 'D301', 'T401'}
    selected = Checker(Config(select=['N', 'T'], ignore=['T', 'N106'])).check_file(str(path))
    assert [violation.code for violation in selected] == ['N101']
    assert Checker(Config(select=['D'])).check_file(str(tmp_path / 'missing.py')) == []


def test_report_output():
    report = Report(files_checked=2)
    report.extend([Violation('b.py', 1, 0, 'T401', 'Avoid "map".'),
                   Violation('a.py', 2, 0, 'N101', 'Class name x.')])
    assert [violation.path for violation in report.violations] == ['a.py', 'b.py']
    assert report.error_count == 1
    assert report.warning_count == 1
    assert report.exit_code() == 1
    text = report.format_text()
    assert text.splitlines()[-1] == '2 file(s) checked: 1 error(s), 1 warning(s).'
    encoded = json.loads(report.to_json())
    assert encoded['errors'] == 1
    assert encoded['violations'][0]['code'] == 'N101'

    warnings_only = Report(violations=[Violation('b.py', 1, 0, 'T401', 'Avoid "map".')])
    assert warnings_only.exit_code() == 0
    assert warnings_only.exit_code(strict=True) == 1


def test_check_text():
    violations = Checker(Config(select=['N'])).check_text('"""Sheet."""\nclass sheet:\n    """A Sheet."""\n',
                                                           path='topo/base/sheet.py')
    assert [(violation.line, violation.code) for violation in violations] == [(2, 'N101')]
