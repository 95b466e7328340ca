"""Run the convention checks over files and directory trees."""
from __future__ import annotations

__all__ = ['Checker', 'Report']

import json
import logging
import os
import typing
from dataclasses import dataclass
from dataclasses import field

from topoguide.checks import ALL_CHECKS
from topoguide.config import Config
from topoguide.conventions import ERROR
from topoguide.conventions import Violation
from topoguide.conventions import WARNING
from topoguide.exceptions import SourceError
from topoguide.source import SOURCE_EXTENSIONS
from topoguide.source import SourceFile

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))


@dataclass
class Report:
    """Violations found by a Checker run."""
    violations: typing.List[Violation] = field(default_factory=list)
    files_checked: int = 0

    @property
    def error_count(self) -> int:
        return sum(1 for violation in self.violations if violation.severity == ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for violation in self.violations if violation.severity == WARNING)

    def extend(self, violations: typing.Iterable[Violation]):
        self.violations.extend(violations)
        self.violations.sort()

    def exit_code(self, strict: bool = False) -> int:
        """Return 1 if there are errors (or, when *strict*, any violation), else 0."""
        if self.error_count or (strict and self.violations):
            return 1
        return 0

    def format_text(self) -> str:
        lines = [str(violation) for violation in self.violations]
        lines.append('{} file(s) checked: {} error(s), {} warning(s).'.format(
            self.files_checked, self.error_count, self.warning_count))
        return '\n'.join(lines)

    def to_json(self) -> str:
        return json.dumps({'files_checked': self.files_checked,
                           'errors': self.error_count,
                           'warnings': self.warning_count,
                           'violations': [violation.as_dict() for violation in self.violations]},
                          indent=2)


class Checker:
    """Apply the enabled convention checks to source files.

    Example:

        >>> report = Checker(Config(select=['N', 'W'])).check_paths(['topo'])
        >>> print(report.format_text())

    """
    def __init__(self, config: Config = None, checks=ALL_CHECKS):
        self.config = config if config is not None else Config()
        self.checks = tuple(checks)

    def check_source(self, source: SourceFile) -> typing.List[Violation]:
        """Return the selected, unsuppressed violations in *source*, in order."""
        violations = []
        for check in self.checks:
            for violation in check(source, self.config):
                if not self.config.is_selected(violation.code):
                    continue
                if source.is_suppressed(violation):
                    logger.debug('Suppressed {}'.format(violation))
                    continue
                violations.append(violation)
        return sorted(violations)

    def check_text(self, text: str, path: str = '<string>') -> typing.List[Violation]:
        return self.check_source(SourceFile.from_text(text, path=path))

    def check_file(self, path: str) -> typing.List[Violation]:
        """Check one file. Unreadable or unparsable files are reported as E001."""
        logger.debug('Checking {}'.format(path))
        try:
            source = SourceFile.from_path(path)
        except SourceError as e:
            logger.info('Could not check {}: {}'.format(path, e))
            violation = Violation(path=path, line=e.line, column=e.column, code='E001', message=str(e))
            if self.config.is_selected('E001'):
                return [violation]
            return []
        return self.check_source(source)

    def iter_files(self, paths: typing.Iterable[str]) -> typing.Iterator[str]:
        """Yield the source files named by, or found beneath, *paths*, in sorted order."""
        excluded = set(self.config.exclude)
        for path in paths:
            if not os.path.isdir(path):
                yield path
                continue
            for root, directories, files in os.walk(path):
                directories[:] = sorted(d for d in directories if d not in excluded)
                for name in sorted(files):
                    if name.endswith(SOURCE_EXTENSIONS):
                        yield os.path.join(root, name)

    def check_paths(self, paths: typing.Iterable[str]) -> Report:
        report = Report()
        for path in self.iter_files(paths):
            report.extend(self.check_file(path))
            report.files_checked += 1
        logger.info('Checked {} file(s): {} error(s), {} warning(s).'.format(
            report.files_checked, report.error_count, report.warning_count))
        return report
