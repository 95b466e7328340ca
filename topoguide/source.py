"""Parsed representation of a source file shared by all checks."""
from __future__ import annotations

__all__ = ['SCRIPT_EXTENSION', 'SOURCE_EXTENSIONS', 'SourceFile']

import ast
import io
import logging
import os
import re
import tokenize
import typing
from dataclasses import dataclass
from dataclasses import field

from topoguide.conventions import Violation
from topoguide.exceptions import SourceError

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

SCRIPT_EXTENSION = '.ty'
SOURCE_EXTENSIONS = ('.py', SCRIPT_EXTENSION)

_SUPPRESSION = re.compile(r'#\s*topoguide:\s*ignore(?:\[(?P<codes>[A-Za-z0-9,\s]*)\])?')

# Python 3.12 tokenizes f-strings into several tokens.
_FSTRING_START = getattr(tokenize, 'FSTRING_START', None)
_FSTRING_END = getattr(tokenize, 'FSTRING_END', None)


@dataclass
class SourceFile:
    """A source file with its syntax tree, comments and string extents.

    *string_lines* holds the numbers of the lines that continue a multi-line
    string literal, so that blank lines inside docstrings are not mistaken
    for blank lines of code.
    """
    path: str
    text: str
    tree: ast.Module
    lines: typing.List[str]
    string_lines: typing.FrozenSet[int] = frozenset()
    comments: typing.List[typing.Tuple[int, int, str]] = field(default_factory=list)
    suppressions: typing.Dict[int, typing.Optional[typing.FrozenSet[str]]] = field(default_factory=dict)

    @classmethod
    def from_text(cls, text: str, path: str = '<string>') -> 'SourceFile':
        """Parse *text*.

        Raises:
            SourceError: the text is not valid Python.
        """
        try:
            tree = ast.parse(text, filename=path)
        except SyntaxError as e:
            raise SourceError('Syntax error: {}'.format(e.msg), path=path,
                              line=e.lineno or 1, column=max((e.offset or 1) - 1, 0)) from e
        except ValueError as e:
            raise SourceError('Cannot parse: {}'.format(e), path=path) from e

        string_lines = set()
        comments = []
        fstring_starts = []
        try:
            for token in tokenize.generate_tokens(io.StringIO(text).readline):
                if token.type == tokenize.STRING and token.end[0] > token.start[0]:
                    string_lines.update(range(token.start[0] + 1, token.end[0] + 1))
                elif _FSTRING_START is not None and token.type == _FSTRING_START:
                    fstring_starts.append(token.start[0])
                elif _FSTRING_END is not None and token.type == _FSTRING_END:
                    start = fstring_starts.pop()
                    string_lines.update(range(start + 1, token.end[0] + 1))
                elif token.type == tokenize.COMMENT:
                    comments.append((token.start[0], token.start[1], token.string))
        except tokenize.TokenError as e:
            raise SourceError('Cannot tokenize: {}'.format(e.args[0]), path=path) from e

        suppressions = {}
        for line, _, comment in comments:
            match = _SUPPRESSION.search(comment)
            if match is None:
                continue
            codes = match.group('codes')
            if codes is None:
                suppressions[line] = None
            else:
                suppressions[line] = frozenset(code.strip().upper() for code in codes.split(',') if code.strip())

        return cls(path=path,
                   text=text,
                   tree=tree,
                   lines=[line.rstrip('\r\n') for line in io.StringIO(text).readlines()],
                   string_lines=frozenset(string_lines),
                   comments=comments,
                   suppressions=suppressions)

    @classmethod
    def from_path(cls, path: str) -> 'SourceFile':
        """Read and parse the file at *path*.

        Raises:
            SourceError: the file cannot be read, decoded or parsed.
        """
        try:
            with tokenize.open(path) as fh:
                text = fh.read()
        except (OSError, SyntaxError, UnicodeDecodeError) as e:
            raise SourceError('Cannot read file: {}'.format(e), path=path) from e
        return cls.from_text(text, path=path)

    @property
    def file_name(self) -> str:
        return os.path.basename(self.path)

    @property
    def is_script(self) -> bool:
        return self.path.endswith(SCRIPT_EXTENSION)

    @property
    def directories(self) -> typing.Tuple[str, ...]:
        """Return the directory components of the path, outermost first."""
        head = os.path.dirname(os.path.normpath(self.path))
        return tuple(part for part in re.split(r'[\\/]', head) if part and part != '.')

    def is_blank(self, line: int) -> bool:
        """Return True if 1-based *line* is empty and not part of a string."""
        if line in self.string_lines:
            return False
        return not self.lines[line - 1].strip()

    def is_suppressed(self, violation: Violation) -> bool:
        if violation.line not in self.suppressions:
            return False
        codes = self.suppressions[violation.line]
        return codes is None or violation.code in codes

    def violation(self, where, code: str, message: str) -> Violation:
        """Create a Violation at an AST node, or at a ``(line, column)`` pair."""
        if isinstance(where, tuple):
            line, column = where
        else:
            line, column = where.lineno, where.col_offset
        return Violation(path=self.path, line=line, column=column, code=code, message=message)
