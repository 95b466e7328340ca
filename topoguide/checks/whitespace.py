"""Blank line conventions.

No more than one blank line within a function or method, two blank lines
between methods, and three between classes, so that a function reads as a
single unit and a class as a higher level one.
"""
from __future__ import annotations

import ast
import typing

from topoguide.conventions import Violation
from topoguide.checks._ast import FUNCTION_TYPES
from topoguide.checks._ast import first_line


def _blank_runs(source, start: int, end: int) -> typing.Iterator[typing.Tuple[int, int]]:
    """Yield ``(first_line, length)`` for each run of blank lines in [start, end]."""
    run_start = None
    for line in range(start, end + 1):
        if source.is_blank(line):
            if run_start is None:
                run_start = line
        elif run_start is not None:
            yield run_start, line - run_start
            run_start = None
    if run_start is not None:
        yield run_start, end + 1 - run_start


def _count_blank(source, start: int, end: int) -> int:
    return sum(1 for line in range(start, end + 1) if source.is_blank(line))


def check_whitespace(source, config) -> typing.Iterator[Violation]:
    """Check blank lines inside functions and between methods and classes."""
    settings = config.whitespace
    functions = [node for node in ast.walk(source.tree) if isinstance(node, FUNCTION_TYPES)]

    reported = set()
    for node in functions:
        for start, length in _blank_runs(source, node.lineno, node.end_lineno):
            if length > settings.max_blank_lines_in_function and start not in reported:
                reported.add(start)
                yield source.violation((start, 0), 'W201',
                                       '{} blank lines within {}; use at most {}.'.format(
                                           length, node.name, settings.max_blank_lines_in_function))
        length = node.end_lineno - node.lineno + 1
        if length > settings.max_function_lines:
            yield source.violation(node, 'W204', '{} is {} lines long; consider breaking it up.'.format(
                node.name, length))

    for owner in ast.walk(source.tree):
        if not isinstance(owner, ast.ClassDef):
            continue
        for previous, current in zip(owner.body, owner.body[1:]):
            if isinstance(previous, FUNCTION_TYPES) and isinstance(current, FUNCTION_TYPES):
                blank = _count_blank(source, previous.end_lineno + 1, first_line(current) - 1)
                if blank != settings.blank_lines_between_methods:
                    yield source.violation((first_line(current), current.col_offset), 'W202',
                                           '{} blank line(s) before method {}; expected {}.'.format(
                                               blank, current.name, settings.blank_lines_between_methods))

    body = source.tree.body
    for previous, current in zip(body, body[1:]):
        if isinstance(previous, ast.ClassDef) and isinstance(current, ast.ClassDef):
            blank = _count_blank(source, previous.end_lineno + 1, first_line(current) - 1)
            if blank != settings.blank_lines_between_classes:
                yield source.violation((first_line(current), 0), 'W203',
                                       '{} blank line(s) before class {}; expected {}.'.format(
                                           blank, current.name, settings.blank_lines_between_classes))
