"""Docstring conventions.

Every file, class and function should say what it does for the user. The
first line is a brief summary that fits into 80 columns; further discussion
follows after a blank line. Function summaries use the imperative voice, as
in ``\"\"\"Return the sum of all arguments.\"\"\"``.
"""
from __future__ import annotations

import ast
import inspect
import re
import typing

from topoguide.conventions import Violation
from topoguide.checks._ast import FUNCTION_TYPES
from topoguide.checks._ast import docstring_lines
from topoguide.checks._ast import docstring_node
from topoguide.checks._ast import is_dunder
from topoguide.checks._ast import walk_definitions

_FIRST_WORD = re.compile(r'^([A-Za-z]+)\b')

_NOT_VERBS = frozenset(('this', 'these', 'the', 'a', 'an'))


def imperative_form(word: str) -> typing.Optional[str]:
    """Return the imperative form of a third-person verb, or None if *word* is not one.

    >>> imperative_form('Returns')
    'Return'
    >>> imperative_form('Process') is None
    True
    """
    lower = word.lower()
    if len(lower) <= 3 or not lower.endswith('s') or lower.endswith(('ss', 'us', 'is', 'ous')):
        return None
    if lower.endswith('ies'):
        return word[:-3] + 'y'
    if lower.endswith(('ches', 'shes', 'sses', 'xes', 'zes', 'oes')):
        return word[:-2]
    return word[:-1]


def _is_public(node, enclosing) -> bool:
    if node.name.startswith('_'):
        return False
    return isinstance(enclosing, (ast.Module, ast.ClassDef))


def _is_property(node) -> bool:
    for decorator in node.decorator_list:
        if isinstance(decorator, ast.Name) and decorator.id in ('property', 'cached_property'):
            return True
        if isinstance(decorator, ast.Attribute) and decorator.attr in ('setter', 'getter', 'deleter'):
            return True
    return False


def _summary_line(source, constant: ast.Constant) -> typing.Optional[int]:
    """Return the physical line holding the first text of a docstring."""
    for line, text in docstring_lines(constant):
        if text.strip():
            if line <= len(source.lines):
                return line
            return None
    return None


def _check_docstring(source, config, owner, constant: ast.Constant, label: str):
    line = _summary_line(source, constant)
    if line is None:
        yield source.violation(constant, 'D301', '{} has an empty docstring.'.format(label))
        return

    width = len(source.lines[line - 1].rstrip())
    if width > config.docstrings.summary_width:
        yield source.violation((line, 0), 'D302', 'Docstring summary of {} is {} columns wide; limit is {}.'.format(
            label, width, config.docstrings.summary_width))

    text = inspect.cleandoc(constant.value)
    parts = text.split('\n')
    if len(parts) > 1 and parts[1].strip():
        yield source.violation((line, 0), 'D303',
                               'Docstring of {} needs a blank line after the summary line.'.format(label))

    if isinstance(owner, FUNCTION_TYPES) and not _is_property(owner):
        match = _FIRST_WORD.match(parts[0].strip())
        if match is not None:
            word = match.group(1)
            suggestion = imperative_form(word)
            if word.lower() in _NOT_VERBS:
                yield source.violation((line, 0), 'D304',
                                       'Docstring summary of {} should start with a verb in the '
                                       'imperative voice.'.format(label))
            elif suggestion is not None:
                yield source.violation((line, 0), 'D304',
                                       'Docstring summary of {} should use the imperative voice: '
                                       '"{}", not "{}".'.format(label, suggestion, word))


def check_docstrings(source, config) -> typing.Iterator[Violation]:
    """Check presence and layout of module, class and function docstrings."""
    tree = source.tree
    constant = docstring_node(tree)
    if constant is None:
        if tree.body:
            yield source.violation((1, 0), 'D301', 'File {} has no docstring.'.format(source.file_name))
    else:
        yield from _check_docstring(source, config, tree, constant, 'file {}'.format(source.file_name))

    for node, enclosing in walk_definitions(tree):
        if isinstance(node, FUNCTION_TYPES) and is_dunder(node.name):
            continue
        label = '{} {}'.format('class' if isinstance(node, ast.ClassDef) else 'function', node.name)
        constant = docstring_node(node)
        if constant is None:
            if _is_public(node, enclosing) or (config.docstrings.require_private
                                               and isinstance(enclosing, (ast.Module, ast.ClassDef))):
                yield source.violation(node, 'D301', '{} has no docstring.'.format(label[0].upper() + label[1:]))
            continue
        yield from _check_docstring(source, config, node, constant, label)
