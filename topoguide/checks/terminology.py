"""Consistent vocabulary in names, comments and docstrings.

Everything should call a Sheet a Sheet, not a Region, Area, Map or Layer;
methods are methods, not member functions; and all text uses American
spelling.
"""
from __future__ import annotations

import ast
import re
import typing

from topoguide.conventions import AVOIDED_TERMS
from topoguide.conventions import BRITISH_SPELLINGS
from topoguide.conventions import FOREIGN_OO_TERMS
from topoguide.conventions import Violation
from topoguide.conventions import split_identifier
from topoguide.checks._ast import FUNCTION_TYPES
from topoguide.checks._ast import docstring_lines
from topoguide.checks._ast import docstring_node

_WORD = re.compile(r'[A-Za-z]+')

_BRITISH_SUFFIXES = ('', 's', 'd', 'r', 'rs')
_BRITISH_STEM_SUFFIXES = ('ing', 'ed', 'er', 'ers', 'ation', 'ations')
# Also the American plural of analysis.
_SHARED_SPELLINGS = frozenset(('analyses',))


def british_spelling(word: str) -> typing.Optional[typing.Tuple[str, str]]:
    """Return ``(british, american)`` if *word* is an inflection of a British spelling."""
    word = word.lower()
    if word in _SHARED_SPELLINGS:
        return None
    for british, american in BRITISH_SPELLINGS.items():
        if word.startswith(british) and word[len(british):] in _BRITISH_SUFFIXES + _BRITISH_STEM_SUFFIXES:
            return british, american
        if british.endswith('e') and word.startswith(british[:-1]) and word[len(british) - 1:] in _BRITISH_STEM_SUFFIXES:
            return british, american
    return None


class _Vocabulary:
    def __init__(self, config):
        avoided = dict(AVOIDED_TERMS)
        avoided.update({term.lower(): reason for term, reason in config.avoided_terms.items()})
        for term in config.allowed_terms:
            avoided.pop(term.lower(), None)
        self.avoided = avoided

    def find(self, words: typing.Sequence[str]) -> typing.Iterator[typing.Tuple[str, str, str]]:
        """Yield ``(code, found, message)`` for each problem among consecutive *words*."""
        words = [word.lower() for word in words]
        found = set()
        for index, word in enumerate(words):
            pair = ' '.join(words[index:index + 2])
            for term, reason in self.avoided.items():
                length = len(term.split())
                candidate = word if length == 1 else ' '.join(words[index:index + length])
                if (candidate == term or candidate == term + 's') and term not in found:
                    found.add(term)
                    yield 'T401', term, 'Avoid "{}": {}.'.format(term, reason)
            if pair in FOREIGN_OO_TERMS and pair not in found:
                found.add(pair)
                yield 'T402', pair, 'Say "{}", not "{}".'.format(FOREIGN_OO_TERMS[pair], pair)
            spelling = british_spelling(word)
            if spelling is not None and word not in found:
                found.add(word)
                yield 'T403', word, 'Use American spelling "{}", not "{}".'.format(spelling[1], spelling[0])


def _defined_names(tree: ast.Module) -> typing.Iterator[typing.Tuple[ast.AST, str]]:
    for node in ast.walk(tree):
        if isinstance(node, (ast.ClassDef,) + FUNCTION_TYPES):
            yield node, node.name
            if isinstance(node, FUNCTION_TYPES):
                for arg in node.args.posonlyargs + node.args.args + node.args.kwonlyargs:
                    yield arg, arg.arg
        elif isinstance(node, ast.Name) and isinstance(node.ctx, ast.Store):
            yield node, node.id
        elif (isinstance(node, ast.Attribute) and isinstance(node.ctx, ast.Store)
              and isinstance(node.value, ast.Name) and node.value.id == 'self'):
            yield node, node.attr


def _docstrings(tree: ast.Module) -> typing.Iterator[ast.Constant]:
    for node in ast.walk(tree):
        if isinstance(node, (ast.Module, ast.ClassDef) + FUNCTION_TYPES):
            constant = docstring_node(node)
            if constant is not None:
                yield constant


def check_terminology(source, config) -> typing.Iterator[Violation]:
    """Check identifiers, comments and docstrings for avoided or misspelled terms."""
    vocabulary = _Vocabulary(config)

    for node, name in _defined_names(source.tree):
        for code, _, message in vocabulary.find(split_identifier(name)):
            yield source.violation(node, code, 'In name {}: {}'.format(name, message))

    for line, column, comment in source.comments:
        for code, _, message in vocabulary.find(_WORD.findall(comment)):
            yield source.violation((line, column), code, message)

    for constant in _docstrings(source.tree):
        for line, text in docstring_lines(constant):
            for code, _, message in vocabulary.find(_WORD.findall(text)):
                yield source.violation((line, 0), code, message)
