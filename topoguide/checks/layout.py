"""File extension and file access conventions.

Library code lives in ``.py`` files inside the library directories. Models,
scripts and examples are ``.ty`` files, and use only the public API of the
library package. Files are opened through ``resolve_path()`` or
``normalize_path()``, with paths written in linux format.
"""
from __future__ import annotations

import ast
import typing

from topoguide.conventions import Violation
from topoguide.checks._ast import is_dunder
from topoguide.checks.naming import is_exempt_file

# Calls whose first argument is a filesystem path.
_PATH_FUNCTIONS = frozenset(('open', 'resolve_path', 'normalize_path', 'Path', 'PurePath'))
_PATH_MODULE_FUNCTIONS = frozenset(('exists', 'isfile', 'isdir', 'join', 'abspath', 'normpath',
                                    'listdir', 'makedirs', 'mkdir', 'remove', 'stat'))


def _is_private(name: str) -> bool:
    return name.startswith('_') and not is_dunder(name)


def _call_name(call: ast.Call) -> typing.Optional[str]:
    if isinstance(call.func, ast.Name):
        return call.func.id
    if isinstance(call.func, ast.Attribute):
        return call.func.attr
    return None


def _is_absolute_literal(path: str) -> bool:
    return path.startswith(('/', '\\')) or (len(path) > 1 and path[1] == ':')


def _check_placement(source, config) -> typing.Iterator[Violation]:
    directories = set(source.directories)
    if source.is_script:
        if directories & set(config.library_dirs):
            yield source.violation((1, 0), 'F602', 'Library directory should only hold .py files, not {}.'.format(
                source.file_name))
    elif directories & set(config.script_dirs) and not is_exempt_file(source.file_name, config):
        yield source.violation((1, 0), 'F601', 'User-level file {} should use the .ty extension.'.format(
            source.file_name))


def _check_public_api(source, config) -> typing.Iterator[Violation]:
    package = config.library_package
    bound = set()
    for node in ast.walk(source.tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                parts = alias.name.split('.')
                if parts[0] != package:
                    continue
                if any(_is_private(part) for part in parts):
                    yield source.violation(node, 'F603', 'Import of private module {}.'.format(alias.name))
                bound.add(alias.asname or parts[0])
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            parts = node.module.split('.')
            if parts[0] != package:
                continue
            if any(_is_private(part) for part in parts):
                yield source.violation(node, 'F603', 'Import from private module {}.'.format(node.module))
            for alias in node.names:
                if _is_private(alias.name):
                    yield source.violation(node, 'F603', 'Import of private name {} from {}.'.format(
                        alias.name, node.module))
                bound.add(alias.asname or alias.name)

    for node in ast.walk(source.tree):
        if isinstance(node, ast.Attribute) and _is_private(node.attr):
            root = node.value
            while isinstance(root, ast.Attribute):
                root = root.value
            if isinstance(root, ast.Name) and root.id in bound:
                yield source.violation(node, 'F603', 'Access to private attribute {} of the {} package.'.format(
                    node.attr, package))


def _check_path_literals(source) -> typing.Iterator[Violation]:
    for node in ast.walk(source.tree):
        if not isinstance(node, ast.Call) or not node.args:
            continue
        name = _call_name(node)
        in_path_module = (isinstance(node.func, ast.Attribute) and isinstance(node.func.value, ast.Attribute)
                          and node.func.value.attr == 'path' and name in _PATH_MODULE_FUNCTIONS)
        if name not in _PATH_FUNCTIONS and not in_path_module:
            continue
        literals = [arg for arg in node.args
                    if isinstance(arg, ast.Constant) and isinstance(arg.value, str)]
        for literal in literals:
            if '\\' in literal.value:
                yield source.violation(literal, 'F605', 'Windows-style path {}; write paths with forward '
                                                        'slashes.'.format(repr(literal.value)))
        first = node.args[0]
        if (name == 'open' and isinstance(node.func, ast.Name) and first in literals
                and not _is_absolute_literal(first.value)):
            yield source.violation(node, 'F604', 'open({}) depends on the working directory; use '
                                                 'resolve_path() or normalize_path().'.format(repr(first.value)))


def check_layout(source, config) -> typing.Iterator[Violation]:
    """Check file placement, public API use in .ty files, and file access."""
    yield from _check_placement(source, config)
    if source.is_script:
        yield from _check_public_api(source, config)
    yield from _check_path_literals(source)
