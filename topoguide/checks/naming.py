"""Naming conventions for classes, functions, attributes and files."""
from __future__ import annotations

import ast
import fnmatch
import os
import typing

from topoguide.conventions import Violation
from topoguide.conventions import is_cap_words
from topoguide.conventions import is_lower_case_with_underscores
from topoguide.conventions import is_module_file_name
from topoguide.checks._ast import FUNCTION_TYPES
from topoguide.checks._ast import is_dunder
from topoguide.checks.parameters import parameter_declarations


def is_exempt_file(file_name: str, config) -> bool:
    return any(fnmatch.fnmatch(file_name, pattern) for pattern in config.filename_exemptions)


def _arguments(args: ast.arguments) -> typing.Iterator[ast.arg]:
    yield from args.posonlyargs
    yield from args.args
    yield from args.kwonlyargs
    if args.vararg is not None:
        yield args.vararg
    if args.kwarg is not None:
        yield args.kwarg


def _main_class(tree: ast.Module) -> typing.Optional[str]:
    """Return the root of the single public class hierarchy in a module, if any."""
    classes = [node for node in tree.body if isinstance(node, ast.ClassDef) and not node.name.startswith('_')]
    names = {node.name for node in classes}
    roots = []
    for node in classes:
        base_names = {base.id for base in node.bases if isinstance(base, ast.Name)}
        base_names.update(base.attr for base in node.bases if isinstance(base, ast.Attribute))
        if not base_names & names:
            roots.append(node.name)
    if len(roots) == 1:
        return roots[0]
    return None


def check_file_name(source, config) -> typing.Iterator[Violation]:
    file_name = source.file_name
    if is_exempt_file(file_name, config):
        return
    if not is_module_file_name(file_name):
        yield source.violation((1, 0), 'N105',
                               'File name {} should be lowercasewithnounderscores.'.format(file_name))
        return
    if source.is_script:
        return
    main_class = _main_class(source.tree)
    stem = os.path.splitext(file_name)[0]
    if main_class is not None and stem != main_class.lower():
        yield source.violation((1, 0), 'N106',
                               'File organized around class {} should be named {}.py.'.format(
                                   main_class, main_class.lower()))


def check_naming(source, config) -> typing.Iterator[Violation]:
    """Check class, function, argument, attribute and file names."""
    yield from check_file_name(source, config)

    for node in ast.walk(source.tree):
        if isinstance(node, ast.ClassDef):
            if not is_cap_words(node.name):
                yield source.violation(node, 'N101',
                                       'Class name {} should use InitialCapitalLetters.'.format(node.name))
        elif isinstance(node, FUNCTION_TYPES):
            if not is_dunder(node.name) and not is_lower_case_with_underscores(node.name):
                yield source.violation(node, 'N102',
                                       'Function name {} should be lower_case_with_underscores.'.format(node.name))
            for arg in _arguments(node.args):
                if not is_lower_case_with_underscores(arg.arg):
                    yield source.violation(arg, 'N103',
                                           'Argument name {} should be lower_case_with_underscores.'.format(arg.arg))
        elif isinstance(node, (ast.Assign, ast.AnnAssign, ast.AugAssign)):
            targets = node.targets if isinstance(node, ast.Assign) else [node.target]
            for target in targets:
                if (isinstance(target, ast.Attribute) and isinstance(target.value, ast.Name)
                        and target.value.id == 'self' and not is_dunder(target.attr)
                        and not is_lower_case_with_underscores(target.attr)):
                    yield source.violation(target, 'N104',
                                           'Attribute name {} should be lower_case_with_underscores.'.format(
                                               target.attr))

    for declaration in parameter_declarations(source):
        if not is_lower_case_with_underscores(declaration.name):
            yield source.violation(declaration.target, 'N104',
                                   'Parameter name {} should be lower_case_with_underscores.'.format(
                                       declaration.name))
