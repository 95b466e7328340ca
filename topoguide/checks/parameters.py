"""Conventions for user-modifiable Parameters declared in class bodies.

A Parameter should have the narrowest type and the tightest bounds that are
meaningful, a docstring written for the user, and soft bounds where a GUI
slider needs a suggested range. Quantities it exposes should be expressed in
Sheet coordinates and simulation time, never in matrix rows and columns or
numbers of time steps.
"""
from __future__ import annotations

import ast
import typing
from dataclasses import dataclass

from topoguide.conventions import Violation
from topoguide.conventions import split_identifier

PARAMETER_TYPES = frozenset(('Action', 'Array', 'Boolean', 'Callable', 'ClassSelector', 'Color',
                             'Composite', 'DataFrame', 'Date', 'Dict', 'Dynamic', 'Event',
                             'Filename', 'Foldername', 'HookList', 'Integer', 'List', 'Magnitude',
                             'Number', 'NumericTuple', 'ObjectSelector', 'Parameter', 'Path',
                             'Range', 'Selector', 'Series', 'String', 'Tuple', 'XYCoordinates'))

BOUNDED_TYPES = frozenset(('Number', 'Integer'))

_SPECIFIC_TYPES = {bool: 'Boolean', int: 'Integer', float: 'Number', str: 'String'}

IMPLEMENTATION_UNIT_WORDS = frozenset(('row', 'rows', 'col', 'cols', 'column', 'columns', 'matrix',
                                       'timestep', 'timesteps', 'iteration', 'iterations'))


@dataclass
class ParameterDeclaration:
    """A ``name = param.Type(...)`` statement in a class body."""
    owner: ast.ClassDef
    name: str
    target: ast.Name
    call: ast.Call
    type_name: str

    def keyword(self, name: str) -> typing.Optional[ast.expr]:
        for keyword in self.call.keywords:
            if keyword.arg == name:
                return keyword.value
        return None

    def default(self) -> typing.Optional[ast.expr]:
        value = self.keyword('default')
        if value is None and self.call.args:
            value = self.call.args[0]
        return value

    def doc(self) -> typing.Optional[ast.expr]:
        value = self.keyword('doc')
        # Parameter(default, doc) is the generic positional signature.
        if value is None and self.type_name == 'Parameter' and len(self.call.args) > 1:
            value = self.call.args[1]
        return value


def _param_bindings(tree: ast.Module) -> typing.Tuple[typing.Set[str], typing.Dict[str, str]]:
    """Return the names bound to the param module and to classes imported from it."""
    modules = set()
    classes = {}
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                if alias.name == 'param':
                    modules.add(alias.asname or alias.name)
        elif isinstance(node, ast.ImportFrom) and node.module and node.module.split('.')[0] == 'param':
            for alias in node.names:
                if alias.name in PARAMETER_TYPES:
                    classes[alias.asname or alias.name] = alias.name
    return modules, classes


def _parameter_type(call: ast.Call, modules, classes) -> typing.Optional[str]:
    func = call.func
    if (isinstance(func, ast.Attribute) and isinstance(func.value, ast.Name)
            and func.value.id in modules and func.attr[:1].isupper()):
        return func.attr
    if isinstance(func, ast.Name) and func.id in classes:
        return classes[func.id]
    return None


def parameter_declarations(source) -> typing.Iterator[ParameterDeclaration]:
    modules, classes = _param_bindings(source.tree)
    if not modules and not classes:
        return
    for owner in ast.walk(source.tree):
        if not isinstance(owner, ast.ClassDef):
            continue
        for statement in owner.body:
            if isinstance(statement, ast.Assign) and len(statement.targets) == 1:
                target = statement.targets[0]
            elif isinstance(statement, ast.AnnAssign) and statement.value is not None:
                target = statement.target
            else:
                continue
            if not isinstance(target, ast.Name) or not isinstance(statement.value, ast.Call):
                continue
            type_name = _parameter_type(statement.value, modules, classes)
            if type_name is not None:
                yield ParameterDeclaration(owner=owner, name=target.id, target=target,
                                           call=statement.value, type_name=type_name)


def _is_none(node) -> bool:
    return isinstance(node, ast.Constant) and node.value is None


def check_parameters(source, config) -> typing.Iterator[Violation]:
    """Check the type, bounds, documentation and units of declared Parameters."""
    for declaration in parameter_declarations(source):
        name = declaration.name
        target = declaration.target

        doc = declaration.doc()
        if doc is None or (isinstance(doc, ast.Constant) and not str(doc.value or '').strip()):
            yield source.violation(target, 'P501', 'Parameter {} has no doc string.'.format(name))

        if declaration.type_name == 'Parameter':
            default = declaration.default()
            if isinstance(default, ast.Constant) and type(default.value) in _SPECIFIC_TYPES:
                yield source.violation(target, 'P502', 'Parameter {} should be declared as param.{}.'.format(
                    name, _SPECIFIC_TYPES[type(default.value)]))

        if declaration.type_name in BOUNDED_TYPES:
            bounds = declaration.keyword('bounds')
            if bounds is None or _is_none(bounds):
                yield source.violation(target, 'P503', 'Parameter {} should declare hard bounds.'.format(name))
            elif (isinstance(bounds, ast.Tuple) and len(bounds.elts) == 2
                  and any(_is_none(bound) for bound in bounds.elts)
                  and declaration.keyword('softbounds') is None):
                yield source.violation(target, 'P504',
                                       'Parameter {} has an open bound and should declare softbounds.'.format(name))

        unit_words = IMPLEMENTATION_UNIT_WORDS.intersection(split_identifier(name))
        if unit_words:
            yield source.violation(target, 'P505',
                                   'Parameter {} refers to {}; express it in Sheet coordinates '
                                   'or simulation time.'.format(name, ', '.join(sorted(unit_words))))
