"""Syntax tree helpers shared by the checks."""
from __future__ import annotations

import ast
import typing

FUNCTION_TYPES = (ast.FunctionDef, ast.AsyncFunctionDef)
DEFINITION_TYPES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)


def is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith('__') and name.endswith('__')


def first_line(node) -> int:
    """Return the first line of a definition, including its decorators."""
    decorators = getattr(node, 'decorator_list', ())
    return min([node.lineno] + [decorator.lineno for decorator in decorators])


def docstring_node(node) -> typing.Optional[ast.Constant]:
    """Return the string constant holding the docstring of *node*, if any."""
    body = getattr(node, 'body', None)
    if not body:
        return None
    statement = body[0]
    if (isinstance(statement, ast.Expr) and isinstance(statement.value, ast.Constant)
            and isinstance(statement.value.value, str)):
        return statement.value
    return None


def docstring_lines(constant: ast.Constant) -> typing.Iterator[typing.Tuple[int, str]]:
    """Yield ``(line, text)`` for each line of the value of a docstring.

    Text lines map onto physical lines only when the literal spans as many
    lines as its value holds. Otherwise (escaped newlines, implicit
    concatenation) every line is reported at the start of the literal.
    """
    texts = constant.value.split('\n')
    end = getattr(constant, 'end_lineno', None) or constant.lineno
    spans_lines = end - constant.lineno == len(texts) - 1
    for index, text in enumerate(texts):
        yield (constant.lineno + index if spans_lines else constant.lineno), text


def walk_definitions(node, enclosing=None):
    """Yield ``(definition, enclosing)`` for every class and function definition.

    *enclosing* is the nearest enclosing definition, or the module.
    """
    if enclosing is None:
        enclosing = node
    for child in ast.iter_child_nodes(node):
        if isinstance(child, DEFINITION_TYPES):
            yield child, enclosing
            yield from walk_definitions(child, child)
        else:
            yield from walk_definitions(child, enclosing)
