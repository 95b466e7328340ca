"""Vocabulary, naming patterns and the rule catalog.

The conventions checked by topoguide are collected here as plain data so that
the individual checks, the configuration layer and the ``rules`` command all
agree on them.
"""
from __future__ import annotations

__all__ = ['AVOIDED_TERMS',
           'BRITISH_SPELLINGS',
           'ERROR',
           'FOREIGN_OO_TERMS',
           'PREFERRED_TERMS',
           'RULES',
           'Rule',
           'Violation',
           'WARNING',
           'is_cap_words',
           'is_lower_case_with_underscores',
           'is_module_file_name',
           'split_identifier']

import re
import typing
from dataclasses import dataclass

ERROR = 'error'
WARNING = 'warning'

# Terms for which a specific meaning has been worked out in the simulator.
PREFERRED_TERMS = ('Sheet',
                   'Unit',
                   'ConnectionField',
                   'Projection',
                   'ProjectionSheet',
                   'CFSheet',
                   'GeneratorSheet',
                   'SheetView',
                   'UnitView',
                   'Event',
                   'EventProcessor',
                   'Activity')

AVOIDED_TERMS = {
    'region': 'Sheets only sometimes correspond to neural regions like V1; say Sheet',
    'area': 'same problem as region; say Sheet',
    'map': 'used in too many different senses',
    'layer': 'biology and neural-network people use it very differently; say Sheet',
    'activation': 'implies a specific stimulus, which is not always true; say Activity',
    'receptive field': 'only valid if plotted with reference to the external world; say ConnectionField',
}

FOREIGN_OO_TERMS = {
    'member function': 'method',
    'virtual function': 'method',
    'member variable': 'attribute',
}

BRITISH_SPELLINGS = {
    'analyse': 'analyze',
    'behaviour': 'behavior',
    'catalogue': 'catalog',
    'centre': 'center',
    'colour': 'color',
    'favour': 'favor',
    'grey': 'gray',
    'initialise': 'initialize',
    'labelled': 'labeled',
    'labelling': 'labeling',
    'licence': 'license',
    'modelling': 'modeling',
    'neighbour': 'neighbor',
    'normalise': 'normalize',
    'optimise': 'optimize',
    'organise': 'organize',
    'recognise': 'recognize',
    'serialise': 'serialize',
    'visualise': 'visualize',
}

_CAP_WORDS = re.compile(r'^_*[A-Z][A-Za-z0-9]*$')
_LOWER_UNDERSCORE = re.compile(r'^_*[a-z][a-z0-9_]*$')
_MODULE_FILE = re.compile(r'^[a-z][a-z0-9]*\.(py|ty)$')
_CAMEL_BOUNDARY = re.compile(r'[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+')


def is_cap_words(name: str) -> bool:
    return bool(_CAP_WORDS.match(name))


def is_lower_case_with_underscores(name: str) -> bool:
    return bool(_LOWER_UNDERSCORE.match(name))


def is_module_file_name(file_name: str) -> bool:
    """Return True for ``lowercasewithnounderscores.py`` style file names."""
    return bool(_MODULE_FILE.match(file_name))


def split_identifier(name: str) -> typing.List[str]:
    """Split an identifier into lower-case words.

    Both ``lower_case_with_underscores`` and ``CapWords`` are understood, so
    that ``receptive_field_size`` and ``ReceptiveFieldPlot`` both yield
    ``['receptive', 'field', ...]``.
    """
    words = []
    for part in name.split('_'):
        words.extend(match.group(0).lower() for match in _CAMEL_BOUNDARY.finditer(part))
    return words


@dataclass(frozen=True)
class Rule:
    code: str
    severity: str
    summary: str


RULES = {rule.code: rule for rule in (
    Rule('E001', ERROR, 'File cannot be read or parsed.'),
    Rule('N101', ERROR, 'Class names use InitialCapitalLetters.'),
    Rule('N102', ERROR, 'Function and method names use lower_case_with_underscores.'),
    Rule('N103', ERROR, 'Argument names use lower_case_with_underscores.'),
    Rule('N104', ERROR, 'Attribute and Parameter names use lower_case_with_underscores.'),
    Rule('N105', ERROR, 'Module file names use lowercasewithnounderscores.'),
    Rule('N106', WARNING, 'A file organized around one class hierarchy is named after its main class.'),
    Rule('W201', ERROR, 'No more than one blank line within a function or method.'),
    Rule('W202', ERROR, 'Methods are separated by two blank lines.'),
    Rule('W203', ERROR, 'Classes are separated by three blank lines.'),
    Rule('W204', WARNING, 'Functions longer than about a screenful should be broken up.'),
    Rule('D301', ERROR, 'Every file, class and public function has a docstring.'),
    Rule('D302', ERROR, 'The docstring summary line fits into the configured width.'),
    Rule('D303', ERROR, 'A blank line separates the docstring summary from the discussion.'),
    Rule('D304', WARNING, 'Function docstring summaries use the imperative voice.'),
    Rule('T401', WARNING, 'Avoid ambiguous terms; use the established simulator vocabulary.'),
    Rule('T402', ERROR, 'Use Python object-oriented terminology (method, not member function).'),
    Rule('T403', ERROR, 'Use American spelling.'),
    Rule('P501', ERROR, 'Parameters are documented with a doc string.'),
    Rule('P502', WARNING, 'Parameters use the narrowest meaningful type.'),
    Rule('P503', WARNING, 'Numeric Parameters declare hard bounds.'),
    Rule('P504', WARNING, 'Numeric Parameters with an open bound declare soft bounds.'),
    Rule('P505', WARNING, 'User-visible quantities use Sheet coordinates and simulation time.'),
    Rule('F601', ERROR, 'User-level scripts and models use the .ty extension.'),
    Rule('F602', ERROR, 'Library code uses the .py extension.'),
    Rule('F603', ERROR, '.ty files use only the public library API.'),
    Rule('F604', WARNING, 'Open files through resolve_path() or normalize_path().'),
    Rule('F605', ERROR, 'Write paths in linux format, never with back slashes.'),
)}


@dataclass(frozen=True, order=True)
class Violation:
    """One breach of a convention, located in a source file."""
    path: str
    line: int
    column: int
    code: str
    message: str

    @property
    def severity(self) -> str:
        return RULES[self.code].severity

    def __str__(self):
        return '{}:{}:{}: {} [{}] {}'.format(self.path, self.line, self.column + 1,
                                            self.code, self.severity, self.message)

    def as_dict(self) -> dict:
        return {'path': self.path,
                'line': self.line,
                'column': self.column + 1,
                'code': self.code,
                'severity': self.severity,
                'message': self.message}
