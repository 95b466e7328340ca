"""Convention checks.

Each check is a generator function ``check(source, config)`` yielding
:class:`~topoguide.conventions.Violation` records for one
:class:`~topoguide.source.SourceFile`.
"""

from topoguide.checks.docstrings import check_docstrings
from topoguide.checks.layout import check_layout
from topoguide.checks.naming import check_naming
from topoguide.checks.parameters import check_parameters
from topoguide.checks.terminology import check_terminology
from topoguide.checks.whitespace import check_whitespace

ALL_CHECKS = (check_naming,
              check_whitespace,
              check_docstrings,
              check_terminology,
              check_parameters,
              check_layout)
