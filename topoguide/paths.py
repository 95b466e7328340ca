"""Locate and prepare filesystem paths independently of the platform.

Code should never ``open()`` a raw relative path: such a path only works while
the process working directory happens to be the distribution base directory.
Instead,

* :func:`resolve_path` locates an *existing* file (or folder) by trying each
  entry of a list of search paths, and
* :func:`normalize_path` prepares a path for *writing* by joining it onto an
  output prefix.

Paths should always be written in linux format (forward slashes). Both helpers
convert them to the native form of the running platform. The inverse
conversion (Windows-style paths to linux format) is not performed, in common
with Python's own :mod:`os.path` functions.

The search paths and the prefix are held in a stack of :class:`PathContext`
objects. The root context is seeded from the ``TOPOGUIDE_SEARCH_PATHS``
(``os.pathsep``-separated) and ``TOPOGUIDE_PREFIX`` environment variables;
:func:`search_paths` temporarily pushes a new one::

    with search_paths('/opt/topographica', prefix='/tmp/output'):
        icon = open(resolve_path('topo/tkgui/icons/topo.xbm'))
        log = open(normalize_path('run.log'), 'w')
"""
from __future__ import annotations

__all__ = ['PathContext',
           'context_from_environment',
           'get_path_context',
           'normalize_path',
           'resolve_path',
           'search_paths',
           'set_prefix',
           'set_search_paths']

import contextlib
import logging
import os
import typing
import warnings
from dataclasses import dataclass
from dataclasses import field

from topoguide.exceptions import PathNotFoundError

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

PathType = typing.Union[str, os.PathLike]

_KIND_LABELS = {True: 'File', False: 'Folder', None: 'Path'}


@dataclass
class PathContext:
    """Search paths and output prefix used by the path helpers.

    An empty *search_paths* list or a *prefix* of ``None`` means the current
    working directory at the time of the call.
    """
    search_paths: typing.List[str] = field(default_factory=list)
    prefix: typing.Optional[str] = None

    def effective_search_paths(self) -> typing.List[str]:
        """Return the directories to search, in order."""
        if self.search_paths:
            return list(self.search_paths)
        return [os.getcwd()]

    def effective_prefix(self) -> str:
        """Return the directory that relative output paths are joined onto."""
        if self.prefix:
            return self.prefix
        return os.getcwd()


def context_from_environment(environ: typing.Mapping[str, str] = None) -> PathContext:
    """Build a PathContext from ``TOPOGUIDE_SEARCH_PATHS`` and ``TOPOGUIDE_PREFIX``."""
    if environ is None:
        environ = os.environ
    paths = [entry for entry in environ.get('TOPOGUIDE_SEARCH_PATHS', '').split(os.pathsep) if entry]
    prefix = environ.get('TOPOGUIDE_PREFIX') or None
    return PathContext(search_paths=paths, prefix=prefix)


_context = [context_from_environment()]


def get_path_context() -> PathContext:
    """Return the active PathContext."""
    return _context[-1]


def _as_path_list(paths) -> typing.List[str]:
    if isinstance(paths, (str, bytes, os.PathLike)):
        raise TypeError('Search paths must be given as a sequence of paths, not a single path.')
    return [os.fspath(path) for path in paths]


def set_search_paths(paths: typing.Iterable[PathType]):
    """Replace the search paths of the active context."""
    get_path_context().search_paths = _as_path_list(paths)


def set_prefix(prefix: typing.Optional[PathType]):
    """Replace the output prefix of the active context."""
    get_path_context().prefix = None if prefix is None else os.fspath(prefix)


@contextlib.contextmanager
def search_paths(*paths: PathType, prefix: PathType = None):
    """Use different search paths (and optionally prefix) within a ``with`` block.

    With no *paths*, the search paths of the enclosing context are kept.
    """
    current = get_path_context()
    context = PathContext(search_paths=_as_path_list(paths) or list(current.search_paths),
                          prefix=current.prefix if prefix is None else os.fspath(prefix))
    _context.append(context)
    logger.debug('Entered path context {}'.format(context))
    try:
        yield context
    finally:
        popped = _context.pop()
        if popped is not context:
            warnings.warn('Path context stack is out of order: the exiting context is not current.')
            _context.append(popped)
            _context.remove(context)


def _normalize(path: PathType, pathmod=os.path) -> str:
    # normpath converts forward slashes on back-slash platforms, never the reverse.
    return pathmod.normpath(os.fspath(path))


def _matches(path: str, path_to_file: typing.Optional[bool]) -> bool:
    if path_to_file is None:
        return os.path.exists(path)
    if path_to_file:
        return os.path.isfile(path)
    return os.path.isdir(path)


def resolve_path(path: PathType,
                 search_paths: typing.Iterable[PathType] = None,
                 path_to_file: typing.Optional[bool] = True) -> str:
    """Find the path to an existing file, searching the paths specified.

    Unless *path* is absolute, it is joined onto each entry of *search_paths*
    in turn, and the first location that exists is returned. When
    *search_paths* is not given, the paths of the active context are used;
    when those are empty, the current working directory is searched.

    *path_to_file* selects what kind of object is being looked for: ``True``
    for a file, ``False`` for a folder, or ``None`` for either.

    Paths should be written with forward slashes; the returned path uses the
    native separator.

    Raises:
        PathNotFoundError: nothing matching was found. The exception's *tried*
            attribute lists the locations examined.
    """
    if path_to_file not in _KIND_LABELS:
        raise ValueError('path_to_file must be True, False or None, not {}'.format(repr(path_to_file)))
    kind = _KIND_LABELS[path_to_file]
    path = _normalize(path)

    if os.path.isabs(path):
        if _matches(path, path_to_file):
            return path
        raise PathNotFoundError("{} '{}' not found.".format(kind, path), tried=[path])

    if search_paths is None:
        prefixes = get_path_context().effective_search_paths()
    else:
        prefixes = _as_path_list(search_paths) or [os.getcwd()]

    paths_tried = []
    for prefix in prefixes:
        try_path = os.path.join(_normalize(prefix), path)
        if _matches(try_path, path_to_file):
            logger.debug('Resolved {} to {}'.format(path, try_path))
            return try_path
        paths_tried.append(try_path)

    raise PathNotFoundError('{} {} was not found in the following place(s): {}.'.format(
        kind, os.path.split(path)[1], paths_tried), tried=paths_tried)


def normalize_path(path: PathType = '', prefix: PathType = None) -> str:
    """Convert a path to a normalized form suitable for writing a file.

    A relative *path* is joined onto *prefix* (by default the prefix of the
    active context, or the current working directory). Absolute paths are
    only normalized. Nothing is created on the filesystem.
    """
    path = _normalize(path)
    if not os.path.isabs(path):
        if not prefix:
            prefix = get_path_context().effective_prefix()
        path = os.path.join(_normalize(prefix), path)
    return _normalize(path)
