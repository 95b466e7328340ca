"""Checker configuration.

Configuration is read from a YAML file (``topoguide.yaml`` or
``.topoguide.yaml``, located with :func:`~topoguide.paths.resolve_path`) and
may be overridden by environment variables:

``TOPOGUIDE_CONFIG``
    Explicit configuration file.
``TOPOGUIDE_LOG_LEVEL``
    Logging level name used by the command line interface.

Example file::

    library_dirs: [topo]
    library_package: topo
    script_dirs: [examples, models]
    search_paths: [/opt/topographica]
    select: [N, W, D]
    whitespace:
      blank_lines_between_classes: 3
    docstrings:
      summary_width: 80
"""
from __future__ import annotations

__all__ = ['CONFIG_FILE_NAMES', 'Config', 'DocstringConfig', 'WhitespaceConfig', 'load_config']

import logging
import os
import typing

import yaml
from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError

from topoguide.exceptions import ConfigurationError
from topoguide.exceptions import PathNotFoundError
from topoguide.paths import PathContext
from topoguide.paths import resolve_path

logger = logging.getLogger(__name__)
logger.debug('Importing {}'.format(__name__))

CONFIG_FILE_NAMES = ('topoguide.yaml', '.topoguide.yaml')


class _Section(BaseModel):
    model_config = ConfigDict(extra='forbid')


class WhitespaceConfig(_Section):
    max_blank_lines_in_function: int = Field(1, ge=0, strict=True)
    blank_lines_between_methods: int = Field(2, ge=0, strict=True)
    blank_lines_between_classes: int = Field(3, ge=0, strict=True)
    max_function_lines: int = Field(60, ge=1, strict=True)


class DocstringConfig(_Section):
    summary_width: int = Field(80, ge=1, strict=True)
    require_private: bool = Field(False, strict=True)


class Config(_Section):
    """Settings for the checker and the path helpers."""
    library_dirs: typing.List[str] = Field(default_factory=lambda: ['topo'])
    library_package: str = 'topo'
    script_dirs: typing.List[str] = Field(default_factory=lambda: ['examples', 'models'])
    exclude: typing.List[str] = Field(default_factory=lambda: ['.git', '.hg', '.svn', '.tox', 'build',
                                                               'dist', '__pycache__'])
    filename_exemptions: typing.List[str] = Field(default_factory=lambda: ['__init__.py', '__main__.py',
                                                                           'setup.py', 'conftest.py',
                                                                           'test_*.py'])
    select: typing.List[str] = Field(default_factory=list)
    ignore: typing.List[str] = Field(default_factory=list)
    search_paths: typing.List[str] = Field(default_factory=list)
    prefix: typing.Optional[str] = None
    avoided_terms: typing.Dict[str, str] = Field(default_factory=dict)
    allowed_terms: typing.List[str] = Field(default_factory=list)
    whitespace: WhitespaceConfig = Field(default_factory=WhitespaceConfig)
    docstrings: DocstringConfig = Field(default_factory=DocstringConfig)
    source: typing.Optional[str] = Field(None, exclude=True)

    @classmethod
    def from_dict(cls, data: typing.Mapping, source: str = None) -> 'Config':
        """Create a Config from a mapping, such as a parsed YAML document.

        Raises:
            ConfigurationError: unknown key, wrongly typed or out of range value.
        """
        if data is None:
            data = {}
        if not isinstance(data, typing.Mapping):
            raise ConfigurationError('Configuration must be a mapping, not {}.'.format(type(data).__name__))
        if 'source' in data:
            raise ConfigurationError('Unknown configuration key: source')
        try:
            return cls.model_validate(dict(data, source=source))
        except ValidationError as e:
            raise ConfigurationError('; '.join(_describe(error) for error in e.errors())) from e

    def path_context(self) -> PathContext:
        return PathContext(search_paths=list(self.search_paths), prefix=self.prefix)

    def is_selected(self, code: str) -> bool:
        """Return True when rule *code* is enabled by *select* and *ignore*."""
        if self.select and not any(code.startswith(prefix) for prefix in self.select):
            return False
        return not any(code.startswith(prefix) for prefix in self.ignore)


def _describe(error) -> str:
    location = '.'.join(str(part) for part in error['loc'])
    if error['type'] == 'extra_forbidden':
        return 'Unknown configuration key: {}'.format(location)
    return 'Invalid configuration value {}: {}'.format(location, error['msg'])


def find_config_file(directory: str = None) -> typing.Optional[str]:
    """Locate a configuration file in *directory* (default: working directory)."""
    directory = directory or os.getcwd()
    for name in CONFIG_FILE_NAMES:
        try:
            return resolve_path(name, search_paths=[directory])
        except PathNotFoundError:
            continue
    return None


def load_config(path: str = None, environ: typing.Mapping[str, str] = None) -> Config:
    """Load the configuration.

    The file is, in order of preference, *path*, the ``TOPOGUIDE_CONFIG``
    environment variable, or a ``topoguide.yaml``/``.topoguide.yaml`` in the
    working directory. Without any file, the defaults are returned.
    """
    if environ is None:
        environ = os.environ
    if path is None:
        path = environ.get('TOPOGUIDE_CONFIG') or None
    if path is not None:
        try:
            path = resolve_path(path)
        except PathNotFoundError as e:
            raise ConfigurationError('Configuration file not found: {}'.format(path)) from e
    else:
        path = find_config_file()
        if path is None:
            logger.debug('No configuration file found; using defaults.')
            return Config()

    logger.info('Loading configuration from {}'.format(path))
    try:
        with open(path, 'r', encoding='utf-8') as fh:
            data = yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise ConfigurationError('Could not parse {}: {}'.format(path, e)) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError('Could not read {}: {}'.format(path, e)) from e
    return Config.from_dict(data, source=path)
