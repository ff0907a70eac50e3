# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Credentials file access.

The credentials file is an INI document with one section per cluster identifier and an
optional global section for keys that appear before any section header (it may also be
written explicitly as ``[DEFAULT]``). Sections don't inherit keys from the global
section; fallbacks are applied by the callers through the typed lookups below.

Example::

    user = datadog

    [prod-cluster]
    password = secret
    connect_timeout = 3
    extra_performance = true
    rename_cluster = production
    rename_instance_prod-cluster-1 = primary
"""

import configparser
from .constants import DEFAULT_USERNAME, KEY_USER
from .exceptions import CredentialsFileException
from loguru import logger
from typing import List, Optional


GLOBAL_SECTION = 'DEFAULT'

# configparser treats its default section specially; move it out of the way so that
# [DEFAULT] is an ordinary section and nothing is inherited
_PARSER_DEFAULT_SECTION = '__rds_datadog_discovery_defaults__'

_TRUE_VALUES = {'1', 't', 'true', 'y', 'yes', 'on'}
_FALSE_VALUES = {'0', 'f', 'false', 'n', 'no', 'off'}


class CredentialsStore:
    """Sectioned key-value store backed by an INI document."""

    def __init__(self, parser: configparser.ConfigParser):
        """Initialize the store.

        Args:
            parser: A parser that already holds the credentials document
        """
        self._parser = parser

    @staticmethod
    def _new_parser() -> configparser.ConfigParser:
        parser = configparser.ConfigParser(
            default_section=_PARSER_DEFAULT_SECTION,
            interpolation=None,
            strict=False,
        )
        # keys such as rename_instance_<identifier> are case sensitive
        parser.optionxform = str
        return parser

    @classmethod
    def from_string(cls, text: str, source: str = '<string>') -> 'CredentialsStore':
        """Build a store from the text of a credentials document.

        Leading whitespace is insignificant, so an indented line is a key of its own
        rather than the continuation of the previous value.

        Raises:
            configparser.Error: If the document is not valid INI
        """
        lines = (line.lstrip() for line in text.lstrip('\ufeff').splitlines())
        parser = cls._new_parser()
        parser.read_string(f'[{GLOBAL_SECTION}]\n' + '\n'.join(lines), source=source)
        return cls(parser)

    @classmethod
    def from_file(cls, filename: str) -> 'CredentialsStore':
        """Load the credentials file.

        Args:
            filename: Path to the INI file

        Returns:
            CredentialsStore: The loaded store

        Raises:
            CredentialsFileException: If the file can't be read or parsed
        """
        try:
            with open(filename, encoding='utf-8-sig') as handle:
                text = handle.read()
            store = cls.from_string(text, source=filename)
        except (OSError, UnicodeDecodeError, configparser.Error) as error:
            logger.debug(f'Failed to load {filename}: {error}')
            raise CredentialsFileException(filename) from error
        logger.debug(f'Loaded credentials for sections: {", ".join(store.sections())}')
        return store

    def sections(self) -> List[str]:
        """List the named sections, excluding the global section."""
        return [name for name in self._parser.sections() if name != GLOBAL_SECTION]

    def has_section(self, section: str) -> bool:
        """Check whether a section exists."""
        return self._parser.has_section(section)

    def _raw(self, section: str, key: str) -> Optional[str]:
        if not self._parser.has_section(section):
            return None
        value = self._parser.get(section, key, fallback=None)
        if value is None:
            return None
        value = value.strip()
        return value or None

    def get_string(self, section: str, key: str, default: str) -> str:
        """Get a string value, or the default when it is missing or empty."""
        value = self._raw(section, key)
        return default if value is None else value

    def get_int(self, section: str, key: str, default: int) -> int:
        """Get an integer value, or the default when it is missing or not an integer."""
        value = self._raw(section, key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            logger.warning(f'Ignoring non-integer value for [{section}] {key}: {value!r}')
            return default

    def get_bool(self, section: str, key: str, default: bool) -> bool:
        """Get a boolean value, or the default when it is missing or not a boolean."""
        value = self._raw(section, key)
        if value is None:
            return default
        lowered = value.lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        logger.warning(f'Ignoring non-boolean value for [{section}] {key}: {value!r}')
        return default

    def global_default_user(self) -> str:
        """Get the user applied to clusters that don't configure their own."""
        return self.get_string(GLOBAL_SECTION, KEY_USER, DEFAULT_USERNAME)
