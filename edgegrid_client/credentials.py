"""
Credential loading and validation.

Signing code never reads storage itself; it receives a validated
``Credentials`` value, usually obtained from a ``CredentialProvider``.
"""

import logging
import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Dict, List, Mapping, Union

from .constants import CREDENTIAL_FIELDS, DEFAULT_EDGERC, DEFAULT_SECTION
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(r'^\s*\[(.*)]')
_QUOTED_RE = re.compile(r'''^\s*(['"])((?:\\\1|.)*?)\1\s*(?:;.*)?$''')


@dataclass(frozen=True)
class Credentials:
    """API credentials for one EdgeGrid client."""

    host: str
    client_token: str
    client_secret: str
    access_token: str

    def missing_fields(self) -> List[str]:
        """Names of empty fields, in reporting order."""
        return [name for name in CREDENTIAL_FIELDS if not getattr(self, name)]

    def __repr__(self):
        return (
            f"Credentials(host={self.host!r}, "
            f"client_token={(self.client_token or '')[:8]!r}..., "
            f"access_token={(self.access_token or '')[:8]!r}...)"
        )


def validate_credentials(config: Union[Credentials, Mapping[str, str]]) -> Credentials:
    """
    Validate credentials and normalize the host.

    Args:
        config: A ``Credentials`` value or a mapping with the keys
            client_token, client_secret, access_token and host

    Returns:
        Credentials whose host carries an ``https://`` scheme

    Raises:
        ConfigurationError: If any field is missing or the host uses
            plain HTTP
    """
    if isinstance(config, Credentials):
        values = {f.name: getattr(config, f.name) for f in fields(Credentials)}
    else:
        values = {name: config.get(name) for name in CREDENTIAL_FIELDS}

    missing = [name for name in CREDENTIAL_FIELDS if not values[name]]
    if missing:
        raise ConfigurationError(
            f"Invalid configuration! Missing: {', '.join(missing)}",
            missing=missing
        )

    host = values['host'].rstrip('/')
    if host.startswith('http://'):
        raise ConfigurationError(f"host must use https: {host}")
    if not host.startswith('https://'):
        host = 'https://' + host
    values['host'] = host

    return Credentials(**values)


def parse_edgerc(text: str, section: str = DEFAULT_SECTION) -> Dict[str, str]:
    """
    Parse one section of an ``.edgerc`` file.

    Quoted values keep everything between the quotes; unquoted values end
    at the first ``;``. A trailing slash is dropped from every value.

    Raises:
        ConfigurationError: If the section is absent or empty
    """
    lines = text.splitlines()
    section_lines = None

    for i, line in enumerate(lines):
        match = _SECTION_RE.match(line)
        if match and match.group(1) == section:
            section_lines = []
            for following in lines[i + 1:]:
                if _SECTION_RE.match(following):
                    break
                section_lines.append(following)
            break

    if not section_lines:
        raise ConfigurationError(
            f"An error occurred parsing the .edgerc file. "
            f"You probably specified an invalid section name: {section}"
        )

    result = {}
    for line in section_lines:
        line = line.strip()
        if line.startswith(';') or '=' not in line:
            continue

        key, value = line.split('=', 1)
        quoted = _QUOTED_RE.match(value)
        if quoted:
            value = quoted.group(2)
        else:
            value = value.split(';', 1)[0].strip()

        if value.endswith('/'):
            value = value[:-1]

        result[key.strip()] = value

    return result


class CredentialProvider(ABC):
    """Source of validated credentials."""

    @abstractmethod
    def load(self) -> Credentials:
        """Return validated credentials or raise ConfigurationError."""
        ...


class StaticCredentialProvider(CredentialProvider):
    """Credentials held in memory, e.g. from environment or a secret store."""

    def __init__(self, config: Union[Credentials, Mapping[str, str]]):
        self.config = config

    def load(self) -> Credentials:
        return validate_credentials(self.config)


class EdgercCredentialProvider(CredentialProvider):
    """Credentials read from a section of an ``.edgerc`` file."""

    def __init__(self, path: str = DEFAULT_EDGERC, section: str = DEFAULT_SECTION):
        self.path = os.path.expanduser(path)
        self.section = section

    def load(self) -> Credentials:
        try:
            with open(self.path, encoding='utf-8') as f:
                text = f.read()
        except OSError as e:
            raise ConfigurationError(f"Unable to read {self.path}: {e}")

        logger.debug("Loading section [%s] from %s", self.section, self.path)
        return validate_credentials(parse_edgerc(text, self.section))
