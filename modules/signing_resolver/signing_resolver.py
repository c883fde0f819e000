import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from modules.properties_loader import ConfigMap, PropertiesLoader
from utils.exceptions import MissingCredentialError
from utils import constants

REQUIRED_KEYS = constants.REQUIRED_SIGNING_KEYS


@dataclass(frozen=True)
class SigningCredentials:
    """Release signing credentials. Passwords are kept out of repr()."""
    store_file: str
    store_password: str = field(repr=False)
    key_alias: str
    key_password: str = field(repr=False)

    def keystore_path(self, base_dir: Union[str, Path] = ".") -> Path:
        """Resolve store_file against base_dir unless it is already absolute."""
        store_path = Path(self.store_file).expanduser()
        if store_path.is_absolute():
            return store_path
        return Path(base_dir) / store_path


class ResolutionState(Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"
    FAILED = "failed"


class SigningConfigResolver:
    """
    Resolves SigningCredentials from a ConfigMap.

    Keys are checked in REQUIRED_KEYS order and the first absent or blank
    one raises MissingCredentialError. Missing keys are never aggregated
    and never replaced by defaults.
    """

    def __init__(self, properties_path: Union[str, Path] = constants.DEFAULT_PROPERTIES_PATH,
                 logger: Optional[logging.Logger] = None):
        self.properties_path = str(properties_path)
        self.logger = logger or logging.getLogger("signing_resolver")

    def resolve(self, config_map: ConfigMap) -> SigningCredentials:
        """
        Build SigningCredentials from `config_map`.

        Raises:
            MissingCredentialError: For the first key that is absent or blank.
        """
        values = []
        for key in REQUIRED_KEYS:
            value = self._lookup(config_map, key)
            if value is None:
                self.logger.error(f"Signing credential '{key}' is missing in {self.properties_path}")
                raise MissingCredentialError(key, self.properties_path)
            values.append(value)

        credentials = SigningCredentials(*values)
        self.logger.info(
            f"Signing config resolved (store file: {credentials.store_file}, "
            f"alias: {credentials.key_alias})"
        )
        return credentials

    @staticmethod
    def _lookup(config_map: ConfigMap, key: str) -> Optional[str]:
        value = config_map.get(key)
        if value is None or not value.strip():
            return None
        return value


class SigningResolution:
    """
    One-shot resolution of a ConfigMap: UNRESOLVED -> RESOLVED | FAILED.

    Both end states are terminal. Repeated calls to resolve() return the
    same credentials or re-raise the same error.
    """

    def __init__(self, config_map: ConfigMap, resolver: Optional[SigningConfigResolver] = None):
        self.config_map = config_map
        self.resolver = resolver or SigningConfigResolver()
        self.state = ResolutionState.UNRESOLVED
        self.credentials: Optional[SigningCredentials] = None
        self.error: Optional[MissingCredentialError] = None
        self._error_traceback = None

    def resolve(self) -> SigningCredentials:
        if self.state is ResolutionState.RESOLVED:
            return self.credentials
        if self.state is ResolutionState.FAILED:
            # Re-raise from the original traceback so it does not grow per call.
            raise self.error.with_traceback(self._error_traceback)

        try:
            self.credentials = self.resolver.resolve(self.config_map)
        except MissingCredentialError as e:
            self.error = e
            self._error_traceback = e.__traceback__
            self.state = ResolutionState.FAILED
            raise
        self.state = ResolutionState.RESOLVED
        return self.credentials


def resolve_signing_config(path: Union[str, Path] = constants.DEFAULT_PROPERTIES_PATH,
                           encoding: str = constants.DEFAULT_ENCODING) -> SigningCredentials:
    """Load the properties file at `path` and resolve its signing credentials."""
    config_map = PropertiesLoader(encoding=encoding).load(path)
    return SigningConfigResolver(properties_path=path).resolve(config_map)
