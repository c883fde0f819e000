"""
Custom exception hierarchy for the release signing configuration tool.
"""

class SigningConfigException(Exception):
    """Base exception for all system errors."""
    pass

class ConfigurationError(SigningConfigException):
    """Configuration loading or validation failed."""
    pass

class MissingCredentialError(SigningConfigException):
    """A required signing credential is absent or blank."""

    def __init__(self, key: str, properties_path: str):
        self.key = key
        self.properties_path = properties_path
        super().__init__(
            f"{key} is missing in {properties_path}. "
            f"Add '{key}=<value>' to {properties_path} and retry the build."
        )
