"""
    Platform configuration — remote interpreter settings, serialization.

    Configuration is passed explicitly to the interpreter and services;
    nothing in the interpretation path reads the process environment.
    ``RemoteConfig.from_env()`` is a caller-side convenience.
"""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

DEFAULT_REMOTE_ENDPOINT = "https://api.sarvam.ai/v1/chat/completions"
DEFAULT_REMOTE_MODEL = "sarvam-m"

# Checked in order by RemoteConfig.from_env
API_KEY_ENV_VARS = ("SARVAM_API_KEY", "NEXT_PUBLIC_SARVAM_API_KEY")


@dataclass
class RemoteConfig:
    """
    Settings for the hosted-model intent source.

    Attributes:
        api_key:   Subscription key sent as ``api-subscription-key``.
                   Empty means the remote source is unavailable.
        endpoint:  Chat-completions URL.
        model:     Model name sent in the request body.
        timeout:   Seconds allowed for the single round trip.
    """
    api_key: str = ""
    endpoint: str = DEFAULT_REMOTE_ENDPOINT
    model: str = DEFAULT_REMOTE_MODEL
    timeout: float = 15.0

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'RemoteConfig':
        """Build a config from ``SARVAM_API_KEY`` (or the public variant)."""
        environ = os.environ if environ is None else environ
        api_key = next((environ[name] for name in API_KEY_ENV_VARS if environ.get(name)), "")
        return cls(api_key=api_key, **overrides)


@dataclass
class SerializationConfig:
    """
    Controls the saved flow format.

    Attributes:
        include_positions:  Write node canvas positions.
        include_timestamp:  Add a ``savedAt`` ISO timestamp.
        indent:             JSON indentation for ``to_json`` / ``save``.
    """
    include_positions: bool = True
    include_timestamp: bool = True
    indent: Optional[int] = 2


@dataclass
class InterpreterConfig:
    """
    Top-level configuration for command interpretation.

    Attributes:
        remote:         Hosted-model settings; ``None`` disables the remote
                        intent source entirely.
        serialization:  Saved flow format.
    """
    remote: Optional[RemoteConfig] = None
    serialization: SerializationConfig = field(default_factory=SerializationConfig)

    @property
    def remote_enabled(self) -> bool:
        return self.remote is not None and self.remote.is_configured
