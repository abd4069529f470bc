"""
Flow Platform — core package.

Public API:
    InterpreterConfig   – top-level configuration
    RemoteConfig        – hosted-model intent source settings
    SerializationConfig – saved flow format control

The interpreter itself lives in ``flow_core.flow_platform.interpreter``.
"""
from .config import InterpreterConfig, RemoteConfig, SerializationConfig

__all__ = [
    'InterpreterConfig',
    'RemoteConfig',
    'SerializationConfig',
]
