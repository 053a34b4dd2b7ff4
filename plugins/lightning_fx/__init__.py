"""Procedural branching lightning on a decaying intensity buffer."""

from .config import BoltConfig, InvalidConfiguration
from .engine import LightningEngine, create_engine
from .intensity import IntensityBuffer
from .simulator import BoltSimulator

__all__ = [
    "BoltConfig",
    "BoltSimulator",
    "IntensityBuffer",
    "InvalidConfiguration",
    "LightningEngine",
    "create_engine",
]
