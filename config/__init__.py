# Nomograph Engine Configuration Module
from .engine_config import (
    EngineConfig, config, LocatorParams, WindParams, RegressionParams
)

__all__ = [
    "EngineConfig", "config", "LocatorParams", "WindParams", "RegressionParams"
]
