"""
vecmat Config - Global Configuration System

Provides the numeric tolerance used for singularity detection and the
default per-element display formats. Values can be changed globally or
overridden for the current thread inside a ``config.local(...)`` block.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Callable, Dict, Any, List
import logging
import math
import os
import threading

from vecmat._display import check_format


logger = logging.getLogger("vecmat.config")


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_EPSILON = 1e-10
DEFAULT_FORMAT = "%10.3f"


def _epsilon_from_env() -> float:
    """Read VECMAT_EPSILON, falling back to the built-in default."""
    raw = os.environ.get("VECMAT_EPSILON")
    if not raw:
        return DEFAULT_EPSILON
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid VECMAT_EPSILON=%r", raw)
        return DEFAULT_EPSILON
    if not math.isfinite(value) or value < 0.0:
        logger.warning("Ignoring non-finite or negative VECMAT_EPSILON=%r", raw)
        return DEFAULT_EPSILON
    return value


# =============================================================================
# Configuration Classes
# =============================================================================

@dataclass
class ComputeConfig:
    """Configuration for numeric operations."""
    epsilon: float = DEFAULT_EPSILON   # Pivots with |p| <= epsilon are singular


@dataclass
class DisplayConfig:
    """Configuration for the boxed string rendering."""
    vector_format: str = DEFAULT_FORMAT
    matrix_format: str = DEFAULT_FORMAT


# =============================================================================
# Global Configuration Manager
# =============================================================================

class VecmatConfig:
    """
    Global configuration manager for vecmat.

    Provides thread-local configuration with context manager support.

    Example:
        # Global configuration
        vecmat.config.compute = ComputeConfig(epsilon=1e-12)

        # Local configuration (context manager)
        with vecmat.config.local(compute=ComputeConfig(epsilon=1e-6)):
            singular = m.lu().is_singular()
        # Back to global config
    """

    def __init__(self):
        self._global_compute = ComputeConfig(epsilon=_epsilon_from_env())
        self._global_display = DisplayConfig()

        # Thread-local storage for context overrides
        self._local = threading.local()

        # Callbacks for config changes
        self._callbacks: Dict[str, List[Callable]] = {
            "compute": [],
            "display": [],
        }

    # -------------------------------------------------------------------------
    # Property Accessors (with thread-local override support)
    # -------------------------------------------------------------------------

    @property
    def compute(self) -> ComputeConfig:
        """Get compute configuration."""
        if getattr(self._local, "compute", None) is not None:
            return self._local.compute
        return self._global_compute

    @compute.setter
    def compute(self, value: ComputeConfig):
        """Set global compute configuration."""
        self._global_compute = value
        self._notify("compute", value)

    @property
    def display(self) -> DisplayConfig:
        """Get display configuration."""
        if getattr(self._local, "display", None) is not None:
            return self._local.display
        return self._global_display

    @display.setter
    def display(self, value: DisplayConfig):
        """Set global display configuration."""
        self._global_display = value
        self._notify("display", value)

    # -------------------------------------------------------------------------
    # Convenience Properties
    # -------------------------------------------------------------------------

    @property
    def epsilon(self) -> float:
        """Singularity tolerance."""
        return self.compute.epsilon

    @epsilon.setter
    def epsilon(self, value: float):
        """Set singularity tolerance."""
        value = float(value)
        if not math.isfinite(value) or value < 0.0:
            raise ValueError(f"epsilon must be finite and non-negative, got {value}")
        self.compute = ComputeConfig(epsilon=value)

    # -------------------------------------------------------------------------
    # Context Manager Support
    # -------------------------------------------------------------------------

    def local(self, **kwargs) -> "_LocalConfigContext":
        """
        Create a local configuration context.

        Args:
            **kwargs: Configuration overrides (compute, display)

        Returns:
            Context manager
        """
        unknown = set(kwargs) - set(self._callbacks)
        if unknown:
            raise TypeError(f"Unknown config sections: {sorted(unknown)}")
        return _LocalConfigContext(self, **kwargs)

    def _set_local(self, **kwargs):
        """Set thread-local configuration."""
        for key, value in kwargs.items():
            if value is not None:
                setattr(self._local, key, value)

    def _clear_local(self, keys: List[str]):
        """Clear thread-local configuration."""
        for key in keys:
            if hasattr(self._local, key):
                setattr(self._local, key, None)

    # -------------------------------------------------------------------------
    # Callback Registration
    # -------------------------------------------------------------------------

    def on_change(self, config_name: str, callback: Callable):
        """
        Register callback for configuration changes.

        Args:
            config_name: Name of config ("compute" or "display")
            callback: Function to call with the new section value
        """
        if config_name not in self._callbacks:
            raise KeyError(f"Unknown config section: {config_name}")
        self._callbacks[config_name].append(callback)

    def _notify(self, config_name: str, value: Any):
        """Notify callbacks of configuration change."""
        logger.debug("config section %s changed to %r", config_name, value)
        for callback in self._callbacks.get(config_name, []):
            callback(value)

    # -------------------------------------------------------------------------
    # Reset
    # -------------------------------------------------------------------------

    def reset(self):
        """Reset all configurations to defaults.

        Thread-local overrides of the calling thread are cleared as well,
        and change callbacks fire for every section.
        """
        self._clear_local(list(self._callbacks))
        self.compute = ComputeConfig(epsilon=_epsilon_from_env())
        self.display = DisplayConfig()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary."""
        return {
            "compute": {
                "epsilon": self.compute.epsilon,
            },
            "display": {
                "vector_format": self.display.vector_format,
                "matrix_format": self.display.matrix_format,
            },
        }

    def __repr__(self) -> str:
        return f"VecmatConfig({self.to_dict()})"


class _LocalConfigContext:
    """Context manager for local configuration override."""

    def __init__(self, config: VecmatConfig, **kwargs):
        self._config = config
        self._kwargs = kwargs
        self._keys = list(kwargs.keys())

    def __enter__(self):
        self._config._set_local(**self._kwargs)
        return self._config

    def __exit__(self, exc_type, exc_val, exc_tb):
        self._config._clear_local(self._keys)
        return False


# =============================================================================
# Global Instance
# =============================================================================

config = VecmatConfig()


# =============================================================================
# Convenience Functions
# =============================================================================

def get_config() -> VecmatConfig:
    """Get the global configuration instance."""
    return config


def get_epsilon(tol: Optional[float] = None) -> float:
    """Resolve an explicit tolerance or fall back to the configured one."""
    if tol is None:
        return config.compute.epsilon
    tol = float(tol)
    if not math.isfinite(tol) or tol < 0.0:
        raise ValueError(f"Tolerance must be finite and non-negative, got {tol}")
    return tol


def set_epsilon(epsilon: float):
    """Set the global singularity tolerance."""
    config.epsilon = epsilon


def set_format(fmt: str, *, vector: bool = True, matrix: bool = True):
    """
    Configure the default per-element display format.

    Args:
        fmt: printf-style format applied to one float (e.g. "%8.2f")
        vector: Apply to Vector and CircularBuffer rendering
        matrix: Apply to Matrix rendering
    """
    check_format(fmt)
    current = config.display
    config.display = DisplayConfig(
        vector_format=fmt if vector else current.vector_format,
        matrix_format=fmt if matrix else current.matrix_format,
    )


# =============================================================================
# Exports
# =============================================================================

__all__ = [
    "DEFAULT_EPSILON",
    "DEFAULT_FORMAT",
    # Config classes
    "ComputeConfig",
    "DisplayConfig",
    # Main config class
    "VecmatConfig",
    # Global instance
    "config",
    # Convenience functions
    "get_config",
    "get_epsilon",
    "set_epsilon",
    "set_format",
]
