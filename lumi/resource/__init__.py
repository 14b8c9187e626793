# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Resource-side configuration: config maps and their preexec applier.
"""

from __future__ import annotations

from .config import ConfigApplier, ConfigError, ConfigMap

__all__ = ["ConfigApplier", "ConfigError", "ConfigMap"]
