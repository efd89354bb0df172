"""Runtime services shared across the editor and generators."""

from . import telemetry

__all__ = ["telemetry"]
