"""
CoolApp Observability Module.

Provides in-process metrics collection for forecast operations and errors.
"""

from coolapp.observability.metrics import MetricsStore, get_metrics_store

__all__ = ["MetricsStore", "get_metrics_store"]
