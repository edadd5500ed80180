"""Tail logs from multiple Kubernetes pods and containers at once"""

__version__ = "1.6.0"
