"""Caritas backend: function proxy, provider status and document processing."""

__version__ = "0.1.0"
