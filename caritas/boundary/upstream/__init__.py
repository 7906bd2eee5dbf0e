"""Upstream function host adapter."""

from caritas.boundary.upstream.function_client import UpstreamFunctionClient

__all__ = ["UpstreamFunctionClient"]
