"""AI provider status probes."""

from caritas.boundary.providers.probes import (
    GoogleAIProbe,
    OpenRouterProbe,
    ProviderProbe,
    ProviderProbeError,
    SerperProbe,
    build_default_probes,
)

__all__ = [
    "GoogleAIProbe",
    "OpenRouterProbe",
    "ProviderProbe",
    "ProviderProbeError",
    "SerperProbe",
    "build_default_probes",
]
