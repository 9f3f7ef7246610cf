"""Upstream data access for Skyview."""

from .opensky import GatewayResult, OpenSkyGateway
from .state_vectors import decode_state_vector, decode_states

__all__ = [
    "GatewayResult",
    "OpenSkyGateway",
    "decode_state_vector",
    "decode_states",
]
