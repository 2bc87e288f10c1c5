"""Network module - The aggregate root and its summary."""

from .social_network import SocialNetwork, NetworkConfig
from .summary import NetworkSummary

__all__ = [
    "SocialNetwork",
    "NetworkConfig",
    "NetworkSummary",
]
