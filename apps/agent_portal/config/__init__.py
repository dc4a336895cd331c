"""
Agent portal configuration
"""
from .settings import PortalConfig

__all__ = ['PortalConfig']
