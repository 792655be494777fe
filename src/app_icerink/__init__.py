"""
app_icerink - Ice Rink Refrigerated Floor Control

Control core for the refrigerated floor of an indoor ice rink: coolant
properties, floor piping effectiveness, flow control policies and the
per-timestep load orchestration of each refrigeration system.

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

__version__ = "0.1.0"

from app_icerink.core.errors import ConfigurationError
from app_icerink.core.props_service import PropsService, get_props_service

__all__ = [
    "ConfigurationError",
    "PropsService",
    "get_props_service",
]
