"""
Flow Control Module - Control strategy resolver

Architecture: MVC (Model-View-Controller)

Components:
- model.py: Control targets, surface coupling, outlet/surface control policies
- controller.py: Bounds ownership and orchestration

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from app_icerink.modules.flow_control.model import (
    ControlResult,
    ControlTarget,
    ControlType,
    FlowBounds,
    FlowCommand,
    FlowControlModel,
    LinearSurfaceCoupling,
    OutletTemperatureTarget,
    SurfaceTemperatureTarget,
    make_target,
    outlet_temperature,
)
from app_icerink.modules.flow_control.controller import FlowControlController

__all__ = [
    "ControlResult",
    "ControlTarget",
    "ControlType",
    "FlowBounds",
    "FlowCommand",
    "FlowControlModel",
    "FlowControlController",
    "LinearSurfaceCoupling",
    "OutletTemperatureTarget",
    "SurfaceTemperatureTarget",
    "make_target",
    "outlet_temperature",
]
