"""
Rink System Module - Load orchestration of a refrigerated floor

Architecture: MVC (Model-View-Controller)

Components:
- model.py: Per-timestep evaluation, idle path and reverse heat flow cutoff
- controller.py: Configuration, schedules, actuator and reporting
- view.py: Console reports and effectiveness diagrams

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from app_icerink.modules.rink_system.model import (
    IceRinkSystemModel,
    OperatingMode,
    RinkEvaluationResult,
)
from app_icerink.modules.rink_system.controller import IceRinkController, build_circuit
from app_icerink.modules.rink_system.view import RinkSystemView, plot_effectiveness_curve

__all__ = [
    "IceRinkSystemModel",
    "OperatingMode",
    "RinkEvaluationResult",
    "IceRinkController",
    "build_circuit",
    "RinkSystemView",
    "plot_effectiveness_curve",
]
