"""
Heat Exchanger Module - Effectiveness of the rink floor piping

Architecture: MVC (Model-View-Controller)

Components:
- model.py: Reynolds regime selection, Nusselt correlation, NTU-effectiveness
- controller.py: Orchestration and result packaging

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from app_icerink.modules.heat_exchanger.model import (
    HeatExchangerModel,
    HeatExchangerResult,
    effectiveness_from_ntu,
)
from app_icerink.modules.heat_exchanger.controller import HeatExchangerController

__all__ = [
    "HeatExchangerModel",
    "HeatExchangerResult",
    "HeatExchangerController",
    "effectiveness_from_ntu",
]
