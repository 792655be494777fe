"""Modules package - Components of the rink refrigeration system"""

from app_icerink.modules.heat_exchanger import HeatExchangerController, HeatExchangerModel
from app_icerink.modules.flow_control import FlowControlController, FlowControlModel
from app_icerink.modules.rink_system import IceRinkController, IceRinkSystemModel, RinkSystemView

__all__ = [
    "HeatExchangerController",
    "HeatExchangerModel",
    "FlowControlController",
    "FlowControlModel",
    "IceRinkController",
    "IceRinkSystemModel",
    "RinkSystemView",
]
