"""
Heat Exchanger Controller - Orchestration layer

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from app_icerink.core.refrigeration_circuit import RefrigerationCircuit
from app_icerink.modules.heat_exchanger.model import HeatExchangerModel, HeatExchangerResult


class HeatExchangerController:
    """
    Controller for the floor piping effectiveness calculation.

    Orchestrates model execution without direct UI dependencies.
    """

    def __init__(self):
        """Initialize controller with heat exchanger model."""
        self.model = HeatExchangerModel()

    def solve(
        self,
        circuit: RefrigerationCircuit,
        inlet_temperature: float,
        mass_flow: float,
    ) -> HeatExchangerResult:
        """
        Solve the effectiveness calculation.

        Args:
            circuit: Floor piping (geometry and coolant)
            inlet_temperature: Refrigerant inlet temperature [°C]
            mass_flow: Refrigerant mass flow rate [kg/s]

        Returns:
            HeatExchangerResult with effectiveness and diagnostics
        """
        return self.model.solve(
            circuit=circuit,
            inlet_temperature=inlet_temperature,
            mass_flow=mass_flow,
        )

    def effectiveness(
        self,
        circuit: RefrigerationCircuit,
        inlet_temperature: float,
        mass_flow: float,
    ) -> float:
        """Effectiveness only [-]."""
        return self.solve(circuit, inlet_temperature, mass_flow).effectiveness
