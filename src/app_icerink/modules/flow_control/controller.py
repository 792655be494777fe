"""
Flow Control Controller - Orchestration layer

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from typing import Optional

from app_icerink.modules.flow_control.model import (
    ControlResult,
    ControlTarget,
    FlowBounds,
    FlowControlModel,
    LinearSurfaceCoupling,
)


class FlowControlController:
    """
    Controller for the control strategy resolver.

    Holds the flow bounds of one system so callers only pass the
    per-timestep inputs.
    """

    def __init__(self, bounds: FlowBounds, system_name: str = ""):
        """
        Initialize controller with resolver model.

        Raises:
            ConfigurationError: If the bounds are inconsistent
        """
        bounds.validate(system_name)
        self.model = FlowControlModel()
        self.bounds = bounds
        self.system_name = system_name
        self.last_result: Optional[ControlResult] = None

    def solve(
        self,
        coupling: LinearSurfaceCoupling,
        inlet_temperature: float,
        effectiveness: float,
        specific_heat: float,
        target: ControlTarget,
        reference_flow: Optional[float] = None,
    ) -> ControlResult:
        """
        Resolve the flow for the active control target.

        Args:
            coupling: Surface coupling of the current timestep
            inlet_temperature: Refrigerant inlet temperature [°C]
            effectiveness: Heat exchanger effectiveness [-]
            specific_heat: Refrigerant specific heat [J/kg/K]
            target: Active control target
            reference_flow: Current flow [kg/s]

        Returns:
            ControlResult with flow command and diagnostics
        """
        result = self.model.required_flow(
            coupling=coupling,
            inlet_temperature=inlet_temperature,
            effectiveness=effectiveness,
            specific_heat=specific_heat,
            target=target,
            bounds=self.bounds,
            reference_flow=reference_flow,
            system_name=self.system_name,
        )
        self.last_result = result
        return result
