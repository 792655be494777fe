"""
Ice Rink System Model - Load orchestration of one refrigeration system

One evaluation per control timestep:
    1. No incoming flow or system unavailable -> idle, no heat exchange
    2. Effectiveness of the floor piping at the current flow
    3. Heat source injected into the slab at the current flow
    4. Flow required by the active control target
    5. Reverse heat flow cutoff: never heat the ice in cooling mode

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from app_icerink.core.errors import ConfigurationError
from app_icerink.core.refrigeration_circuit import RefrigerationCircuit
from app_icerink.modules.heat_exchanger import HeatExchangerController, HeatExchangerResult
from app_icerink.modules.flow_control import (
    ControlResult,
    ControlTarget,
    FlowCommand,
    FlowControlController,
    LinearSurfaceCoupling,
    OutletTemperatureTarget,
    SurfaceTemperatureTarget,
    outlet_temperature,
)

logger = logging.getLogger(__name__)


class OperatingMode(Enum):
    """Operating mode reported for one evaluation."""

    NOT_OPERATING = 0
    COOLING = 2


@dataclass
class RinkEvaluationResult:
    """
    Result of one control evaluation.

    Attributes:
        command: Flow command handed to the actuator
        heat_source: Heat injected into the slab [W], negative when cooling
        operating_mode: Mode after the reverse heat flow cutoff
        inlet_temperature: Refrigerant inlet temperature [°C]
        outlet_temperature: Refrigerant outlet temperature [°C]
        mass_flow: Incoming refrigerant flow the evaluation was based on [kg/s]
        effectiveness: Heat exchanger effectiveness, None when idle [-]
        heat_exchanger: Effectiveness calculation details, None when idle
        control: Flow resolution details, None when idle
        flags: Diagnostic flags dictionary
    """
    command: FlowCommand
    heat_source: float
    operating_mode: OperatingMode
    inlet_temperature: float
    outlet_temperature: float
    mass_flow: float
    effectiveness: Optional[float] = None
    heat_exchanger: Optional[HeatExchangerResult] = None
    control: Optional[ControlResult] = None
    flags: Dict[str, bool] = field(default_factory=dict)

    @property
    def cooling_power(self) -> float:
        """Heat removed from the slab [W], zero unless cooling."""
        return -self.heat_source if self.heat_source < 0 else 0.0

    @property
    def is_idle(self) -> bool:
        return self.flags.get("idle", False)


class IceRinkSystemModel:
    """
    Orchestrates effectiveness, heat source and flow control for one system.

    Direct and indirect circuits share this logic; they differ only in the
    coolant properties the circuit returns.
    """

    def __init__(
        self,
        circuit: RefrigerationCircuit,
        flow_control: FlowControlController,
        heat_exchanger: Optional[HeatExchangerController] = None,
    ):
        self.circuit = circuit
        self.flow_control = flow_control
        self.heat_exchanger = heat_exchanger or HeatExchangerController()

    def evaluate(
        self,
        target: ControlTarget,
        coupling: LinearSurfaceCoupling,
        inlet_temperature: float,
        incoming_flow: float,
        available: bool = True,
    ) -> RinkEvaluationResult:
        """
        Evaluate the system for one timestep.

        Args:
            target: Active control target
            coupling: Surface coupling already computed for this timestep
            inlet_temperature: Refrigerant inlet temperature [°C]
            incoming_flow: Refrigerant flow currently at the inlet node [kg/s]
            available: False when the availability schedule is off

        Returns:
            RinkEvaluationResult with flow command and reporting values

        Raises:
            ConfigurationError: If the target is neither control policy
        """
        name = self.circuit.name
        if not isinstance(target, (OutletTemperatureTarget, SurfaceTemperatureTarget)):
            logger.error("Unrecognized control target %r for system '%s'", target, name)
            raise ConfigurationError(f"Unrecognized control target {target!r}", name)

        if not available or not incoming_flow > 0:
            return self._idle(inlet_temperature, incoming_flow, unavailable=not available)

        hx = self.heat_exchanger.solve(self.circuit, inlet_temperature, incoming_flow)
        cp = hx.properties.specific_heat

        control = self.flow_control.solve(
            coupling=coupling,
            inlet_temperature=inlet_temperature,
            effectiveness=hx.effectiveness,
            specific_heat=cp,
            target=target,
            reference_flow=incoming_flow,
        )
        heat_source = coupling.heat_source(inlet_temperature, hx.effectiveness, incoming_flow, cp)
        command = control.command
        mode = OperatingMode.COOLING
        reverse_flow = heat_source >= 0.0

        if reverse_flow:
            command = FlowCommand(command.requested_flow, 0.0, True)
            heat_source = 0.0
            mode = OperatingMode.NOT_OPERATING
            t_out = inlet_temperature
        else:
            t_out = outlet_temperature(inlet_temperature, heat_source, incoming_flow, cp)

        logger.debug(
            "System '%s': m_in=%.4f kg/s, eps=%.4f, Q=%.1f W, flow=%.4f kg/s, mode=%s",
            name, incoming_flow, hx.effectiveness, heat_source, command.clamped_flow, mode.name,
        )

        return RinkEvaluationResult(
            command=command,
            heat_source=heat_source,
            operating_mode=mode,
            inlet_temperature=inlet_temperature,
            outlet_temperature=t_out,
            mass_flow=incoming_flow,
            effectiveness=hx.effectiveness,
            heat_exchanger=hx,
            control=control,
            flags={
                "idle": False,
                "unavailable": False,
                "reverse_heat_flow": reverse_flow,
                **control.flags,
            },
        )

    def _idle(self, inlet_temperature: float, incoming_flow: float, unavailable: bool) -> RinkEvaluationResult:
        logger.debug("System '%s' idle (flow=%.4f kg/s, unavailable=%s)",
                     self.circuit.name, incoming_flow, unavailable)
        return RinkEvaluationResult(
            command=FlowCommand(0.0, 0.0, True),
            heat_source=0.0,
            operating_mode=OperatingMode.NOT_OPERATING,
            inlet_temperature=inlet_temperature,
            outlet_temperature=inlet_temperature,
            mass_flow=max(incoming_flow, 0.0),
            flags={"idle": True, "unavailable": unavailable, "reverse_heat_flow": False},
        )
