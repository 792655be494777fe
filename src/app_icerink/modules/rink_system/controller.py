"""
Ice Rink System Controller

Builds one refrigeration system from a parameter dictionary and runs it
against the host collaborators (schedules, flow network, surface heat
balance) once per control timestep.

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import logging
from typing import Dict, Optional

from app_icerink.core.errors import ConfigurationError
from app_icerink.core.fluid_properties import Coolant
from app_icerink.core.interfaces import FlowActuator, ScheduleLookup, SurfaceHeatBalance
from app_icerink.core.refrigeration_circuit import (
    CircuitCalcMethod,
    DirectRefrigerationCircuit,
    IndirectRefrigerationCircuit,
    RefrigerationCircuit,
    circuits_from_length,
)
from app_icerink.modules.flow_control import (
    ControlType,
    FlowBounds,
    FlowControlController,
    LinearSurfaceCoupling,
    make_target,
)
from .model import IceRinkSystemModel, RinkEvaluationResult

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


def build_circuit(params: Dict) -> RefrigerationCircuit:
    """
    Build the floor piping from configuration parameters.

    Args:
        params: Parameter dictionary (see IceRinkController.get_default_params)

    Returns:
        Direct or indirect refrigeration circuit

    Raises:
        ConfigurationError: On unknown system type, circuit method or coolant
    """
    name = params.get('name', 'Rink')
    system_type = str(params.get('system_type', 'indirect')).lower()
    tube_length = params.get('tube_length', 15000.0)

    try:
        method = CircuitCalcMethod(params.get('circuit_calc_method', 'OnePerSurface'))
    except ValueError:
        logger.error("Unknown circuit calculation method %r for system '%s'",
                     params.get('circuit_calc_method'), name)
        raise ConfigurationError(
            f"Unknown circuit calculation method '{params.get('circuit_calc_method')}'", name
        ) from None

    if method is CircuitCalcMethod.FROM_CIRCUIT_LENGTH:
        num_circuits = circuits_from_length(tube_length, params.get('circuit_length', 106.7), name)
    else:
        num_circuits = params.get('num_circuits', 1)

    if system_type == 'direct':
        coolant = Coolant.parse(params.get('coolant', 'NH3'), name)
        if coolant is not Coolant.AMMONIA:
            logger.error("Direct system '%s' configured with brine coolant %s", name, coolant.value)
            raise ConfigurationError(f"Direct systems circulate ammonia, got {coolant.value}", name)
        return DirectRefrigerationCircuit(
            name,
            tube_diameter=params.get('tube_diameter', 0.025),
            tube_length=tube_length,
            num_circuits=num_circuits,
            property_source=params.get('property_source', 'tables'),
        )
    if system_type == 'indirect':
        return IndirectRefrigerationCircuit(
            name,
            tube_diameter=params.get('tube_diameter', 0.025),
            tube_length=tube_length,
            num_circuits=num_circuits,
            coolant=Coolant.parse(params.get('coolant', 'CaCl2'), name),
            concentration=params.get('concentration', 30.0),
        )
    logger.error("Unknown system type %r for system '%s'", system_type, name)
    raise ConfigurationError(f"Unknown system type '{system_type}'", name)


class IceRinkController:
    """Controller for one ice rink refrigeration system."""

    def __init__(
        self,
        params: Dict,
        schedules: ScheduleLookup,
        actuator: FlowActuator,
        surface_balance: Optional[SurfaceHeatBalance] = None,
    ):
        """
        Initialize controller from configuration parameters.

        Args:
            params: Parameter dictionary
            schedules: Schedule lookup for setpoint and availability
            actuator: Flow network receiving the flow request
            surface_balance: Heat balance receiving the heat source, optional

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.params = dict(params)
        self.circuit = build_circuit(self.params)
        name = self.circuit.name

        self.control_type = ControlType.parse(
            self.params.get('control_type', 'RefrigOutletTemperature'), name
        )
        bounds = FlowBounds(self.params.get('min_flow', 0.0), self.params.get('max_flow', 60.0))
        self.model = IceRinkSystemModel(self.circuit, FlowControlController(bounds, name))

        self.schedules = schedules
        self.actuator = actuator
        self.surface_balance = surface_balance

        self.inlet_node = self.params.get('inlet_node')
        self.outlet_node = self.params.get('outlet_node')
        self.loop = self.params.get('loop')
        self.surface = self.params.get('surface', name)
        self.availability_schedule = self.params.get('availability_schedule')
        self.setpoint_schedule = self.params.get('setpoint_schedule')

        self.cooling_energy = 0.0
        self.last_result: Optional[RinkEvaluationResult] = None

    def step(
        self,
        coupling: LinearSurfaceCoupling,
        inlet_temperature: float,
        incoming_flow: float,
        current_time: float = 0.0,
        timestep: float = 0.25,
    ) -> RinkEvaluationResult:
        """
        Run one control evaluation and hand the results to the collaborators.

        The actuator is called exactly once, also when the system is idle.

        Args:
            coupling: Surface coupling already computed for this timestep
            inlet_temperature: Temperature at the inlet node [°C]
            incoming_flow: Flow at the inlet node [kg/s]
            current_time: Simulation time [h]
            timestep: Timestep length [h]

        Returns:
            RinkEvaluationResult of the evaluation

        Raises:
            ConfigurationError: On unset inlet node or schedule handles
        """
        name = self.circuit.name
        if not self.inlet_node:
            logger.error("Refrigerant inlet node not set for system '%s'", name)
            raise ConfigurationError("Refrigerant inlet node is not defined", name)

        available = True
        if self.availability_schedule:
            available = self.schedules.current_value(self.availability_schedule, current_time) > 0
        if not self.setpoint_schedule:
            logger.error("Setpoint schedule not set for system '%s'", name)
            raise ConfigurationError("Setpoint schedule is not defined", name)
        setpoint = self.schedules.current_value(self.setpoint_schedule, current_time)
        target = make_target(self.control_type, setpoint, name)

        result = self.model.evaluate(
            target=target,
            coupling=coupling,
            inlet_temperature=inlet_temperature,
            incoming_flow=incoming_flow,
            available=available,
        )

        self.actuator.set_flow(result.command.clamped_flow, self.inlet_node, self.outlet_node, self.loop)
        if self.surface_balance is not None:
            self.surface_balance.apply_heat_source(self.surface, result.heat_source)

        self.circuit.last_commanded_flow = result.command.clamped_flow
        self.cooling_energy += result.cooling_power * timestep * SECONDS_PER_HOUR
        self.last_result = result
        return result

    def get_last_result(self) -> Optional[RinkEvaluationResult]:
        """Get last evaluation result."""
        return self.last_result

    def report(self) -> Dict:
        """Reporting values of the last evaluation."""
        result = self.last_result
        if result is None:
            return {}
        return {
            'inlet_temperature': result.inlet_temperature,
            'outlet_temperature': result.outlet_temperature,
            'mass_flow': self.circuit.last_commanded_flow,
            'cooling_power': result.cooling_power,
            'cooling_energy': self.cooling_energy,
            'operating_mode': result.operating_mode.name,
        }

    @staticmethod
    def get_default_params() -> Dict:
        """Get default parameter set."""
        return {
            'name': 'Main Rink',
            'system_type': 'indirect',
            'coolant': 'CaCl2',
            'concentration': 30.0,      # %
            'tube_diameter': 0.025,     # m
            'tube_length': 15000.0,     # m
            'circuit_calc_method': 'CalculateFromCircuitLength',
            'circuit_length': 106.7,    # m
            'num_circuits': 1,
            'control_type': 'RefrigOutletTemperature',
            'min_flow': 0.0,            # kg/s
            'max_flow': 60.0,           # kg/s
            'inlet_node': 'Floor Inlet',
            'outlet_node': 'Floor Outlet',
            'loop': 'Brine Loop',
            'availability_schedule': 'Rink Availability',
            'setpoint_schedule': 'Rink Setpoint',
            'property_source': 'tables',
        }
