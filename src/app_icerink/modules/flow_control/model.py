"""
Flow Control Model - Refrigerant flow required to meet a setpoint

The surface heat balance hands over a linearized relation between the
heat source injected by the floor piping and the slab surface temperatures:

    T_inside  = Ti0 + Ti1 * q
    T_source  = Ck + Cl * q,          q = Q / A

With the piping modelled as an exchanger against the source temperature,
the injected heat is

    Q = (T_in - Ck) / (Cl / A + 1 / (eps * m_dot * cp))

Two control policies invert these relations for the mass flow:
- Outlet temperature control: drive the refrigerant outlet to the setpoint
- Surface temperature control: drive the ice surface to the setpoint

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Union

from app_icerink.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEGENERACY_TOL = 1e-12


class ControlType(Enum):
    """Control policy of a refrigeration system."""

    OUTLET_TEMPERATURE = "RefrigOutletTemperature"
    SURFACE_TEMPERATURE = "IceSurfaceTemperature"

    @classmethod
    def parse(cls, name, system_name: str = "") -> 'ControlType':
        """
        Resolve a control type from its configuration name.

        Raises:
            ConfigurationError: If the name matches neither policy
        """
        if isinstance(name, cls):
            return name
        for member in cls:
            if str(name).strip().lower() in (member.value.lower(), member.name.lower()):
                return member
        logger.error("Unknown control type %r for system '%s'", name, system_name)
        raise ConfigurationError(f"Unknown control type '{name}'", system_name)


@dataclass(frozen=True)
class OutletTemperatureTarget:
    """Refrigerant outlet temperature setpoint [°C]."""
    value: float
    control_type = ControlType.OUTLET_TEMPERATURE


@dataclass(frozen=True)
class SurfaceTemperatureTarget:
    """Ice surface temperature setpoint [°C]."""
    value: float
    control_type = ControlType.SURFACE_TEMPERATURE


ControlTarget = Union[OutletTemperatureTarget, SurfaceTemperatureTarget]


def make_target(control_type, value: float, system_name: str = "") -> ControlTarget:
    """Build the control target for a policy and setpoint value."""
    if ControlType.parse(control_type, system_name) is ControlType.OUTLET_TEMPERATURE:
        return OutletTemperatureTarget(value)
    return SurfaceTemperatureTarget(value)


@dataclass(frozen=True)
class LinearSurfaceCoupling:
    """
    Coefficients of the linearized surface heat balance for one timestep.

    Ca..Cf relate inside and outside surface temperatures to each other and
    to the heat source flux; Cg..Cj express the source-plane temperature.

    Attributes:
        ca..cj: Coupling coefficients supplied by the surface heat balance
        area: Slab surface area the heat source is spread over [m²]
    """
    ca: float
    cb: float
    cc: float
    cd: float
    ce: float
    cf: float
    cg: float
    ch: float
    ci: float
    cj: float
    area: float

    def validate(self, system_name: str = "") -> None:
        """
        Check the coupling can be inverted.

        Raises:
            ConfigurationError: On non-positive area or 1 - Ce*Cb close to zero
        """
        if not (self.area > 0 and math.isfinite(self.area)):
            logger.error("Non-positive coupling area %r for system '%s'", self.area, system_name)
            raise ConfigurationError(f"Surface area must be positive, got {self.area}", system_name)
        if abs(self.denominator) < DEGENERACY_TOL:
            logger.error("Degenerate surface coupling (1 - Ce*Cb = %g) for system '%s'", self.denominator, system_name)
            raise ConfigurationError("Degenerate surface coupling: 1 - Ce*Cb is zero", system_name)

    @property
    def denominator(self) -> float:
        return 1.0 - self.ce * self.cb

    @property
    def ck(self) -> float:
        """Source-plane temperature at zero heat source [°C]."""
        return self.cg + (
            self.ci * (self.ca + self.cb * self.cd) + self.cj * (self.cd + self.ce * self.ca)
        ) / self.denominator

    @property
    def cl(self) -> float:
        """Source-plane temperature rise per unit heat flux [K·m²/W]."""
        return self.ch + (
            self.ci * (self.cc + self.cb * self.cf) + self.cj * (self.cf + self.ce * self.cc)
        ) / self.denominator

    @property
    def surface_temperature_offset(self) -> float:
        """Inside surface temperature at zero heat source [°C]."""
        return (self.ca + self.cb * self.cd) / self.denominator

    @property
    def surface_temperature_gain(self) -> float:
        """Inside surface temperature rise per unit heat flux [K·m²/W]."""
        return (self.cc + self.cb * self.cf) / self.denominator

    def inside_surface_temperature(self, heat_source: float) -> float:
        """Ice (inside) surface temperature for a heat source Q [W]."""
        return self.surface_temperature_offset + self.surface_temperature_gain * heat_source / self.area

    def outside_surface_temperature(self, heat_source: float) -> float:
        """Outside (underside) surface temperature for a heat source Q [W]."""
        flux = heat_source / self.area
        return (self.cd + self.ce * self.ca + (self.cf + self.ce * self.cc) * flux) / self.denominator

    def source_temperature(self, heat_source: float) -> float:
        """Source-plane temperature for a heat source Q [W]."""
        return self.ck + self.cl * heat_source / self.area

    def heat_source(self, inlet_temperature: float, effectiveness: float,
                    mass_flow: float, specific_heat: float) -> float:
        """
        Heat injected by the piping [W], negative when cooling the slab.

        Args:
            inlet_temperature: Refrigerant inlet temperature [°C]
            effectiveness: Heat exchanger effectiveness [-]
            mass_flow: Refrigerant mass flow rate [kg/s], positive
            specific_heat: Refrigerant specific heat [J/kg/K]
        """
        return (inlet_temperature - self.ck) / (
            self.cl / self.area + 1.0 / (effectiveness * mass_flow * specific_heat)
        )


def outlet_temperature(inlet_temperature: float, heat_source: float,
                       mass_flow: float, specific_heat: float) -> float:
    """Refrigerant outlet temperature [°C] after exchanging Q with the slab."""
    return inlet_temperature - heat_source / (mass_flow * specific_heat)


@dataclass(frozen=True)
class FlowBounds:
    """Flow limits of one refrigeration system [kg/s]."""
    min_flow: float
    max_flow: float

    def validate(self, system_name: str = "") -> None:
        """
        Raises:
            ConfigurationError: Unless 0 <= min_flow <= max_flow < inf
        """
        try:
            valid = 0.0 <= self.min_flow <= self.max_flow and math.isfinite(self.max_flow)
        except TypeError:
            valid = False
        if not valid:
            logger.error("Invalid flow bounds [%r, %r] for system '%s'", self.min_flow, self.max_flow, system_name)
            raise ConfigurationError(
                f"Flow bounds must satisfy 0 <= min <= max, got [{self.min_flow}, {self.max_flow}]",
                system_name,
            )


@dataclass(frozen=True)
class FlowCommand:
    """
    Flow decision of one evaluation.

    Attributes:
        requested_flow: Flow computed by the control policy [kg/s]
        clamped_flow: Flow handed to the actuator, within the system bounds [kg/s]
        shut_down: True if the system was turned down to its minimum or off
    """
    requested_flow: float
    clamped_flow: float
    shut_down: bool


@dataclass
class ControlResult:
    """
    Result of the flow resolution.

    Attributes:
        command: Resulting flow command
        candidate_flow: Algebraic flow before bounds (may be negative or inf)
        reference_temperature: Controlled temperature used for the
            "already satisfied" test [°C]
        target_heat_source: Heat source the surface policy aims for [W]
        flags: Diagnostic flags dictionary
    """
    command: FlowCommand
    candidate_flow: float
    reference_temperature: float
    target_heat_source: Optional[float] = None
    flags: Dict[str, bool] = field(default_factory=dict)


class FlowControlModel:
    """
    Control strategy resolver.

    Resolution order, identical for both policies:
    1. Target already met: minimum flow, shut down
    2. Non-positive or non-finite candidate: unreachable, maximum flow
    3. Candidate above maximum: undersized, maximum flow
    4. Candidate below minimum: minimum flow
    5. Otherwise the candidate itself
    """

    def required_flow(
        self,
        coupling: LinearSurfaceCoupling,
        inlet_temperature: float,
        effectiveness: float,
        specific_heat: float,
        target: ControlTarget,
        bounds: FlowBounds,
        reference_flow: Optional[float] = None,
        system_name: str = "",
    ) -> ControlResult:
        """
        Resolve the refrigerant flow for the active control target.

        Args:
            coupling: Surface coupling of the current timestep
            inlet_temperature: Refrigerant inlet temperature [°C]
            effectiveness: Heat exchanger effectiveness [-], positive
            specific_heat: Refrigerant specific heat [J/kg/K]
            target: Active control target
            bounds: System flow limits
            reference_flow: Current flow, used to test whether the outlet
                target is already met; zero-flow limit if not given [kg/s]
            system_name: Name used in error messages

        Returns:
            ControlResult with the flow command and diagnostics

        Raises:
            ConfigurationError: On unknown target type or degenerate coupling
        """
        coupling.validate(system_name)
        if isinstance(target, OutletTemperatureTarget):
            return self._outlet_control(coupling, inlet_temperature, effectiveness,
                                        specific_heat, target.value, bounds, reference_flow, system_name)
        if isinstance(target, SurfaceTemperatureTarget):
            return self._surface_control(coupling, inlet_temperature, effectiveness,
                                         specific_heat, target.value, bounds, system_name)
        logger.error("Unrecognized control target %r for system '%s'", target, system_name)
        raise ConfigurationError(f"Unrecognized control target {target!r}", system_name)

    def _outlet_control(self, coupling, inlet_temperature, effectiveness, specific_heat,
                        setpoint, bounds, reference_flow, system_name) -> ControlResult:
        ck, cl = coupling.ck, coupling.cl
        if abs(cl) < DEGENERACY_TOL:
            logger.error("Degenerate surface coupling (Cl = %g) for system '%s'", cl, system_name)
            raise ConfigurationError("Degenerate surface coupling: Cl is zero", system_name)

        if reference_flow is not None and reference_flow > 0:
            q_ref = coupling.heat_source(inlet_temperature, effectiveness, reference_flow, specific_heat)
            t_ref = outlet_temperature(inlet_temperature, q_ref, reference_flow, specific_heat)
        else:
            t_ref = inlet_temperature - effectiveness * (inlet_temperature - ck)

        if t_ref <= setpoint:
            return self._shut_down(bounds, t_ref)

        delta = setpoint - inlet_temperature
        if delta == 0.0:
            candidate = math.inf
        else:
            candidate = ((ck - inlet_temperature) / delta - 1.0 / effectiveness) * (
                coupling.area / (specific_heat * cl)
            )
        return self._apply_bounds(candidate, bounds, t_ref)

    def _surface_control(self, coupling, inlet_temperature, effectiveness, specific_heat,
                         setpoint, bounds, system_name) -> ControlResult:
        gain = coupling.surface_temperature_gain
        if abs(gain) < DEGENERACY_TOL:
            logger.error("Degenerate surface coupling (surface gain = %g) for system '%s'", gain, system_name)
            raise ConfigurationError("Degenerate surface coupling: surface temperature gain is zero", system_name)

        t_ref = coupling.surface_temperature_offset
        if t_ref <= setpoint:
            return self._shut_down(bounds, t_ref)

        q_target = coupling.area * (setpoint - t_ref) / gain
        t_source = coupling.source_temperature(q_target)
        denominator = effectiveness * specific_heat * (inlet_temperature - t_source)
        candidate = q_target / denominator if denominator != 0.0 else math.inf

        result = self._apply_bounds(candidate, bounds, t_ref)
        result.target_heat_source = q_target
        return result

    @staticmethod
    def _shut_down(bounds: FlowBounds, reference_temperature: float) -> ControlResult:
        return ControlResult(
            command=FlowCommand(bounds.min_flow, bounds.min_flow, True),
            candidate_flow=bounds.min_flow,
            reference_temperature=reference_temperature,
            flags={"target_met": True, "unreachable": False, "undersized": False, "below_minimum": False},
        )

    @staticmethod
    def _apply_bounds(candidate: float, bounds: FlowBounds, reference_temperature: float) -> ControlResult:
        flags = {"target_met": False, "unreachable": False, "undersized": False, "below_minimum": False}
        if not math.isfinite(candidate) or candidate <= 0.0:
            flags["unreachable"] = True
            flow = bounds.max_flow
        elif candidate >= bounds.max_flow:
            flags["undersized"] = candidate > bounds.max_flow
            flow = bounds.max_flow
        elif candidate < bounds.min_flow:
            flags["below_minimum"] = True
            flow = bounds.min_flow
        else:
            flow = candidate
        return ControlResult(
            command=FlowCommand(candidate, flow, False),
            candidate_flow=candidate,
            reference_temperature=reference_temperature,
            flags=flags,
        )
