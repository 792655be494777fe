"""
Heat Exchanger Model - Effectiveness of the floor piping

Effectiveness-NTU model of the refrigerant tubes embedded in the rink slab.
The slab is treated as a constant-temperature sink, so the capacity ratio is
zero and epsilon = 1 - exp(-NTU).

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import math
from dataclasses import dataclass, field
from typing import Dict

from app_icerink.core.fluid_properties import FluidProperties
from app_icerink.core.refrigeration_circuit import RefrigerationCircuit

MAX_LAMINAR_RE = 2300.0   # Reynolds number above which the flow is turbulent
LAMINAR_NUSSELT = 3.66    # Constant-surface-temperature laminar asymptote
MAX_EXP_POWER = 50.0      # exp(-NTU) is zero to machine precision above this
PRANDTL_EXPONENT = 1.0 / 3.0


@dataclass
class HeatExchangerResult:
    """
    Result of the effectiveness calculation.

    Attributes:
        effectiveness: Heat exchanger effectiveness epsilon [-], in [0, 1]
        reynolds: Reynolds number in one circuit [-]
        nusselt: Nusselt number [-]
        ntu: Number of transfer units [-]
        properties: Coolant properties at the inlet temperature
        mass_flow: Refrigerant mass flow rate [kg/s]
        flags: Diagnostic flags dictionary
    """
    effectiveness: float
    reynolds: float
    nusselt: float
    ntu: float
    properties: FluidProperties
    mass_flow: float
    flags: Dict[str, bool] = field(default_factory=dict)

    @property
    def eps_mdot_cp(self) -> float:
        """Effective capacity rate epsilon * m_dot * cp [W/K]."""
        return self.effectiveness * self.mass_flow * self.properties.specific_heat


def effectiveness_from_ntu(ntu: float) -> float:
    """
    Effectiveness of an exchanger against a constant-temperature sink.

    Args:
        ntu: Number of transfer units [-]

    Returns:
        Effectiveness [-]
    """
    if ntu > MAX_EXP_POWER:
        return 1.0
    return 1.0 - math.exp(-ntu)


class HeatExchangerModel:
    """
    Physical model of the rink floor piping as a heat exchanger.

    Regime selection on the Reynolds number:
    - Turbulent (Re >= 2300): Colburn correlation Nu = 0.023 Re^0.8 Pr^(1/3)
    - Laminar: Nu = 3.66
    """

    def solve(
        self,
        circuit: RefrigerationCircuit,
        inlet_temperature: float,
        mass_flow: float,
    ) -> HeatExchangerResult:
        """
        Compute effectiveness for the given inlet conditions.

        Args:
            circuit: Floor piping (geometry and coolant)
            inlet_temperature: Refrigerant inlet temperature [°C]
            mass_flow: Refrigerant mass flow rate [kg/s], must be positive

        Returns:
            HeatExchangerResult with effectiveness and intermediate numbers

        Raises:
            ValueError: If mass_flow is not positive
        """
        if not mass_flow > 0:
            raise ValueError(f"Mass flow rate must be positive, got {mass_flow}")

        props = circuit.fluid_properties(inlet_temperature)

        reynolds = 4.0 * mass_flow / (
            math.pi * props.viscosity * circuit.tube_diameter * circuit.num_circuits
        )

        turbulent = reynolds >= MAX_LAMINAR_RE
        if turbulent:
            nusselt = 0.023 * reynolds ** 0.8 * props.prandtl ** PRANDTL_EXPONENT
        else:
            nusselt = LAMINAR_NUSSELT

        ntu = (
            math.pi * props.conductivity * nusselt * circuit.tube_length
            / (mass_flow * props.specific_heat)
        )

        return HeatExchangerResult(
            effectiveness=effectiveness_from_ntu(ntu),
            reynolds=reynolds,
            nusselt=nusselt,
            ntu=ntu,
            properties=props,
            mass_flow=mass_flow,
            flags={
                "turbulent": turbulent,
                "ntu_saturated": ntu > MAX_EXP_POWER,
            },
        )
