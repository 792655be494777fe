"""
RefrigerationCircuit - Embedded floor piping of an ice rink

Owns the geometry and coolant identity of one refrigeration system. Two
variants share the same interface and differ only in where coolant
properties come from:

- DirectRefrigerationCircuit: primary refrigerant (ammonia) in the floor,
  properties from the internal table or, alternatively, from CoolProp
- IndirectRefrigerationCircuit: secondary brine (CaCl2 or ethylene glycol)
  at a tabulated concentration

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import logging
import math
from enum import Enum
from typing import Optional

from app_icerink.core.errors import ConfigurationError
from app_icerink.core.fluid_properties import (
    Coolant,
    FluidProperties,
    concentration_bucket,
    properties,
)
from app_icerink.core.props_service import get_props_service

logger = logging.getLogger(__name__)


class CircuitCalcMethod(Enum):
    """How the number of parallel circuits in the floor is obtained."""

    ONE_PER_SURFACE = "OnePerSurface"
    FROM_CIRCUIT_LENGTH = "CalculateFromCircuitLength"


class PropertySource(Enum):
    """Where a direct circuit takes its coolant properties from."""

    TABLES = "tables"
    COOLPROP = "coolprop"


def _as_float(value, label: str, name: str) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.error("%s %r is not a number for system '%s'", label, value, name)
        raise ConfigurationError(f"{label} must be a number, got {value!r}", name) from None


def circuits_from_length(tube_length: float, circuit_length: float, system_name: str = "") -> int:
    """
    Number of parallel circuits for a given total tube and circuit length.

    Args:
        tube_length: Total tube length embedded in the floor [m]
        circuit_length: Length of a single circuit [m]
        system_name: Name of the owning system, used in messages

    Returns:
        Number of circuits, at least 1
    """
    tube_length = _as_float(tube_length, "Tube length", system_name)
    circuit_length = _as_float(circuit_length, "Circuit length", system_name)
    if not (circuit_length > 0 and math.isfinite(circuit_length)):
        logger.error("Invalid circuit length %r for system '%s'", circuit_length, system_name)
        raise ConfigurationError(f"Circuit length must be positive, got {circuit_length}", system_name)
    if not (tube_length > 0 and math.isfinite(tube_length)):
        logger.error("Invalid tube length %r for system '%s'", tube_length, system_name)
        raise ConfigurationError(f"Tube length must be positive, got {tube_length}", system_name)
    return max(1, int(round(tube_length / circuit_length)))


class RefrigerationCircuit:
    """
    Base class for the piping of a refrigerated floor.

    Attributes:
        name: System name, used in error messages and reports
        tube_diameter: Inner tube diameter [m]
        tube_length: Total tube length [m]
        num_circuits: Number of parallel circuits [-]
        last_commanded_flow: Flow handed to the actuator at the last evaluation [kg/s]
    """

    coolant: Coolant = Coolant.AMMONIA

    def __init__(
        self,
        name: str,
        tube_diameter: float,
        tube_length: float,
        num_circuits: int = 1,
    ):
        """
        Initialize and validate circuit geometry.

        Raises:
            ConfigurationError: If the geometry would make the Reynolds
                number or NTU undefined
        """
        tube_diameter = _as_float(tube_diameter, "Tube diameter", name)
        tube_length = _as_float(tube_length, "Tube length", name)
        num_circuits = _as_float(num_circuits, "Number of circuits", name)

        if not (tube_diameter > 0 and math.isfinite(tube_diameter)):
            logger.error("Invalid tube diameter %r for system '%s'", tube_diameter, name)
            raise ConfigurationError(f"Tube diameter must be positive, got {tube_diameter}", name)
        if not (tube_length > 0 and math.isfinite(tube_length)):
            logger.error("Invalid tube length %r for system '%s'", tube_length, name)
            raise ConfigurationError(f"Tube length must be positive, got {tube_length}", name)
        if not math.isfinite(num_circuits) or num_circuits < 1 or int(num_circuits) != num_circuits:
            logger.error("Invalid circuit count %r for system '%s'", num_circuits, name)
            raise ConfigurationError(f"Number of circuits must be an integer >= 1, got {num_circuits}", name)

        self.name = name
        self.tube_diameter = float(tube_diameter)
        self.tube_length = float(tube_length)
        self.num_circuits = int(num_circuits)
        self.last_commanded_flow = 0.0

    @property
    def pipe_area(self) -> float:
        """Inner surface area of the piping [m²]."""
        return math.pi * self.tube_diameter * self.tube_length

    @property
    def concentration(self) -> Optional[int]:
        return None

    def fluid_properties(self, temperature: float) -> FluidProperties:
        """
        Coolant properties at the given temperature.

        Args:
            temperature: Coolant temperature [°C]
        """
        raise NotImplementedError

    def describe(self) -> dict:
        """
        Get the circuit configuration.

        Returns:
            Dictionary with configuration parameters
        """
        return {
            "name": self.name,
            "coolant": self.coolant.value,
            "concentration": self.concentration,
            "tube_diameter": self.tube_diameter,
            "tube_length": self.tube_length,
            "num_circuits": self.num_circuits,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.name!r}, coolant={self.coolant.value}, "
            f"D={self.tube_diameter:.4f} m, L={self.tube_length:.1f} m, "
            f"circuits={self.num_circuits})"
        )


class DirectRefrigerationCircuit(RefrigerationCircuit):
    """
    Direct system: ammonia circulated straight through the floor.

    Attributes:
        property_source: TABLES (internal ammonia table) or COOLPROP
    """

    coolant = Coolant.AMMONIA
    COOLPROP_FLUID = "Ammonia"

    def __init__(
        self,
        name: str,
        tube_diameter: float,
        tube_length: float,
        num_circuits: int = 1,
        property_source: PropertySource = PropertySource.TABLES,
    ):
        super().__init__(name, tube_diameter, tube_length, num_circuits)
        try:
            self.property_source = PropertySource(property_source)
        except ValueError:
            logger.error("Unknown property source %r for system '%s'", property_source, name)
            raise ConfigurationError(f"Unknown property source '{property_source}'", name) from None

    def fluid_properties(self, temperature: float) -> FluidProperties:
        if self.property_source is PropertySource.COOLPROP:
            return get_props_service().transport_properties(temperature, self.COOLPROP_FLUID)
        return properties(self.coolant, temperature)

    def describe(self) -> dict:
        config = super().describe()
        config["property_source"] = self.property_source.value
        return config


class IndirectRefrigerationCircuit(RefrigerationCircuit):
    """
    Indirect system: brine circulated through the floor.

    The concentration is mapped onto a tabulated column once, here, so that
    every later property lookup uses the same column.
    """

    def __init__(
        self,
        name: str,
        tube_diameter: float,
        tube_length: float,
        num_circuits: int = 1,
        coolant: Coolant = Coolant.CACL2,
        concentration: float = 30.0,
    ):
        super().__init__(name, tube_diameter, tube_length, num_circuits)
        coolant = coolant if isinstance(coolant, Coolant) else Coolant.parse(coolant, name)
        if not coolant.is_brine:
            logger.error("Indirect system '%s' configured with non-brine coolant %s", name, coolant.value)
            raise ConfigurationError(f"Indirect systems require a brine coolant, got {coolant.value}", name)
        self.coolant = coolant
        self._concentration = concentration_bucket(concentration, name)

    @property
    def concentration(self) -> int:
        """Tabulated brine concentration column in use [%]."""
        return self._concentration

    def fluid_properties(self, temperature: float) -> FluidProperties:
        return properties(self.coolant, temperature, self._concentration)
