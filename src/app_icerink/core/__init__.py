"""Core building blocks for ice rink refrigeration systems"""

from app_icerink.core.errors import ConfigurationError
from app_icerink.core.fluid_properties import Coolant, FluidProperties, properties
from app_icerink.core.props_service import PropsService, get_props_service
from app_icerink.core.refrigeration_circuit import (
    CircuitCalcMethod,
    DirectRefrigerationCircuit,
    IndirectRefrigerationCircuit,
    PropertySource,
    RefrigerationCircuit,
)

__all__ = [
    "ConfigurationError",
    "Coolant",
    "FluidProperties",
    "properties",
    "PropsService",
    "get_props_service",
    "CircuitCalcMethod",
    "DirectRefrigerationCircuit",
    "IndirectRefrigerationCircuit",
    "PropertySource",
    "RefrigerationCircuit",
]
