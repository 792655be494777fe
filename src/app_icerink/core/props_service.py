"""
PropsService - Singleton wrapper for CoolProp

Alternate property source for the direct (single-component) coolant loop.
All CoolProp lookups for the rink go through this service so that failures
are logged and reported the same way everywhere.

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import logging
from typing import Optional
from CoolProp.CoolProp import PropsSI

from app_icerink.core.fluid_properties import FluidProperties

KELVIN_OFFSET = 273.15


class PropsService:
    """
    Singleton service for saturated-liquid property calculations via CoolProp.

    Temperatures are given in degrees Celsius, the unit used throughout the
    rink model, and converted to Kelvin for CoolProp. Properties are those of
    the saturated liquid (Q = 0) at the given temperature, which is the state
    of the refrigerant entering the floor piping.

    Properties are calculated for ammonia (NH3) by default.
    """

    _instance: Optional['PropsService'] = None
    _initialized: bool = False

    def __new__(cls) -> 'PropsService':
        """Ensure only one instance exists (Singleton pattern)."""
        if cls._instance is None:
            cls._instance = super(PropsService, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize logger only once."""
        if not PropsService._initialized:
            self.logger = logging.getLogger(__name__)
            self.fluid = "Ammonia"
            PropsService._initialized = True

    def _safe_call(self, output: str, T_C: float, fluid: Optional[str] = None) -> float:
        """
        Safe wrapper for saturated-liquid CoolProp PropsSI calls.

        Args:
            output: Output property name (e.g., 'C', 'L', 'V', 'D')
            T_C: Temperature [°C]
            fluid: CoolProp fluid name, defaults to the service fluid

        Returns:
            Calculated property value (SI units)

        Raises:
            ValueError: If CoolProp calculation fails or inputs are invalid
        """
        fluid = fluid or self.fluid
        try:
            return PropsSI(output, 'T', T_C + KELVIN_OFFSET, 'Q', 0, fluid)
        except Exception as e:
            error_msg = (
                f"CoolProp error: {output} | "
                f"fluid={fluid}, T={T_C:.2f} °C | "
                f"Error: {str(e)}"
            )
            self.logger.error(error_msg)
            raise ValueError(error_msg) from e

    def rho_T(self, T_C: float, fluid: Optional[str] = None) -> float:
        """
        Saturated liquid density.

        Args:
            T_C: Temperature [°C]
            fluid: CoolProp fluid name

        Returns:
            Density [kg/m³]
        """
        return self._safe_call('D', T_C, fluid)

    def cp_T(self, T_C: float, fluid: Optional[str] = None) -> float:
        """
        Saturated liquid specific heat at constant pressure.

        Args:
            T_C: Temperature [°C]
            fluid: CoolProp fluid name

        Returns:
            Specific heat [J/kg/K]
        """
        return self._safe_call('C', T_C, fluid)

    def k_T(self, T_C: float, fluid: Optional[str] = None) -> float:
        """
        Saturated liquid thermal conductivity.

        Args:
            T_C: Temperature [°C]
            fluid: CoolProp fluid name

        Returns:
            Thermal conductivity [W/m/K]
        """
        return self._safe_call('L', T_C, fluid)

    def mu_T(self, T_C: float, fluid: Optional[str] = None) -> float:
        """
        Saturated liquid dynamic viscosity.

        Args:
            T_C: Temperature [°C]
            fluid: CoolProp fluid name

        Returns:
            Dynamic viscosity [Pa·s]
        """
        return self._safe_call('V', T_C, fluid)

    def transport_properties(self, T_C: float, fluid: Optional[str] = None) -> FluidProperties:
        """
        Bundle the properties needed by the heat exchanger model.

        The Prandtl number is formed from the three transport properties so
        that it stays consistent with them.

        Args:
            T_C: Temperature [°C]
            fluid: CoolProp fluid name

        Returns:
            FluidProperties at the given temperature
        """
        mu = self.mu_T(T_C, fluid)
        k = self.k_T(T_C, fluid)
        cp = self.cp_T(T_C, fluid)
        return FluidProperties(
            viscosity=mu,
            conductivity=k,
            prandtl=mu * cp / k,
            specific_heat=cp,
        )


# Global singleton instance accessor
def get_props_service() -> PropsService:
    """
    Get the global PropsService singleton instance.

    Returns:
        PropsService singleton instance
    """
    return PropsService()
