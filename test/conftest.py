"""
Shared fixtures for the ice rink test suite

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import pytest

from app_icerink.core.refrigeration_circuit import IndirectRefrigerationCircuit
from app_icerink.modules.flow_control import LinearSurfaceCoupling


@pytest.fixture
def slab_coupling():
    """
    Coupling of a 500 m² slab whose source plane sits at ~1.6 °C at zero load.

    Ck ≈ 1.643 °C, Cl = 0.013 K·m²/W, zero-load ice surface ≈ -1.53 °C.
    A cold refrigerant inlet therefore cools the slab.
    """
    return LinearSurfaceCoupling(
        ca=-2.0, cb=0.1, cc=0.004, cd=5.0, ce=0.2, cf=0.002,
        cg=1.0, ch=0.01, ci=0.5, cj=0.3, area=500.0,
    )


@pytest.fixture
def cold_slab_coupling():
    """
    Same slab with the source plane shifted to ~-20.4 °C at zero load.

    A refrigerant inlet at -5 °C heats this slab instead of cooling it.
    """
    return LinearSurfaceCoupling(
        ca=-2.0, cb=0.1, cc=0.004, cd=5.0, ce=0.2, cf=0.002,
        cg=-21.0, ch=0.01, ci=0.5, cj=0.3, area=500.0,
    )


@pytest.fixture
def brine_circuit():
    """Indirect CaCl2 30 % system, 15 km of 25 mm tube in 141 circuits."""
    return IndirectRefrigerationCircuit(
        "Test Rink",
        tube_diameter=0.025,
        tube_length=15000.0,
        num_circuits=141,
        coolant="CaCl2",
        concentration=30.0,
    )
