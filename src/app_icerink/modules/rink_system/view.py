"""
Ice Rink System View - Display and reporting functionality

Console output of evaluation results and Matplotlib diagrams of the floor
piping behaviour.

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

from typing import Sequence

import numpy as np
from matplotlib.figure import Figure

from app_icerink.core.refrigeration_circuit import RefrigerationCircuit
from app_icerink.modules.heat_exchanger import HeatExchangerController
from app_icerink.modules.rink_system.model import RinkEvaluationResult


class RinkSystemView:
    """
    View component for refrigeration system results.

    No computation should occur here - only presentation.
    """

    @staticmethod
    def display_result(result: RinkEvaluationResult, verbose: bool = True) -> None:
        """
        Display evaluation results.

        Args:
            result: Evaluation result to display
            verbose: If True, show heat exchanger and control details
        """
        print("=" * 60)
        print("ICE RINK REFRIGERATION RESULTS")
        print("=" * 60)

        print(f"\nOperating Mode: {result.operating_mode.name}")
        print(f"Inlet Temperature:  {result.inlet_temperature:.2f} °C")
        print(f"Outlet Temperature: {result.outlet_temperature:.2f} °C")
        print(f"Heat Source: {result.heat_source:.1f} W ({result.heat_source/1e3:.2f} kW)")
        print(f"Cooling Power: {result.cooling_power/1e3:.2f} kW")

        command = result.command
        print(f"\nRequested Flow: {command.requested_flow:.4f} kg/s")
        print(f"Commanded Flow: {command.clamped_flow:.4f} kg/s")
        print(f"Shut Down: {command.shut_down}")

        if verbose and result.heat_exchanger is not None:
            hx = result.heat_exchanger
            regime = "turbulent" if hx.flags.get("turbulent") else "laminar"
            print("\nHeat Exchanger:")
            print(f"  Re = {hx.reynolds:.0f} ({regime})")
            print(f"  Nu = {hx.nusselt:.2f}")
            print(f"  NTU = {hx.ntu:.3f}")
            print(f"  eps = {hx.effectiveness:.4f}")

        print("\nDiagnostic Flags:")
        for flag_name, flag_value in result.flags.items():
            status = "⚠️  ACTIVE" if flag_value else "✓ OK"
            print(f"  {flag_name}: {status}")

        print("=" * 60)

    @staticmethod
    def display_summary(result: RinkEvaluationResult) -> None:
        """
        Display compact summary of results.

        Args:
            result: Evaluation result to summarize
        """
        print(f"Rink: {result.operating_mode.name}, "
              f"flow={result.command.clamped_flow:.3f} kg/s, "
              f"Q_cool={result.cooling_power/1e3:.2f} kW, "
              f"T_out={result.outlet_temperature:.2f} °C", end="")

        active_flags = [k for k, v in result.flags.items() if v]
        if active_flags:
            print(f" [FLAGS: {', '.join(active_flags)}]")
        else:
            print()


def plot_effectiveness_curve(
    circuit: RefrigerationCircuit,
    inlet_temperature: float,
    flows: Sequence[float],
) -> Figure:
    """
    Effectiveness and NTU of the floor piping versus refrigerant flow.

    Args:
        circuit: Floor piping
        inlet_temperature: Refrigerant inlet temperature [°C]
        flows: Positive mass flow rates to evaluate [kg/s]

    Returns:
        Matplotlib figure with effectiveness and NTU axes
    """
    controller = HeatExchangerController()
    flows = np.asarray(flows, dtype=float)
    results = [controller.solve(circuit, inlet_temperature, m) for m in flows]

    fig = Figure(figsize=(8, 5), dpi=100)
    ax = fig.add_subplot(111)
    ax.plot(flows, [r.effectiveness for r in results], 'b-', linewidth=2, label='ε')
    ax.set_xlabel('Mass flow [kg/s]', fontsize=10)
    ax.set_ylabel('Effectiveness ε [-]', fontsize=10, color='b')
    ax.set_ylim(0.0, 1.05)
    ax.grid(True, alpha=0.3)

    ax_ntu = ax.twinx()
    ax_ntu.plot(flows, [r.ntu for r in results], 'r--', linewidth=1.5, label='NTU')
    ax_ntu.set_ylabel('NTU [-]', fontsize=10, color='r')

    ax.set_title(f'{circuit.name}: effectiveness at T_in = {inlet_temperature:.1f} °C',
                 fontsize=11, fontweight='bold')
    fig.tight_layout()
    return fig
