"""
Unit tests for the rink system view

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import numpy as np
import pytest
from matplotlib.figure import Figure

from app_icerink.modules.flow_control import FlowBounds, FlowControlController, OutletTemperatureTarget
from app_icerink.modules.rink_system import IceRinkSystemModel, RinkSystemView, plot_effectiveness_curve


@pytest.fixture
def result(brine_circuit, slab_coupling):
    model = IceRinkSystemModel(brine_circuit, FlowControlController(FlowBounds(0.0, 80.0)))
    return model.evaluate(OutletTemperatureTarget(-5.0), slab_coupling, -8.0, 10.0)


class TestConsoleView:

    def test_display_result(self, result, capsys):
        RinkSystemView.display_result(result)
        out = capsys.readouterr().out
        assert "ICE RINK REFRIGERATION RESULTS" in out
        assert "COOLING" in out
        assert "NTU" in out

    def test_display_summary(self, result, capsys):
        RinkSystemView.display_summary(result)
        out = capsys.readouterr().out
        assert out.startswith("Rink: COOLING")


class TestEffectivenessPlot:

    def test_curve(self, brine_circuit):
        flows = np.linspace(1.0, 30.0, 12)  # laminar over the whole range
        fig = plot_effectiveness_curve(brine_circuit, -5.0, flows)

        assert isinstance(fig, Figure)
        assert len(fig.axes) == 2, "Effectiveness and NTU axes expected"
        eps = fig.axes[0].lines[0].get_ydata()
        assert np.all(np.diff(eps) <= 0.0), "Effectiveness falls with increasing flow"
