"""
Unit tests for the in-memory host collaborators

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import pytest

from app_icerink.core.errors import ConfigurationError
from app_icerink.core.interfaces import LoopFlowActuator, ScheduleTable


class TestScheduleTable:

    def test_constant_and_callable(self):
        schedules = ScheduleTable({"setpoint": -5.0})
        schedules.set("availability", lambda t: 1.0 if 6.0 <= t < 22.0 else 0.0)

        assert schedules.current_value("setpoint", 3.0) == -5.0
        assert schedules.current_value("availability", 8.0) == 1.0
        assert schedules.current_value("availability", 23.0) == 0.0

    @pytest.mark.parametrize("handle", [None, "missing"])
    def test_unknown_handle(self, handle):
        with pytest.raises(ConfigurationError):
            ScheduleTable({"setpoint": -5.0}).current_value(handle, 0.0)


class TestLoopFlowActuator:

    def test_clamps_to_loop_limits(self):
        actuator = LoopFlowActuator(min_flow=1.0, max_flow=50.0)
        actuator.set_flow(80.0, "in", "out", "loop")
        assert actuator.flow_at("in") == 50.0
        assert actuator.flow_at("out") == 50.0

        actuator.set_flow(0.2, "in", "out", "loop")
        assert actuator.flow_at("in") == 1.0

    def test_zero_request_turns_off(self):
        actuator = LoopFlowActuator(min_flow=1.0, max_flow=50.0)
        actuator.set_flow(0.0, "in", "out", "loop")
        assert actuator.flow_at("in") == 0.0
        assert actuator.requests[0].applied_flow == 0.0

    def test_invalid_limits(self):
        with pytest.raises(ValueError):
            LoopFlowActuator(min_flow=5.0, max_flow=1.0)

    def test_history_is_bounded(self):
        actuator = LoopFlowActuator(history=3)
        for flow in [1.0, 2.0, 3.0, 4.0, 5.0]:
            actuator.set_flow(flow, "in", "out", "loop")
        assert len(actuator.requests) == 3
        assert [r.requested_flow for r in actuator.requests] == [3.0, 4.0, 5.0]
