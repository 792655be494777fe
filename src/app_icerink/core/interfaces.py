"""
Collaborator interfaces - Host simulation services used by the rink core

The control core never owns schedules, loop flow or the surface heat
balance. It talks to them through the small protocols below. In-memory
implementations are provided for standalone runs and tests.

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, Hashable, Optional, Protocol, Union

from app_icerink.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

ScheduleValue = Union[float, Callable[[float], float]]


class ScheduleLookup(Protocol):
    """Time-varying scalar values addressed by a schedule handle."""

    def current_value(self, handle: Hashable, current_time: float) -> float:
        ...


class FlowActuator(Protocol):
    """Flow network that applies the flow requested by a loop component."""

    def set_flow(self, requested_flow: float, node_in: Hashable, node_out: Hashable, loop: Hashable) -> None:
        ...


class SurfaceHeatBalance(Protocol):
    """Surface heat-balance engine that finalizes the surface temperature solve."""

    def apply_heat_source(self, surface: Hashable, heat_source: float) -> None:
        ...


class ScheduleTable:
    """
    In-memory schedule lookup.

    Each handle maps either to a constant or to a callable of the current
    time (hours since the start of the run).

    Raises:
        ConfigurationError: On lookup of an unset or unknown handle
    """

    def __init__(self, schedules: Optional[Dict[Hashable, ScheduleValue]] = None):
        self.schedules: Dict[Hashable, ScheduleValue] = dict(schedules or {})

    def set(self, handle: Hashable, value: ScheduleValue) -> None:
        self.schedules[handle] = value

    def current_value(self, handle: Hashable, current_time: float) -> float:
        if handle is None or handle not in self.schedules:
            logger.error("Schedule handle %r is not defined", handle)
            raise ConfigurationError(f"Schedule '{handle}' is not defined")
        value = self.schedules[handle]
        if callable(value):
            return float(value(current_time))
        return float(value)


@dataclass
class FlowRequest:
    """One call received by the loop flow actuator."""
    requested_flow: float
    applied_flow: float
    node_in: Hashable
    node_out: Hashable
    loop: Hashable


class LoopFlowActuator:
    """
    Minimal flow network for a single loop.

    Clamps every request silently to the loop-wide limits and stores the
    resulting flow on both nodes of the component.

    Attributes:
        min_flow: Loop minimum flow [kg/s]
        max_flow: Loop maximum flow [kg/s]
        node_flows: Applied flow per node handle [kg/s]
        requests: Most recent received requests, oldest first
    """

    def __init__(self, min_flow: float = 0.0, max_flow: float = float("inf"), history: int = 1000):
        if min_flow < 0 or max_flow < min_flow:
            raise ValueError(f"Invalid loop flow limits [{min_flow}, {max_flow}]")
        self.min_flow = min_flow
        self.max_flow = max_flow
        self.node_flows: Dict[Hashable, float] = {}
        self.requests: Deque[FlowRequest] = deque(maxlen=history)

    def set_flow(self, requested_flow: float, node_in: Hashable, node_out: Hashable, loop: Hashable) -> None:
        applied = requested_flow
        if applied > 0:
            applied = min(max(applied, self.min_flow), self.max_flow)
        else:
            applied = 0.0
        self.node_flows[node_in] = applied
        self.node_flows[node_out] = applied
        self.requests.append(FlowRequest(requested_flow, applied, node_in, node_out, loop))

    def flow_at(self, node: Hashable) -> float:
        """Flow currently applied at a node [kg/s], zero if never set."""
        return self.node_flows.get(node, 0.0)


class RecordedHeatBalance:
    """Surface heat balance stand-in that records the handed-back heat source."""

    def __init__(self):
        self.heat_sources: Dict[Hashable, float] = {}

    def apply_heat_source(self, surface: Hashable, heat_source: float) -> None:
        self.heat_sources[surface] = heat_source
