"""
Unit tests for the system load orchestrator and its controller

Tests the idle path, the reverse heat flow cutoff, actuator hand-off,
configuration errors and energy reporting.

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import pytest

from app_icerink.core.errors import ConfigurationError
from app_icerink.core.interfaces import LoopFlowActuator, RecordedHeatBalance, ScheduleTable
from app_icerink.core.refrigeration_circuit import (
    DirectRefrigerationCircuit,
    IndirectRefrigerationCircuit,
)
from app_icerink.modules.flow_control import (
    FlowBounds,
    FlowControlController,
    LinearSurfaceCoupling,
    OutletTemperatureTarget,
    SurfaceTemperatureTarget,
)
from app_icerink.modules.heat_exchanger import HeatExchangerController
from app_icerink.modules.rink_system import (
    IceRinkController,
    IceRinkSystemModel,
    OperatingMode,
    build_circuit,
)


class RecordingHeatExchanger(HeatExchangerController):
    """Heat exchanger controller that records every flow it is asked about."""

    def __init__(self):
        super().__init__()
        self.flows = []

    def solve(self, circuit, inlet_temperature, mass_flow):
        self.flows.append(mass_flow)
        return super().solve(circuit, inlet_temperature, mass_flow)


class FailingCollaborator:
    """Stand-in that fails the test when touched."""

    def solve(self, *args, **kwargs):
        raise AssertionError("Idle path must not call the physical models")


@pytest.fixture
def model(brine_circuit):
    """Fixture providing an orchestrator for the brine system, bounds 0-80 kg/s."""
    return IceRinkSystemModel(brine_circuit, FlowControlController(FlowBounds(0.0, 80.0), brine_circuit.name))


@pytest.fixture
def params():
    """Default configuration with a -5 °C outlet setpoint."""
    params = IceRinkController.get_default_params()
    params['max_flow'] = 80.0
    return params


@pytest.fixture
def schedules(params):
    return ScheduleTable({
        params['availability_schedule']: 1.0,
        params['setpoint_schedule']: -5.0,
    })


@pytest.fixture
def actuator():
    return LoopFlowActuator()


class TestIdlePath:
    """Test evaluations without incoming flow."""

    @pytest.mark.parametrize("incoming_flow", [0.0, -2.0])
    def test_no_flow_is_idle(self, brine_circuit, slab_coupling, incoming_flow):
        """No flow: zero heat source, zero flow, no calls into the physical models."""
        model = IceRinkSystemModel(brine_circuit, FailingCollaborator(), FailingCollaborator())
        result = model.evaluate(OutletTemperatureTarget(-5.0), slab_coupling, -8.0, incoming_flow)

        assert result.command.clamped_flow == 0.0
        assert result.heat_source == 0.0
        assert result.operating_mode is OperatingMode.NOT_OPERATING
        assert result.is_idle
        assert result.effectiveness is None

    def test_unavailable_is_idle(self, brine_circuit, slab_coupling):
        """Availability off: idle even with flow at the inlet."""
        model = IceRinkSystemModel(brine_circuit, FailingCollaborator(), FailingCollaborator())
        result = model.evaluate(OutletTemperatureTarget(-5.0), slab_coupling, -8.0, 10.0, available=False)

        assert result.command.clamped_flow == 0.0
        assert result.heat_source == 0.0
        assert result.flags["unavailable"]

    def test_effectiveness_never_sees_non_positive_flow(self, brine_circuit, slab_coupling):
        """Across a mixed sequence the effectiveness model only sees positive flows."""
        hx = RecordingHeatExchanger()
        model = IceRinkSystemModel(brine_circuit, FlowControlController(FlowBounds(0.0, 80.0)), hx)
        for flow in [0.0, 12.0, -1.0, 0.0, 3.5]:
            model.evaluate(OutletTemperatureTarget(-5.0), slab_coupling, -8.0, flow)

        assert hx.flows == [12.0, 3.5]


class TestCoolingEvaluation:
    """Test evaluations that cool the slab."""

    def test_outlet_control(self, model, slab_coupling):
        result = model.evaluate(OutletTemperatureTarget(-5.0), slab_coupling, -8.0, 10.0)
        cp = result.heat_exchanger.properties.specific_heat

        assert result.operating_mode is OperatingMode.COOLING
        assert result.heat_source < 0.0, "Cold brine should cool the slab"
        assert result.cooling_power == pytest.approx(-result.heat_source)
        assert result.outlet_temperature == pytest.approx(-8.0 - result.heat_source / (10.0 * cp))
        assert 0.0 < result.command.clamped_flow < 80.0
        assert not result.command.shut_down
        assert not result.flags["reverse_heat_flow"]

    def test_heat_source_uses_incoming_flow(self, model, slab_coupling):
        result = model.evaluate(SurfaceTemperatureTarget(-3.0), slab_coupling, -8.0, 10.0)
        expected = slab_coupling.heat_source(
            -8.0, result.effectiveness, 10.0, result.heat_exchanger.properties.specific_heat,
        )
        assert result.heat_source == pytest.approx(expected)

    def test_direct_system(self, slab_coupling):
        circuit = DirectRefrigerationCircuit("Direct Rink", 0.025, 12000.0, 100)
        model = IceRinkSystemModel(circuit, FlowControlController(FlowBounds(0.0, 40.0)))
        result = model.evaluate(OutletTemperatureTarget(-6.0), slab_coupling, -9.0, 5.0)

        assert result.operating_mode is OperatingMode.COOLING
        assert result.heat_source < 0.0


class TestReverseHeatFlowCutoff:
    """The system never heats the ice."""

    @pytest.mark.parametrize("target", [OutletTemperatureTarget(-8.0), SurfaceTemperatureTarget(-3.0)])
    def test_cutoff(self, model, cold_slab_coupling, target):
        """Inlet warmer than the source plane: flow and heat source forced to zero."""
        result = model.evaluate(target, cold_slab_coupling, -5.0, 10.0)

        assert result.command.clamped_flow == 0.0
        assert result.command.shut_down
        assert result.heat_source == 0.0
        assert result.cooling_power == 0.0
        assert result.operating_mode is OperatingMode.NOT_OPERATING
        assert result.flags["reverse_heat_flow"]


class TestConfigurationErrors:
    """Test unrecoverable configuration failures."""

    @pytest.mark.parametrize("coolant", ['CaCl2', 'EG'])
    def test_direct_system_rejects_brine(self, params, coolant):
        """A direct system circulates ammonia only."""
        params['system_type'] = 'direct'
        params['coolant'] = coolant
        with pytest.raises(ConfigurationError) as excinfo:
            build_circuit(params)
        assert excinfo.value.system_name == 'Main Rink'

    def test_coupling_validated_once_per_evaluation(self, model, slab_coupling):
        """The coupling is checked once per evaluation, by the resolver."""
        calls = []

        class CountingCoupling(LinearSurfaceCoupling):
            def validate(self, system_name=""):
                calls.append(system_name)
                super().validate(system_name)

        coupling = CountingCoupling(**vars(slab_coupling))
        model.evaluate(OutletTemperatureTarget(-5.0), coupling, -8.0, 10.0)
        assert len(calls) == 1

    def test_non_positive_area_raises_before_heat_source(self, model, slab_coupling):
        coupling = LinearSurfaceCoupling(**{**vars(slab_coupling), 'area': 0.0})
        with pytest.raises(ConfigurationError):
            model.evaluate(OutletTemperatureTarget(-5.0), coupling, -8.0, 10.0)

    def test_unrecognized_target(self, model, slab_coupling):
        with pytest.raises(ConfigurationError):
            model.evaluate("RefrigOutletTemperature", slab_coupling, -8.0, 10.0)

    def test_unrecognized_target_on_idle_path(self, model, slab_coupling):
        with pytest.raises(ConfigurationError):
            model.evaluate(None, slab_coupling, -8.0, 0.0)

    def test_unset_inlet_node(self, params, schedules, actuator, slab_coupling):
        params['inlet_node'] = None
        controller = IceRinkController(params, schedules, actuator)
        with pytest.raises(ConfigurationError) as excinfo:
            controller.step(slab_coupling, -8.0, 10.0)
        assert "Main Rink" in str(excinfo.value), "Error should name the system"

    def test_unknown_setpoint_schedule(self, params, actuator, slab_coupling):
        controller = IceRinkController(params, ScheduleTable({params['availability_schedule']: 1.0}), actuator)
        with pytest.raises(ConfigurationError):
            controller.step(slab_coupling, -8.0, 10.0)

    @pytest.mark.parametrize("key, value", [
        ('control_type', 'HumidityControl'),
        ('system_type', 'hybrid'),
        ('concentration', 35.0),
        ('coolant', 'R22'),
        ('circuit_calc_method', 'Guess'),
        ('min_flow', 90.0),
        ('min_flow', None),
        ('tube_diameter', None),
        ('tube_length', 'long'),
        ('circuit_length', None),
        ('concentration', 'thirty'),
    ])
    def test_invalid_parameters(self, params, schedules, actuator, key, value):
        params[key] = value
        with pytest.raises(ConfigurationError):
            IceRinkController(params, schedules, actuator)


class TestController:
    """Test the controller hand-off to the host collaborators."""

    def test_actuator_called_once_per_step(self, params, schedules, actuator, slab_coupling):
        """One set_flow call per evaluation, idle or not."""
        controller = IceRinkController(params, schedules, actuator)

        controller.step(slab_coupling, -8.0, 10.0)
        assert len(actuator.requests) == 1
        controller.step(slab_coupling, -8.0, 0.0)
        assert len(actuator.requests) == 2
        assert actuator.requests[-1].requested_flow == 0.0
        assert actuator.requests[-1].node_in == params['inlet_node']
        assert actuator.requests[-1].loop == params['loop']

    def test_unavailable_still_calls_actuator(self, params, actuator, slab_coupling):
        schedules = ScheduleTable({params['availability_schedule']: 0.0, params['setpoint_schedule']: -5.0})
        controller = IceRinkController(params, schedules, actuator)
        result = controller.step(slab_coupling, -8.0, 10.0)

        assert result.flags["unavailable"]
        assert len(actuator.requests) == 1
        assert actuator.flow_at(params['inlet_node']) == 0.0

    def test_commanded_flow_reaches_actuator(self, params, schedules, actuator, slab_coupling):
        controller = IceRinkController(params, schedules, actuator)
        result = controller.step(slab_coupling, -8.0, 10.0)

        assert actuator.flow_at(params['inlet_node']) == pytest.approx(result.command.clamped_flow)
        assert controller.circuit.last_commanded_flow == result.command.clamped_flow

    def test_heat_source_handed_back(self, params, schedules, actuator, slab_coupling):
        balance = RecordedHeatBalance()
        controller = IceRinkController(params, schedules, actuator, balance)
        result = controller.step(slab_coupling, -8.0, 10.0)

        assert balance.heat_sources[params['name']] == result.heat_source

    def test_cooling_energy_accumulates(self, params, schedules, actuator, slab_coupling):
        controller = IceRinkController(params, schedules, actuator)
        first = controller.step(slab_coupling, -8.0, 10.0, current_time=0.0, timestep=0.5)
        second = controller.step(slab_coupling, -7.0, 12.0, current_time=0.5, timestep=0.5)

        expected = (first.cooling_power + second.cooling_power) * 1800.0
        assert controller.cooling_energy == pytest.approx(expected)
        report = controller.report()
        assert report['cooling_energy'] == pytest.approx(expected)
        assert report['operating_mode'] == 'COOLING'
        assert controller.get_last_result() is second

    def test_surface_control_from_params(self, params, actuator, slab_coupling):
        params['control_type'] = 'IceSurfaceTemperature'
        schedules = ScheduleTable({
            params['availability_schedule']: lambda t: 1.0 if t < 12.0 else 0.0,
            params['setpoint_schedule']: -1.0,
        })
        controller = IceRinkController(params, schedules, actuator)
        result = controller.step(slab_coupling, -8.0, 10.0, current_time=3.0)

        assert result.command.shut_down, "Surface already below -1 °C"
        assert result.command.clamped_flow == 0.0


class TestBuildCircuit:
    """Test circuit construction from parameters."""

    def test_circuits_from_length(self, params):
        circuit = build_circuit(params)
        assert isinstance(circuit, IndirectRefrigerationCircuit)
        assert circuit.num_circuits == 141

    def test_one_per_surface(self, params):
        params['circuit_calc_method'] = 'OnePerSurface'
        assert build_circuit(params).num_circuits == 1

    def test_direct(self, params):
        params['system_type'] = 'direct'
        params['coolant'] = 'NH3'
        circuit = build_circuit(params)
        assert isinstance(circuit, DirectRefrigerationCircuit)

    def test_direct_without_coolant_key(self, params):
        params['system_type'] = 'direct'
        del params['coolant']
        assert build_circuit(params).coolant.value == 'NH3'
