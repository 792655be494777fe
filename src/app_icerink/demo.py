"""
Demonstration run of one indirect rink system

Steps the default brine system through a short warm-up of the return
brine and prints the console report of every evaluation.

Author: Ice Rink Refrigeration Project
Date: 2026-10-17
"""

import logging

from app_icerink.core.interfaces import LoopFlowActuator, RecordedHeatBalance, ScheduleTable
from app_icerink.modules.flow_control import LinearSurfaceCoupling
from app_icerink.modules.rink_system import IceRinkController, RinkSystemView

# Coupling of a 500 m² slab with a ~1.6 °C source plane at zero load
DEMO_COUPLING = LinearSurfaceCoupling(
    ca=-2.0, cb=0.1, cc=0.004, cd=5.0, ce=0.2, cf=0.002,
    cg=1.0, ch=0.01, ci=0.5, cj=0.3, area=500.0,
)


def main():
    """Run the demonstration sequence."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    params = IceRinkController.get_default_params()
    schedules = ScheduleTable({
        params['availability_schedule']: 1.0,
        params['setpoint_schedule']: -5.0,
    })
    actuator = LoopFlowActuator(min_flow=0.0, max_flow=80.0)
    controller = IceRinkController(params, schedules, actuator, RecordedHeatBalance())

    print(controller.circuit)
    flow = 10.0
    for hour, t_in in enumerate([-9.0, -8.0, -7.0, -6.0]):
        result = controller.step(DEMO_COUPLING, t_in, flow, current_time=float(hour), timestep=1.0)
        RinkSystemView.display_summary(result)
        flow = actuator.flow_at(params['inlet_node'])

    RinkSystemView.display_result(controller.get_last_result())
    print(f"Cooling energy: {controller.cooling_energy/3.6e6:.1f} kWh")


if __name__ == "__main__":
    main()
