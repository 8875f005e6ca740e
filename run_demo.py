"""Demo script: powered ascent through booster separation, then a forced
coast and a short maneuvering burn driven through the command queue."""
import logging

import numpy as np

from shuttle_sim import VehicleSimulation, FlightStage, create_default_config

logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

DT = 1.0 / 60.0

sim = VehicleSimulation(create_default_config())
sim.begin_ascent()
sim.run(200.0, DT)

# Skip ahead to coasting flight and fire the maneuvering engines for 5 s
sim.set_stage(FlightStage.FREE_MOTION)
sim.tick(DT)
sim.set_maneuvering_engines(True)
sim.run(5.0, DT)
sim.set_maneuvering_engines(False)
sim.run(1.0, DT)

print("\n===== STAGE TIMELINE =====")
for tr in sim.stage_history:
    tag = " (forced)" if tr.forced else ""
    print(f"  t={tr.time:8.1f}s | Alt={tr.altitude/1000:8.1f} km | "
          f"V={tr.speed:8.1f} m/s | {tr.from_stage.label} -> {tr.to_stage.label}{tag}")

print("\n===== DETACHMENTS =====")
for event in sim.event_log:
    print(f"  t={event.time:8.1f}s | Alt={event.altitude/1000:8.1f} km | "
          f"{event.separation.value}: {[c.value for c in event.components]}")

final = sim.snapshot
print("\n===== FINAL STATE =====")
print(f"Stage: {final.stage_label}")
print(f"Altitude: {final.altitude/1000:.1f} km")
print(f"Speed: {final.speed:.1f} m/s")
print(f"Mass: {final.total_mass:.0f} kg")
print(f"Fuel: {final.fuel_percent:.2f} %")
print(f"Acceleration: {np.linalg.norm(final.acceleration):.3f} m/s^2")
