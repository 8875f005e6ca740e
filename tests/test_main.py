"""Tests for the headless batch runner."""
import csv

import pytest

from shuttle_sim.config import create_test_config
from shuttle_sim.main import SimulationLog, run_simulation
from shuttle_sim.simulation import VehicleSimulation
from shuttle_sim.stages import FlightStage


def test_run_simulation_returns_log():
    final, log, events = run_simulation(config=create_test_config(), duration=2.0, dt=0.02)
    assert final.stage is FlightStage.LIFTOFF
    assert final.time == pytest.approx(2.0, abs=0.02)
    assert len(log) == len(log.altitude) == len(log.stage_name)
    assert len(log) == pytest.approx(100, abs=1)
    assert log.altitude[-1] > log.altitude[0]
    assert events == []


def test_run_simulation_waits_for_launch_time():
    final, log, _ = run_simulation(config=create_test_config(), duration=2.0,
                                   dt=0.02, launch_time=1.0)
    idle = [t for t, s in zip(log.time, log.stage_name) if s == 'IDLE']
    assert idle
    assert max(idle) <= 1.0 + 0.02 + 1e-9
    assert final.stage is FlightStage.LIFTOFF


def test_run_simulation_auto_launch():
    cfg = create_test_config(auto_launch_time=0.5)
    final, log, _ = run_simulation(config=cfg, duration=1.0, dt=0.02, launch_time=None)
    assert log.stage_name[0] == 'IDLE'
    assert final.stage is FlightStage.LIFTOFF


def test_run_simulation_continues_existing():
    sim = VehicleSimulation(create_test_config())
    run_simulation(duration=1.0, dt=0.02, simulation=sim)
    final, log, _ = run_simulation(duration=1.0, dt=0.02, simulation=sim)
    assert final.time == pytest.approx(2.0, abs=0.02)
    assert log.time[0] > 1.0


def test_run_simulation_verbose_output(capsys):
    run_simulation(config=create_test_config(), duration=1.0, dt=0.02, verbose=True)
    out = capsys.readouterr().out
    assert "SHUTTLE ASCENT SIMULATION" in out
    assert "Final:" in out


def test_run_simulation_rejects_bad_dt():
    with pytest.raises(ValueError):
        run_simulation(config=create_test_config(), duration=1.0, dt=0.0)


def test_log_to_csv(tmp_path):
    _, log, _ = run_simulation(config=create_test_config(), duration=0.5, dt=0.05)
    path = tmp_path / "out" / "telemetry.csv"
    log.to_csv(str(path))

    with open(path, newline='') as fh:
        rows = list(csv.reader(fh))
    assert rows[0][0] == 'time'
    assert rows[0][-1] == 'stage'
    assert len(rows) == len(log) + 1
    assert rows[1][-1] == 'LIFTOFF'


def test_empty_log():
    assert len(SimulationLog()) == 0
