"""Tests for the stage audit script helpers."""
import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from scripts.stage_audit import main, propellant_by_stage, stage_transitions


def test_stage_transitions():
    times = [0.0, 1.0, 2.0, 3.0]
    stages = ['IDLE', 'LIFTOFF', 'LIFTOFF', 'ATMOSPHERIC_ASCENT']
    out = stage_transitions(times, stages, [0, 1, 2, 3], [0, 10, 20, 30])
    assert [s for _, s, _, _ in out] == ['IDLE', 'LIFTOFF', 'ATMOSPHERIC_ASCENT']
    assert out[1][0] == 1.0


def test_propellant_by_stage_skips_separation_jump():
    times = [0.0, 1.0, 2.0, 3.0]
    stages = ['LIFTOFF', 'LIFTOFF', 'ATMOSPHERIC_ASCENT', 'ATMOSPHERIC_ASCENT']
    fuel = [100.0, 99.0, 98.0, 0.0]
    usage = propellant_by_stage(times, stages, fuel, 1000.0)
    assert usage['LIFTOFF'] == pytest.approx(10.0)
    assert usage['ATMOSPHERIC_ASCENT'] == pytest.approx(10.0)


def test_main_prints_report(capsys):
    main(['--duration', '2', '--dt', '0.05'])
    out = capsys.readouterr().out
    assert "SHUTTLE STAGE AUDIT" in out
    assert "Liftoff" in out
