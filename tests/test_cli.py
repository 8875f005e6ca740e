"""Tests for the command-line entry point."""
import csv
import json
import os

import pytest

from shuttle_sim import cli


def test_parse_args_defaults():
    args = cli.parse_args([])
    assert args.duration == 130.0
    assert args.dt == pytest.approx(1.0 / 60.0)
    assert args.launch_time == 0.0
    assert args.csv is None
    assert args.plots is None
    assert not args.quiet


def test_main_writes_csv_and_state(tmp_path):
    csv_path = tmp_path / "telemetry.csv"
    state_path = tmp_path / "final_state.json"
    rc = cli.main(['--duration', '1', '--dt', '0.05', '--quiet',
                   '--csv', str(csv_path), '--save-state', str(state_path)])
    assert rc == 0

    with open(csv_path, newline='') as fh:
        rows = list(csv.reader(fh))
    assert len(rows) > 1

    with open(state_path) as fh:
        data = json.load(fh)
    assert data['stage'] == 'LIFTOFF'
    assert data['time'] == pytest.approx(1.0, abs=0.05)


def test_main_resume(tmp_path):
    state_path = tmp_path / "state.json"
    cli.main(['--duration', '1', '--dt', '0.05', '--quiet', '--save-state', str(state_path)])
    cli.main(['--duration', '1', '--dt', '0.05', '--quiet',
              '--resume', str(state_path), '--save-state', str(state_path)])
    with open(state_path) as fh:
        data = json.load(fh)
    assert data['time'] == pytest.approx(2.0, abs=0.05)


def test_main_plots(tmp_path):
    plot_dir = tmp_path / "plots"
    cli.main(['--duration', '1', '--dt', '0.05', '--quiet', '--plots', str(plot_dir)])
    assert len(os.listdir(plot_dir)) == 4


def test_main_waits_for_auto_launch(tmp_path, capsys):
    state_path = tmp_path / "state.json"
    cli.main(['--duration', '1', '--dt', '0.05', '--launch-time', '-1',
              '--save-state', str(state_path)])
    with open(state_path) as fh:
        assert json.load(fh)['stage'] == 'IDLE'
    out = capsys.readouterr().out
    assert "SIMULATION SUMMARY" in out
    assert "Shuttle Ascent Configuration" in out


def test_main_failure_exits_nonzero(tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.main(['--duration', '1', '--quiet', '--resume', str(tmp_path / "missing.json")])
    assert exc.value.code == 1


def test_quiet_skips_config_summary(tmp_path, capsys):
    cli.main(['--duration', '0.1', '--dt', '0.05', '--quiet'])
    assert "Shuttle Ascent Configuration" not in capsys.readouterr().out
