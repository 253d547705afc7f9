from cockpit_dash import main as cli
from cockpit_dash.config.settings import Settings


def test_headless_run_prints_trip(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(Settings, "_default_path", staticmethod(lambda: tmp_path / "settings.json"))

    code = cli.main(["--seconds", "0.1", "--interval-ms", "10", "--seed", "3", "--trip", "--accelerate", "3"])

    out = capsys.readouterr().out
    assert code == 0
    assert "SPEED    15 km/h" in out
    assert "gear D" in out
    assert "TRIP  #1" in out
    assert "score 100" in out
