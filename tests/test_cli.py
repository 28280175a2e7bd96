import json

from mandelgrid.cli import EXIT_CONFIG_ERROR, main


def test_render_prints_ansi(capsys):
    assert main(["render", "--width", "8", "--height", "4", "--max-iterations", "20"]) == 0
    out = capsys.readouterr().out
    lines = out.rstrip("\n").split("\n")
    assert len(lines) == 2
    assert all(line.count("▀") == 8 for line in lines)


def test_render_from_config_file(tmp_path, capsys):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"top_left": [-0.9, 0.5], "bottom_right": [-0.3, -0.1], "width": 6, "height": 2}))
    assert main(["render", "--config", str(path), "--color", "sine"]) == 0
    out = capsys.readouterr().out
    assert out.count("▀") == 6


def test_render_rejects_zero_iterations(capsys):
    assert main(["render", "--width", "4", "--height", "4", "--max-iterations", "0"]) == EXIT_CONFIG_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "max_iterations" in captured.err


def test_render_rejects_degenerate_region(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"top_left": [0, 1], "bottom_right": [0, -1]}))
    assert main(["render", "--config", str(path)]) == EXIT_CONFIG_ERROR


def test_probe_prints_one_line_per_step(capsys):
    assert main(["probe", "seahorses", "--steps", "2"]) == 0
    lines = capsys.readouterr().out.strip().split("\n")
    assert len(lines) == 2
    eps, t, scaled = lines[0].split("\t")
    assert (eps, t, scaled) == ("1e+00", "2", "2.000000")


def test_probe_reports_bounded(capsys):
    assert main(["probe", "butt", "--steps", "3", "--max-iterations", "3"]) == 0
    lines = capsys.readouterr().out.strip().split("\n")
    assert lines[-1].split("\t")[1] == "bounded"


def test_render_missing_config_file(tmp_path, capsys):
    assert main(["render", "--config", str(tmp_path / "absent.json")]) == EXIT_CONFIG_ERROR
    assert "Cannot read config" in capsys.readouterr().err
