"""
Tests for the dijkstrax command-line tool.
"""

import json

from dijkstrax.cli import EXAMPLE_CSV, main


def _write_example(tmp_path, body=EXAMPLE_CSV, name="g.csv"):
    path = tmp_path / name
    path.write_text(body, encoding="utf-8")
    return str(path)


def test_example_prints_csv(capsys):
    assert main(["--example"]) == 0
    assert capsys.readouterr().out == EXAMPLE_CSV


def test_path_to_target(tmp_path, capsys):
    code = main(["--edges", _write_example(tmp_path), "--source", "A", "--target", "D"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["source"] == "A"
    assert out["distance"] == 4.0
    assert out["path"] == ["A", "B", "C", "D"]
    assert out["path_edges"] == [["A", "B", 1.0], ["B", "C", 2.0], ["C", "D", 1.0]]
    assert out["distances"] == {"A": 0.0, "B": 1.0, "C": 3.0, "D": 4.0}


def test_full_run_on_undirected_graph(tmp_path, capsys):
    code = main(["--edges", _write_example(tmp_path), "--source", "D", "--undirected"])

    assert code == 0
    out = json.loads(capsys.readouterr().out)
    assert out["directed"] is False
    assert out["distances"]["A"] == 4.0
    assert "path" not in out


def test_unreachable_distance_is_null(tmp_path, capsys):
    path = _write_example(tmp_path, "0,1,1\n2,3,1\n")

    assert main(["--edges", path, "--source", "0", "--target", "3"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distance"] is None
    assert out["path"] == [3]
    assert out["path_edges"] == []


def test_random_graph(capsys):
    assert main(["--random", "--n", "6", "--m", "10", "--seed", "2", "--source", "0"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["distances"]["0"] == 0.0
    assert len(out["distances"]) == 6


def test_exports_and_metrics(tmp_path, capsys):
    tree_json = tmp_path / "tree.json"
    tree_graphml = tmp_path / "tree.graphml"
    metrics = tmp_path / "metrics.json"

    code = main(
        [
            "--edges",
            _write_example(tmp_path),
            "--source",
            "A",
            "--export-json",
            str(tree_json),
            "--export-graphml",
            str(tree_graphml),
            "--metrics-out",
            str(metrics),
        ]
    )

    assert code == 0
    assert len(json.loads(tree_json.read_text())["edges"]) == 3
    assert tree_graphml.read_text().startswith("<?xml")
    m = json.loads(metrics.read_text())
    assert m["finalized"] == 4
    assert m["counters"]["edges_relaxed"] == 5
    assert m["peak_mib"] is not None


def test_log_json_replaces_summary(tmp_path, capsys):
    assert main(["--edges", _write_example(tmp_path), "--source", "A", "--log-json"]) == 0

    lines = capsys.readouterr().out.splitlines()
    events = [json.loads(line) for line in lines]
    assert [e["event"] for e in events] == ["run"]


def test_user_errors_exit_64(tmp_path, capsys):
    assert main(["--edges", str(tmp_path / "missing.csv")]) == 64
    assert "edges file not found" in capsys.readouterr().err

    path = _write_example(tmp_path)
    assert main(["--edges", path, "--source", "Z"]) == 64
    assert "is not a vertex of the graph" in capsys.readouterr().err

    assert main(["--edges", _write_example(tmp_path, "a,b,-1\n", "neg.csv"), "--source", "a"]) == 64
    assert "negative weight" in capsys.readouterr().err
