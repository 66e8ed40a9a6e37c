import json

import pandas as pd
import pytest
import yaml

import logging_config
from feasibility_model.projections.cli import main

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def fresh_logging():
    logging_config.reset_logging()
    yield
    logging_config.reset_logging()


@pytest.fixture
def scenario_file(tmp_path, scenario, norm_config):
    doc = dict(scenario, norm=norm_config)
    path = tmp_path / "scenario.yaml"
    path.write_text(yaml.safe_dump(doc))
    return path


def test_writes_json_and_summary_csv(tmp_path, scenario_file):
    out = tmp_path / "out" / "result.json"
    csv = tmp_path / "out" / "summary.csv"
    code = main([
        "--scenario", str(scenario_file),
        "--output", str(out),
        "--summary-csv", str(csv),
        "--log-dir", str(tmp_path / "logs"),
    ])
    assert code == 0

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["multi_year_valid"] is True
    assert payload["norm"]["required_teachers"] == 4
    assert payload["years"]["y2"]["result"]["net_result"] == 32450.0

    summary = pd.read_csv(csv, index_col="year")
    assert list(summary.index) == ["y1", "y2", "y3"]
    assert (tmp_path / "logs" / "projection_events.log").exists()


def test_prints_json_to_stdout(tmp_path, scenario_file, capsys):
    code = main(["--scenario", str(scenario_file), "--log-dir", str(tmp_path / "logs")])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert set(payload["years"]) == {"y1", "y2", "y3"}


def test_separate_norm_file_and_extends(tmp_path, scenario, norm_config):
    (tmp_path / "base.yaml").write_text(yaml.safe_dump(scenario))
    (tmp_path / "what_if.yaml").write_text(yaml.safe_dump({"extends": "base.yaml", "school_capacity": 35}))
    norm_path = tmp_path / "norm.yaml"
    norm_path.write_text(yaml.safe_dump(norm_config))
    out = tmp_path / "result.json"

    code = main([
        "--scenario", str(tmp_path / "what_if.yaml"),
        "--norm", str(norm_path),
        "--output", str(out),
        "--log-dir", str(tmp_path / "logs"),
    ])
    assert code == 0
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["students"]["school_capacity"] == 35.0
    assert payload["multi_year_valid"] is False
    assert "total_students exceeds school_capacity." in payload["flags"]["errors"]


def test_missing_scenario_file_fails(tmp_path):
    code = main(["--scenario", str(tmp_path / "nope.yaml"), "--log-dir", str(tmp_path / "logs")])
    assert code == 1


def test_malformed_scenario_sections_fail(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.safe_dump({"grades": {"KG": 10}}))
    assert main(["--scenario", str(path), "--log-dir", str(tmp_path / "logs")]) == 1


def test_invalid_engine_config_fails(tmp_path, scenario_file):
    engine = tmp_path / "engine.yaml"
    engine.write_text(yaml.safe_dump({"low_utilization_threshold": 0.9, "high_utilization_threshold": 0.5}))
    code = main([
        "--scenario", str(scenario_file),
        "--engine-config", str(engine),
        "--log-dir", str(tmp_path / "logs"),
    ])
    assert code == 1


def test_debug_flag_captures_engine_detail(tmp_path, scenario_file):
    log_dir = tmp_path / "logs"
    code = main([
        "--scenario", str(scenario_file),
        "--output", str(tmp_path / "r.json"),
        "--log-dir", str(log_dir),
        "--debug",
    ])
    assert code == 0
    detail = (log_dir / "debug_detail.log").read_text(encoding="utf-8")
    assert "feasibility_model.engines.norm" in detail
    assert "[NORM y3]" in detail
