import json

import pytest
import yaml
from feasibility_model.scenario_loader import load


def test_simple_load_file(tmp_path):
    # simple scenario, no extends
    cfg = {"name": "base", "basics": {"inflation": {"y2": 0.1}}}
    f = tmp_path / "simple.yaml"
    f.write_text(yaml.safe_dump(cfg))
    assert load(str(f)) == cfg


def test_load_json_file(tmp_path):
    cfg = {"school_capacity": 120, "grades": [{"grade": "KG", "total_students": 10}]}
    f = tmp_path / "scenario.json"
    f.write_text(json.dumps(cfg))
    assert load(str(f)) == cfg


def test_load_directory(tmp_path):
    # scenario files of every supported extension
    (tmp_path / "one.yaml").write_text(yaml.safe_dump({"x": "X"}))
    (tmp_path / "two.yml").write_text(yaml.safe_dump({"extends": "one.yaml", "y": "Y"}))
    (tmp_path / "three.json").write_text(json.dumps({"z": 1}))
    result = load(str(tmp_path))
    assert result == {"one": {"x": "X"}, "two": {"x": "X", "y": "Y"}, "three": {"z": 1}}


def test_extends_deep_merge(tmp_path):
    # baseline -> what-if -> stress test
    base = tmp_path / "baseline.yaml"
    base.write_text(yaml.safe_dump({
        "basics": {"inflation": {"y2": 0.1, "y3": 0.1}},
        "expenses": {"operating": {"items": {"rent": 100}}},
        "discounts": [{"name": "Sibling", "value": 0.1, "ratio": 0.2}],
    }))
    what_if = tmp_path / "what_if.yaml"
    what_if.write_text(yaml.safe_dump({
        "extends": "baseline.yaml",
        "basics": {"inflation": {"y3": 0.3}},
        "discounts": [],
    }))
    stress = tmp_path / "stress.yaml"
    stress.write_text(yaml.safe_dump({"extends": "what_if.yaml", "expenses": {"operating": {"items": {"marketing_and_events": 5}}}}))
    merged = load(str(stress))
    assert merged == {
        "basics": {"inflation": {"y2": 0.1, "y3": 0.3}},
        "expenses": {"operating": {"items": {"rent": 100, "marketing_and_events": 5}}},
        "discounts": [],
    }


def test_missing_parent_error(tmp_path):
    f = tmp_path / "child.yaml"
    # extends a non-existent file
    f.write_text(yaml.safe_dump({"extends": "nope.yaml", "foo": "bar"}))
    with pytest.raises(FileNotFoundError):
        load(str(f))


def test_circular_extends(tmp_path):
    (tmp_path / "a.yaml").write_text(yaml.safe_dump({"extends": "b.yaml"}))
    (tmp_path / "b.yaml").write_text(yaml.safe_dump({"extends": "a.yaml"}))
    with pytest.raises(ValueError):
        load(str(tmp_path / "a.yaml"))
    with pytest.raises(ValueError):
        load(str(tmp_path))


def test_non_mapping_document(tmp_path):
    f = tmp_path / "list.yaml"
    f.write_text("- 1\n- 2\n")
    with pytest.raises(ValueError):
        load(str(f))
