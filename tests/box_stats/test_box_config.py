"""Unit tests for BoxCalcConfig persistence."""

import json
import logging

import pytest

from boxcalc.box_stats.box_config import SCHEMA_VERSION, BoxCalcConfig, BoxCalcDefaults
from boxcalc.box_stats.trace_state import PointsMode, QuartileMethod


def test_load_missing_file_uses_defaults(tmp_path):
    path = tmp_path / "box_calc_config.json"
    cfg = BoxCalcConfig.load(config_path=path)
    assert cfg.get_defaults() == BoxCalcDefaults()
    assert not path.exists()


def test_load_missing_file_create_if_missing_writes_defaults(tmp_path):
    path = tmp_path / "sub" / "box_calc_config.json"
    BoxCalcConfig.load(config_path=path, create_if_missing=True)
    assert json.loads(path.read_text(encoding="utf-8")) == BoxCalcDefaults().to_json_dict()


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "box_calc_config.json"
    cfg = BoxCalcConfig(path=path)
    cfg.set_quartilemethod(QuartileMethod.INCLUSIVE)
    cfg.set_boxpoints(PointsMode.ALL)
    cfg.set_notched(True)
    cfg.save()

    loaded = BoxCalcConfig.load(config_path=path).get_defaults()
    assert loaded.quartilemethod == QuartileMethod.INCLUSIVE
    assert loaded.boxpoints == PointsMode.ALL
    assert loaded.notched is True


def test_invalid_json_uses_defaults(tmp_path, caplog):
    caplog.set_level(logging.WARNING, logger="boxcalc")
    path = tmp_path / "box_calc_config.json"
    path.write_text("{not json", encoding="utf-8")
    cfg = BoxCalcConfig.load(config_path=path)
    assert cfg.get_defaults() == BoxCalcDefaults()
    assert any("not valid JSON" in r.getMessage() for r in caplog.records)


def test_non_dict_json_uses_defaults(tmp_path):
    path = tmp_path / "box_calc_config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert BoxCalcConfig.load(config_path=path).get_defaults() == BoxCalcDefaults()


def test_schema_mismatch_resets_or_upgrades(tmp_path):
    path = tmp_path / "box_calc_config.json"
    path.write_text(
        json.dumps({"schema_version": SCHEMA_VERSION + 1, "quartilemethod": "exclusive"}),
        encoding="utf-8",
    )
    reset = BoxCalcConfig.load(config_path=path)
    assert reset.get_defaults().quartilemethod == QuartileMethod.LINEAR

    kept = BoxCalcConfig.load(config_path=path, reset_on_version_mismatch=False)
    assert kept.get_defaults().quartilemethod == QuartileMethod.EXCLUSIVE
    assert kept.get_defaults().schema_version == SCHEMA_VERSION


def test_from_json_dict_tolerates_unknown_and_invalid_values(caplog):
    caplog.set_level(logging.WARNING, logger="boxcalc")
    data = BoxCalcDefaults.from_json_dict({
        "schema_version": SCHEMA_VERSION,
        "quartilemethod": "bogus",
        "boxpoints": False,
        "color": "red",
    })
    assert data.quartilemethod == QuartileMethod.LINEAR
    assert data.boxpoints == PointsMode.NONE
    messages = [r.getMessage() for r in caplog.records]
    assert any("quartilemethod" in m for m in messages)
    assert any("Unknown key 'color'" in m for m in messages)


def test_save_failure_is_raised(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    cfg = BoxCalcConfig(path=blocker / "box_calc_config.json")
    with pytest.raises(OSError):
        cfg.save()
