"""
Tests for the command-line entrypoints.
"""
import json

import pytest
import yaml

from prevailing_wage.classify import run_classify
from prevailing_wage.curate import run_curate
from prevailing_wage.io import check_paths
from prevailing_wage.io.store import WageIndexStore


@pytest.fixture
def paths_config(tmp_path, oflc_tree):
    data_root = tmp_path / "data"
    (data_root / "wages").mkdir(parents=True)
    oflc_tree.rename(data_root / "wages" / "2025-26")
    cfg = tmp_path / "paths.yaml"
    cfg.write_text(yaml.safe_dump({
        "data_root": str(data_root),
        "artifacts_root": str(tmp_path / "artifacts"),
        "default_year": "2025-26",
    }))
    return cfg


def test_curate_dry_run_writes_nothing(paths_config, tmp_path, capsys):
    assert run_curate.main(["--paths", str(paths_config), "--dry-run"]) == 0
    out = capsys.readouterr().out
    assert "[direct_wage] ALC_Export.csv" in out
    assert "[area_dictionary] Geography.csv" in out
    assert "DRY RUN" in out
    assert not (tmp_path / "artifacts").exists()


def test_curate_builds_year(paths_config, tmp_path, capsys):
    assert run_curate.main(["--paths", str(paths_config)]) == 0
    out = capsys.readouterr().out
    assert "Parsed records: 3" in out
    assert "WAGE INDEX BUILD COMPLETE" in out
    assert len(WageIndexStore(tmp_path / "artifacts").read_year("2025-26")) == 3
    assert (tmp_path / "artifacts" / "metrics" / "wage_index_metrics.log").exists()


def test_curate_missing_dir(paths_config, capsys):
    assert run_curate.main(["--paths", str(paths_config), "--year", "1999-00"]) == 1
    assert "Directory not found" in capsys.readouterr().out


def test_classify_against_built_index(paths_config, capsys):
    run_curate.main(["--paths", str(paths_config)])
    capsys.readouterr()
    rc = run_classify.main(["--paths", str(paths_config), "--query", "15-1252",
                            "--location", "San Francisco", "--area-code", "41860",
                            "--wage", "80", "--unit", "hourly", "--no-sample"])
    assert rc == 0
    report = json.loads(capsys.readouterr().out)
    assert report["providerMatch"]["source"] == "store"
    assert report["providerMatch"]["area"] == "San Francisco-Oakland-Hayward, CA"
    assert report["computation"]["level"] == 3


def test_classify_no_match(paths_config, capsys):
    rc = run_classify.main(["--paths", str(paths_config), "--query", "astronaut",
                            "--location", "Boston", "--wage", "100000", "--no-sample"])
    assert rc == 1
    assert "ERROR" in capsys.readouterr().out


def test_check_paths(paths_config, tmp_path, capsys):
    assert check_paths.main(["--paths", str(paths_config)]) == 0
    out = capsys.readouterr().out
    assert "Extracted years: 2025-26" in out
    assert "PATH VALIDATION COMPLETE" in out
    assert (tmp_path / "artifacts" / "tables").is_dir()


def test_check_paths_missing_data_root(tmp_path, capsys):
    cfg = tmp_path / "paths.yaml"
    cfg.write_text(yaml.safe_dump({"data_root": str(tmp_path / "nope"),
                                   "artifacts_root": str(tmp_path / "art")}))
    assert check_paths.main(["--paths", str(cfg)]) == 1
