"""
Tests for the lottery weight and selection-probability heuristics.
"""
import pytest

from prevailing_wage.classify.lottery import (
    DEFAULT_WEIGHTED_BUCKETS,
    estimate_lottery_chance,
    load_weighted_buckets,
    random_selection_probability,
    salary_weighted_probability,
    weighted_selection_probability,
)


@pytest.mark.parametrize("level", [1, 2, 3, 4])
def test_weight_equals_level(level):
    result = estimate_lottery_chance(level)
    assert result["weight"] == level
    assert f"Level {level} receives {level} chance" in result["rationale"]


def test_rationale_pluralization():
    assert estimate_lottery_chance(1)["rationale"].endswith("1 chance in selection weighting.")
    assert "3 chances" in estimate_lottery_chance(3)["rationale"]


@pytest.mark.parametrize("bad", [0, 5, -1, True, "2", None])
def test_rejects_invalid_level(bad):
    with pytest.raises(ValueError, match="1\\|2\\|3\\|4"):
        estimate_lottery_chance(bad)


def test_load_buckets_from_repo_config():
    assert load_weighted_buckets() == {1: 1.0, 2: 2.0, 3: 4.0, 4: 10.0}


def test_load_buckets_custom(tmp_path):
    cfg = tmp_path / "lottery.yml"
    cfg.write_text("weighted_buckets:\n  1: 1\n  2: 3\n  3: 5\n  4: 7\n")
    assert load_weighted_buckets(cfg) == {1: 1.0, 2: 3.0, 3: 5.0, 4: 7.0}


def test_load_buckets_missing_file(tmp_path):
    assert load_weighted_buckets(tmp_path / "nope.yml") == DEFAULT_WEIGHTED_BUCKETS


def test_weighted_probability():
    result = weighted_selection_probability(4, total_registrations=1000, selected_count=10)
    assert result["entries"] == 10.0
    assert result["probability"] == pytest.approx(0.1)
    assert result["inputs"]["wageLevel"] == 4


def test_weighted_probability_clamped():
    result = weighted_selection_probability(4, total_registrations=10, selected_count=10)
    assert result["probability"] == 1.0


def test_weighted_probability_unknown_bucket_gets_one_entry():
    result = weighted_selection_probability(3, 100, 1, buckets={1: 1})
    assert result["entries"] == 1.0


def test_random_probability():
    assert random_selection_probability(400, 100)["probability"] == pytest.approx(0.25)
    assert random_selection_probability(10, 50)["probability"] == 1.0


@pytest.mark.parametrize("total,selected", [(0, 1), (-1, 1), (10, -1), (float("nan"), 1)])
def test_count_validation(total, selected):
    with pytest.raises(ValueError):
        random_selection_probability(total, selected)


def test_salary_weighted():
    result = salary_weighted_probability(150000, 100000, 1000, 10)
    assert result["weight"] == pytest.approx(1.5)
    assert result["probability"] == pytest.approx(0.015)
    assert result["inputs"]["medianSalaryForSoc"] == 100000


def test_salary_weight_clamped():
    assert salary_weighted_probability(1, 100000, 1000, 10)["weight"] == 0.1
    assert salary_weighted_probability(10_000_000, 100000, 1000, 10)["weight"] == 10.0


def test_salary_requires_positive():
    with pytest.raises(ValueError):
        salary_weighted_probability(0, 100000, 1000, 10)
    with pytest.raises(ValueError):
        salary_weighted_probability(100000, 0, 1000, 10)


def test_weighted_probability_reads_lottery_config(tmp_path, monkeypatch):
    """Editing the lottery config changes the entries used by default."""
    import prevailing_wage.classify.lottery as lottery

    cfg = tmp_path / "lottery.yml"
    cfg.write_text("weighted_buckets:\n  1: 1\n  2: 2\n  3: 4\n  4: 99\n")
    monkeypatch.setattr(lottery, "DEFAULT_LOTTERY_CONFIG", cfg)
    result = weighted_selection_probability(4, total_registrations=1000, selected_count=10)
    assert result["entries"] == 99.0
    assert result["probability"] == pytest.approx(0.99)
    assert result["buckets"][4] == 99.0


def test_explicit_buckets_override_config():
    result = weighted_selection_probability(4, 1000, 10, buckets={4: 3})
    assert result["entries"] == 3.0
