"""
Tests for wage index data quality checks.
"""
from prevailing_wage.validate.dq_checks import check_index


def _rec(soc, area, levels, unit="hourly"):
    l1, l2, l3, l4 = levels
    return {"soc": soc, "title": "T", "areaCode": area, "areaName": "A", "unit": unit,
            "level1": l1, "level2": l2, "level3": l3, "level4": l4}


def test_clean_index():
    report = check_index([_rec("15-1252", "1", (1, 2, 3, 4)), _rec("15-1252", "2", (1, 2, 3, 4))])
    assert report["row_count"] == 2
    assert report["missing_columns"] == []
    assert report["null_counts"] == {}
    assert report["tier_order_violations"] == 0
    assert report["duplicate_pairs"] == 0
    assert report["distinct_socs"] == 1
    assert report["distinct_areas"] == 2


def test_tier_order_reported_not_fixed():
    records = [_rec("15-1252", "1", (5, 4, 6, 7))]
    report = check_index(records)
    assert report["tier_order_violations"] == 1
    assert records[0]["level1"] == 5


def test_duplicates_and_units():
    records = [
        _rec("15-1252", "1", (1, 2, 3, 4)),
        _rec("15-1252", "1", (1, 2, 3, 4)),
        _rec("13-2011", "1", (1, 2, 3, 4), unit="annual"),
    ]
    report = check_index(records)
    assert report["duplicate_pairs"] == 1
    assert report["non_hourly_rows"] == 1


def test_missing_columns_and_empty():
    assert check_index([])["row_count"] == 0
    report = check_index([{"soc": "x"}])
    assert "level1" in report["missing_columns"]
