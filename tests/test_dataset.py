"""Tests for loading the usage table."""

from pathlib import Path

import numpy as np
import pandas as pd
import pytest

from dataset import (
    USAGE_SCHEMA,
    ColumnKind,
    category_levels,
    category_ranks,
    load_dataset,
    require_positive,
)


class TestLoadDataset:
    """Tests for load_dataset."""

    def test_applies_schema_types(self, usage_csv: Path) -> None:
        df = load_dataset(usage_csv)
        assert len(df) == 5
        assert df["metric_1"].dtype == float
        assert df["metric_2"].dtype == float
        assert isinstance(df["user"].dtype, pd.CategoricalDtype)
        assert df["user"].cat.ordered

    def test_levels_sorted_naturally(self, write_csv) -> None:
        path = write_csv("metric_1,metric_2,user\n1,2,10\n3,4,2\n5,6,10\n7,8,9\n")
        df = load_dataset(path)
        assert category_levels(df, "user") == [2, 9, 10]
        np.testing.assert_array_equal(category_ranks(df, "user"), [2, 0, 2, 1])

    def test_string_categories(self, write_csv) -> None:
        path = write_csv("metric_1,metric_2,user\n1,2,bob\n3,4,alice\n")
        df = load_dataset(path)
        assert category_levels(df, "user") == ["alice", "bob"]

    def test_undeclared_columns_untouched(self, write_csv) -> None:
        path = write_csv("metric_1,metric_2,user,session\n1,2,1,7\n3,4,2,8\n")
        df = load_dataset(path)
        assert pd.api.types.is_integer_dtype(df["session"])

    def test_numeric_column_not_coerced_without_declaration(self, usage_csv: Path) -> None:
        schema = {"metric_1": ColumnKind.NUMERIC, "user": ColumnKind.NUMERIC}
        df = load_dataset(usage_csv, schema)
        assert not isinstance(df["user"].dtype, pd.CategoricalDtype)
        assert df["user"].dtype == float

    def test_default_schema(self) -> None:
        assert USAGE_SCHEMA == {
            "metric_1": ColumnKind.NUMERIC,
            "metric_2": ColumnKind.NUMERIC,
            "user": ColumnKind.CATEGORY,
        }

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="not found"):
            load_dataset(tmp_path / "nope.csv")

    def test_empty_file(self, write_csv) -> None:
        with pytest.raises(ValueError, match="empty"):
            load_dataset(write_csv(""))

    def test_missing_column(self, write_csv) -> None:
        path = write_csv("metric_1,user\n1,1\n2,2\n")
        with pytest.raises(ValueError, match="missing required columns.*metric_2"):
            load_dataset(path)

    def test_non_numeric_metric(self, write_csv) -> None:
        path = write_csv("metric_1,metric_2,user\n1,abc,1\n2,3,2\n")
        with pytest.raises(ValueError, match="'metric_2' must be numeric"):
            load_dataset(path)

    def test_missing_values(self, write_csv) -> None:
        path = write_csv("metric_1,metric_2,user\n1,,1\n2,3,2\n")
        with pytest.raises(ValueError, match="'metric_2' has missing values"):
            load_dataset(path)

    def test_no_rows_means_no_categories(self, write_csv) -> None:
        path = write_csv("metric_1,metric_2,user\n")
        with pytest.raises(ValueError, match="no category values"):
            load_dataset(path)

    def test_single_category_warns(self, write_csv, capsys) -> None:
        path = write_csv("metric_1,metric_2,user\n1,2,5\n3,4,5\n")
        df = load_dataset(path)
        assert category_levels(df, "user") == [5]
        assert "[WARNING]" in capsys.readouterr().out


class TestRequirePositive:
    """Tests for require_positive."""

    def test_positive_values_pass(self, usage_csv: Path) -> None:
        require_positive(load_dataset(usage_csv), ["metric_1", "metric_2"])

    def test_zero_rejected(self, write_csv) -> None:
        df = load_dataset(write_csv("metric_1,metric_2,user\n0,2,1\n3,4,2\n"))
        with pytest.raises(ValueError, match="metric_1"):
            require_positive(df, ["metric_1", "metric_2"])

    def test_negative_rejected(self, write_csv) -> None:
        df = load_dataset(write_csv("metric_1,metric_2,user\n1,2,1\n3,-4,2\n"))
        with pytest.raises(ValueError, match="metric_2"):
            require_positive(df, ["metric_1", "metric_2"])
