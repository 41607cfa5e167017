"""Tests for the statistics reducer and measurement aggregator."""

from __future__ import annotations

import pytest

from pdureport.analysis.statistics import aggregate_rows, build_matrix, collect_samples, reduce_series
from pdureport.errors import LoadError
from pdureport.models.core import Line, Statistics


class TestReduceSeries:
    def test_empty_is_zero(self):
        assert reduce_series([]) == Statistics(0.0, 0.0, 0.0)

    def test_single_value(self):
        stats = reduce_series([3.5])
        assert (stats.min, stats.avg, stats.max) == (3.5, 3.5, 3.5)

    def test_min_avg_max(self):
        stats = reduce_series([10.0, 12.0])
        assert stats.min == 10.0
        assert stats.max == 12.0
        assert stats.avg == pytest.approx(11.0)

    @pytest.mark.parametrize("series", [
        [1.0, -2.0, 7.5, 0.0],
        [0.1, 0.2, 0.3],
        [-5.0, -5.0, -5.0],
        [1e6, 3.0, 42.0, 0.001],
    ])
    def test_avg_between_min_and_max(self, series):
        stats = reduce_series(series)
        assert stats.min <= stats.avg <= stats.max

    def test_min_max_ignore_order(self):
        forward = reduce_series([3.0, 9.0, 1.0, 4.0])
        backward = reduce_series([4.0, 1.0, 9.0, 3.0])
        assert (forward.min, forward.max) == (backward.min, backward.max) == (1.0, 9.0)

    def test_mean_sums_in_row_order(self):
        # pairwise summation cancels the large terms first and gives 0
        series = [1e16, 1.0, -1e16, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0]
        assert reduce_series(series).avg == pytest.approx(1 / 9)

    def test_mean_matches_running_total(self):
        series = [round(10 + (i * 7 % 13) * 0.37 + (i % 5) * 0.01, 2) for i in range(40)]
        total = 0.0
        for value in series:
            total += value
        assert reduce_series(series).avg == total / len(series)


class TestCollectSamples:
    def test_skips_blank_invalid_and_short_rows(self):
        rows = [
            ["t0", "1.5", "abc"],
            ["t1", " ", "2"],
            ["t2"],
            ["t3", "nan", "3.25"],
        ]
        samples = collect_samples(rows, {"Q1_l1": 1, "Q1_l2": 2})
        assert samples["Q1_l1"] == [1.5]
        assert samples["Q1_l2"] == [2.0, 3.25]

    def test_preserves_row_order(self):
        rows = [["t", "3"], ["t", "1"], ["t", "2"]]
        assert collect_samples(rows, {"Q1_l1": 1})["Q1_l1"] == [3.0, 1.0, 2.0]


class TestAggregateRows:
    def test_two_row_example(self):
        rows = [
            ["TS", "A1 Q1 Current : l1", "A1 Q1 Current : l2"],
            ["2025-06-01", "10.0", "20.0"],
            ["2025-06-02", "12.0", "22.0"],
        ]
        matrix = aggregate_rows(rows)
        assert matrix.device_name == "A1"

        l1 = matrix.get(0, Line.L1)
        assert (l1.min, l1.max) == (10.0, 12.0)
        assert l1.avg == pytest.approx(11.0)

        l2 = matrix.get(0, Line.L2)
        assert (l2.min, l2.max) == (20.0, 22.0)
        assert l2.avg == pytest.approx(21.0)

        assert matrix.get(0, Line.L3) == Statistics.zero()
        for q in range(1, 18):
            for line in Line:
                assert matrix.get(q, line) == Statistics.zero()

    def test_column_order_does_not_matter(self):
        header = ["TS", "A1 Q1 Current : l1", "A1 Q2 Current : l3", "A1 Q18 Current : l2"]
        data = [["t0", "1", "2", "3"], ["t1", "4", "", "6"], ["t2", "x", "8", "9"]]
        permutation = [0, 3, 1, 2]
        permuted = [[row[i] for i in permutation] for row in [header, *data]]

        assert aggregate_rows([header, *data]) == aggregate_rows(permuted)

    def test_line_and_rack_case_insensitive(self):
        rows = [["TS", "A1 q4 Current : L3"], ["t", "2.0"]]
        assert aggregate_rows(rows).get(3, Line.L3).max == 2.0

    def test_header_only_is_load_error(self):
        with pytest.raises(LoadError):
            aggregate_rows([["TS", "A1 Q1 Current : l1"]])

    def test_empty_is_load_error(self):
        with pytest.raises(LoadError):
            aggregate_rows([])


class TestBuildMatrix:
    def test_rows_in_canonical_order(self):
        matrix = build_matrix("A1", {"Q2_l2": [4.0, 6.0]})
        labels = [label for label, _ in matrix.rows()]
        assert labels == [
            "l1 min", "l1 avg", "l1 max",
            "l2 min", "l2 avg", "l2 max",
            "l3 min", "l3 avg", "l3 max",
        ]
        l2_avg = dict(matrix.rows())["l2 avg"]
        assert len(l2_avg) == 18
        assert l2_avg[1] == pytest.approx(5.0)
        assert l2_avg[0] == 0.0
