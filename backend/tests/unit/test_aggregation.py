"""Unit tests for overall scores, daily trends and top-K ranking."""

from datetime import date, datetime, timedelta, timezone

from modelfit.scoring.aggregation import (
    daily_trend,
    extract_score,
    overall_score,
    round_half_up,
    score_record,
    top_k,
    trend_window_start,
)


class TestOverallScore:

    def test_mean_of_both_scores(self) -> None:
        assert overall_score('{"score": 80}', '{"score": 60}') == 70

    def test_business_missing(self) -> None:
        assert overall_score('{"score": 80}', None) == 80

    def test_unparseable_technical(self) -> None:
        assert overall_score("not-json", None) == 0

    def test_only_business_present(self) -> None:
        assert overall_score('{"score": 0}', '{"score": 55}') == 55

    def test_mean_rounds_half_up(self) -> None:
        assert overall_score('{"score": 70}', '{"score": 71}') == 71
        assert overall_score('{"score": 70.2}', '{"score": 70.2}') == 70

    def test_single_score_is_not_rounded(self) -> None:
        assert overall_score('{"score": 72.4}', None) == 72.4
        assert overall_score(None, '{"score": 55.5}') == 55.5

    def test_scores_near_float_limit(self) -> None:
        assert overall_score('{"score": 1e308}', '{"score": 1e308}') == int(1e308)

    def test_integer_beyond_float_range(self) -> None:
        huge = '{"score": 1' + "0" * 400 + "}"
        assert overall_score(huge, '{"score": 60}') == 60

    def test_non_numeric_score_counts_as_missing(self) -> None:
        assert overall_score('{"score": "90"}', '{"score": 40}') == 40
        assert overall_score('{"score": true}', None) == 0

    def test_negative_score_counts_as_missing(self) -> None:
        assert overall_score('{"score": -20}', '{"score": 60}') == 60

    def test_accepts_decoded_dicts(self) -> None:
        assert overall_score({"score": 90}, {"score": 70}) == 80


class TestExtractScore:

    def test_missing_field(self) -> None:
        assert extract_score('{"appropriate": true}') == 0.0

    def test_json_array(self) -> None:
        assert extract_score("[1, 2, 3]") == 0.0

    def test_nan_is_zero(self) -> None:
        assert extract_score('{"score": NaN}') == 0.0

    def test_overflowing_integer_is_zero(self) -> None:
        assert extract_score('{"score": 1' + "0" * 400 + "}") == 0.0

    def test_infinity_is_zero(self) -> None:
        assert extract_score('{"score": Infinity}') == 0.0

    def test_none(self) -> None:
        assert extract_score(None) == 0.0


class TestRoundHalfUp:

    def test_half_goes_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4

    def test_below_half(self) -> None:
        assert round_half_up(2.49) == 2

    def test_non_finite(self) -> None:
        assert round_half_up(float("inf")) == 0
        assert round_half_up(float("nan")) == 0


class TestScoreRecord:

    def test_per_dimension_scores(self) -> None:
        scores = score_record('{"score": 65}', '{"score": 80}', "{broken")
        assert scores.resource == 65.0
        assert scores.technical == 80.0
        assert scores.business == 0.0
        assert scores.overall == 80


class TestDailyTrend:

    def test_zero_filled_window(self) -> None:
        today = date(2024, 3, 10)
        timestamps = [datetime(2024, 3, 9, 12, 0, tzinfo=timezone.utc)]
        trend = daily_trend(timestamps, days=3, today=today)
        assert [d.date for d in trend] == ["2024-03-08", "2024-03-09", "2024-03-10"]
        assert [d.count for d in trend] == [0, 1, 0]

    def test_length_matches_days(self) -> None:
        trend = daily_trend([], days=30, today=date(2024, 1, 31))
        assert len(trend) == 30
        assert trend[0].date == "2024-01-02"
        assert all(d.count == 0 for d in trend)

    def test_outside_window_ignored(self) -> None:
        today = date(2024, 3, 10)
        timestamps = [
            datetime(2024, 3, 1, tzinfo=timezone.utc),
            datetime(2024, 3, 11, tzinfo=timezone.utc),
        ]
        trend = daily_trend(timestamps, days=3, today=today)
        assert sum(d.count for d in trend) == 0

    def test_buckets_by_utc_date(self) -> None:
        today = date(2024, 3, 10)
        # 01:00 on the 10th at UTC+8 is still the 9th in UTC
        east = timezone(timedelta(hours=8))
        timestamps = [datetime(2024, 3, 10, 1, 0, tzinfo=east)]
        trend = daily_trend(timestamps, days=2, today=today)
        assert [d.count for d in trend] == [1, 0]

    def test_naive_timestamps_are_utc(self) -> None:
        trend = daily_trend([datetime(2024, 3, 10, 23, 59)], days=1, today=date(2024, 3, 10))
        assert trend[0].count == 1

    def test_window_start(self) -> None:
        start = trend_window_start(3, date(2024, 3, 10))
        assert start == datetime(2024, 3, 8, tzinfo=timezone.utc)


class TestTopK:

    def test_sorted_descending_and_truncated(self) -> None:
        rows = [("a", 1), ("b", 5), ("c", 3)]
        ranked = top_k(rows, k=2)
        assert [(c.value, c.count) for c in ranked] == [("b", 5), ("c", 3)]

    def test_ties_keep_input_order(self) -> None:
        rows = [("x", 2), ("y", 4), ("z", 2), ("w", 2)]
        ranked = top_k(rows, k=10)
        assert [c.value for c in ranked] == ["y", "x", "z", "w"]

    def test_fewer_rows_than_k(self) -> None:
        assert len(top_k([("only", 1)], k=10)) == 1
