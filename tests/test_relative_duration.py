"""Tests for RelativeDuration construction, algebra and application to dates."""

import copy
import pickle
from datetime import date, datetime, timedelta

import numpy as np
import pandas as pd
import pytest
from dateutil.relativedelta import relativedelta

from calshift.duration import RelativeDuration
from calshift.errors import OutOfRangeError


class TestConstruction:
    def test_defaults_to_zero(self) -> None:
        zero = RelativeDuration()
        assert zero.months == 0
        assert zero.duration == timedelta(0)
        assert zero == RelativeDuration.zero()
        assert not zero

    def test_years_are_twelve_months(self) -> None:
        assert RelativeDuration(years=2) == RelativeDuration(months=24)
        assert RelativeDuration(years=1, months=-1) == RelativeDuration(months=11)

    def test_absolute_parts_fold_into_duration(self) -> None:
        delta = RelativeDuration(weeks=1, days=1, hours=2, minutes=3, seconds=4)
        assert delta.months == 0
        assert delta.duration == timedelta(days=8, hours=2, minutes=3, seconds=4)

    def test_duration_never_becomes_months(self) -> None:
        delta = RelativeDuration(days=400)
        assert delta.months == 0
        assert delta.duration == timedelta(days=400)

    def test_months_must_be_integer(self) -> None:
        with pytest.raises(TypeError, match="months must be an integer"):
            RelativeDuration(months=1.5)
        with pytest.raises(TypeError, match="years must be an integer"):
            RelativeDuration(years="1")

    def test_from_duration(self) -> None:
        delta = RelativeDuration.from_duration(timedelta(days=3))
        assert delta == RelativeDuration(days=3)

    def test_from_pandas_timedelta(self) -> None:
        assert RelativeDuration.from_duration(pd.Timedelta(days=1)) == RelativeDuration(days=1)

    def test_from_numpy_timedelta(self) -> None:
        assert RelativeDuration.from_duration(np.timedelta64(36, "h")) == RelativeDuration(hours=36)

    def test_from_duration_rejects_nat(self) -> None:
        with pytest.raises(ValueError):
            RelativeDuration.from_duration(np.timedelta64("NaT"))

    def test_from_duration_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            RelativeDuration.from_duration(3)

    def test_with_duration_keeps_months(self) -> None:
        delta = RelativeDuration(months=2, days=1).with_duration(timedelta(hours=5))
        assert delta == RelativeDuration(months=2, hours=5)

    def test_is_immutable(self) -> None:
        delta = RelativeDuration(months=1)
        with pytest.raises(AttributeError):
            delta.months = 2
        with pytest.raises(AttributeError):
            delta._months = 2

    def test_repr(self) -> None:
        assert repr(RelativeDuration(months=1)) == (
            "RelativeDuration(months=1, duration=datetime.timedelta(0))"
        )

    def test_copy_and_pickle(self) -> None:
        delta = RelativeDuration(months=5, hours=3)
        assert copy.copy(delta) == delta
        assert pickle.loads(pickle.dumps(delta)) == delta


class TestRelativedeltaInterop:
    def test_from_relativedelta(self) -> None:
        delta = RelativeDuration.from_relativedelta(relativedelta(years=1, months=2, days=3, hours=4))
        assert delta == RelativeDuration(months=14, days=3, hours=4)

    def test_rejects_absolute_fields(self) -> None:
        with pytest.raises(ValueError):
            RelativeDuration.from_relativedelta(relativedelta(day=31))

    @pytest.mark.parametrize(
        "delta",
        [
            RelativeDuration(months=1),
            RelativeDuration(months=13, days=2),
            RelativeDuration(months=-3, hours=-5),
        ],
    )
    def test_to_relativedelta_agrees(self, delta: RelativeDuration) -> None:
        start = datetime(2020, 1, 31, 12, 0)
        assert start + delta.to_relativedelta() == start + delta


class TestAlgebra:
    def test_addition_is_componentwise(self) -> None:
        total = RelativeDuration(months=1, days=2) + RelativeDuration(months=3, hours=4)
        assert total == RelativeDuration(months=4, days=2, hours=4)

    def test_addition_commutes(self) -> None:
        a = RelativeDuration(months=1, days=-5)
        b = RelativeDuration(months=-7, hours=30)
        assert a + b == b + a

    def test_addition_associates(self) -> None:
        a = RelativeDuration(months=1)
        b = RelativeDuration(days=10)
        c = RelativeDuration(months=-2, seconds=1)
        assert (a + b) + c == a + (b + c)

    def test_subtraction(self) -> None:
        diff = RelativeDuration(months=1) - RelativeDuration(days=1)
        assert diff == RelativeDuration(months=1, days=-1)

    def test_negation(self) -> None:
        assert -RelativeDuration(months=2, days=3) == RelativeDuration(months=-2, days=-3)
        assert +RelativeDuration(months=2) == RelativeDuration(months=2)

    def test_mixing_with_timedelta(self) -> None:
        one_month = RelativeDuration(months=1)
        assert one_month + timedelta(days=1) == RelativeDuration(months=1, days=1)
        assert timedelta(days=1) + one_month == RelativeDuration(months=1, days=1)
        assert one_month - timedelta(days=1) == RelativeDuration(months=1, days=-1)
        assert timedelta(days=1) - one_month == RelativeDuration(months=-1, days=1)

    def test_scalar_multiplication(self) -> None:
        delta = RelativeDuration(months=1, days=2)
        assert delta * 3 == RelativeDuration(months=3, days=6)
        assert 3 * delta == RelativeDuration(months=3, days=6)
        assert delta * -1 == -delta
        assert delta * 0 == RelativeDuration.zero()
        assert delta * np.int64(2) == RelativeDuration(months=2, days=4)

    def test_multiplication_rejects_floats(self) -> None:
        with pytest.raises(TypeError):
            RelativeDuration(months=1) * 1.5

    def test_floor_division(self) -> None:
        assert RelativeDuration(months=7, days=3) // 2 == RelativeDuration(months=3, hours=36)
        assert RelativeDuration(months=-1) // 2 == RelativeDuration(months=-1)

    def test_ordering_is_months_first(self) -> None:
        assert RelativeDuration(months=1) < RelativeDuration(months=2)
        assert RelativeDuration(months=1) > RelativeDuration(days=40)
        assert RelativeDuration(months=1, days=1) >= RelativeDuration(months=1)

    def test_hashable(self) -> None:
        assert len({RelativeDuration(months=12), RelativeDuration(years=1)}) == 1

    def test_not_equal_to_timedelta(self) -> None:
        assert RelativeDuration(days=1) != timedelta(days=1)


class TestApplication:
    def test_month_then_day(self) -> None:
        delta = RelativeDuration(months=1) + RelativeDuration(days=1)
        assert date(2020, 1, 1) + delta == date(2020, 2, 2)

    def test_clamps_before_adding_duration(self) -> None:
        delta = RelativeDuration(months=1, days=1)
        assert date(2020, 1, 30) + delta == date(2020, 3, 1)
        assert date(2020, 1, 31) + delta == date(2020, 3, 1)

    def test_is_not_associative_over_dates(self) -> None:
        start = date(2020, 1, 31)
        delta = RelativeDuration(months=1)
        assert (start + delta) + delta == date(2020, 3, 29)
        assert start + (delta + delta) == date(2020, 3, 31)

    def test_scaled_step_clamps_once(self) -> None:
        assert date(2020, 1, 31) + RelativeDuration(months=1) * 2 == date(2020, 3, 31)

    def test_duration_on_the_left(self) -> None:
        assert RelativeDuration(months=1) + date(2021, 1, 31) == date(2021, 2, 28)

    def test_subtraction_from_date(self) -> None:
        assert date(2020, 3, 31) - RelativeDuration(months=1) == date(2020, 2, 29)
        assert date(2020, 3, 1) - RelativeDuration(months=1, days=1) == date(2020, 1, 31)

    def test_datetime_rolls_over(self) -> None:
        start = datetime(2020, 1, 31, 23, 0)
        assert start + RelativeDuration(months=1, hours=2) == datetime(2020, 3, 1, 1, 0)

    def test_pandas_timestamp(self) -> None:
        result = pd.Timestamp("2020-01-31 08:00") + RelativeDuration(months=1, minutes=30)
        assert result == pd.Timestamp("2020-02-29 08:30")

    def test_apply_matches_operator(self) -> None:
        delta = RelativeDuration(months=-13, days=3)
        assert delta.apply(date(2021, 3, 31)) == date(2021, 3, 31) + delta

    def test_duration_overflow(self) -> None:
        with pytest.raises(OutOfRangeError):
            date(9999, 12, 31) + RelativeDuration(days=1)

    def test_month_overflow(self) -> None:
        with pytest.raises(OutOfRangeError):
            date(9999, 12, 1) + RelativeDuration(months=1)

    def test_unsupported_operand(self) -> None:
        with pytest.raises(TypeError):
            RelativeDuration(months=1) + "2020-01-01"
