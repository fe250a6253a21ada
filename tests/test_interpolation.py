import unittest
from datetime import date, timedelta

from net_liquidity_monitor.indicators.interpolation import DailyIndex, interpolate_daily
from net_liquidity_monitor.models import ObservationPoint


def pts(*pairs):
    return [ObservationPoint(date=date.fromisoformat(d), value=v) for d, v in pairs]


class TestInterpolateDaily(unittest.TestCase):
    def test_exact_at_observation_and_bounded_between(self):
        gdp = pts(("2024-01-01", 28000.0), ("2024-04-01", 28600.0), ("2024-07-01", 28400.0))
        daily = interpolate_daily(gdp)

        self.assertEqual(daily["2024-01-01"], 28000.0)
        self.assertEqual(daily["2024-04-01"], 28600.0)

        day = date(2024, 1, 2)
        while day < date(2024, 4, 1):
            self.assertGreaterEqual(daily.on(day), 28000.0)
            self.assertLessEqual(daily.on(day), 28600.0)
            day += timedelta(days=1)

        day = date(2024, 4, 2)
        while day < date(2024, 7, 1):
            self.assertGreaterEqual(daily.on(day), 28400.0)
            self.assertLessEqual(daily.on(day), 28600.0)
            day += timedelta(days=1)

    def test_linear_midpoint(self):
        daily = interpolate_daily(pts(("2024-01-01", 100.0), ("2024-01-11", 200.0)))
        self.assertAlmostEqual(daily["2024-01-06"], 150.0)

    def test_last_value_held_for_horizon(self):
        daily = interpolate_daily(pts(("2024-01-01", 100.0), ("2024-04-01", 130.0)))
        end = date(2024, 4, 1) + timedelta(days=400)
        self.assertEqual(daily.on(end), 130.0)
        self.assertIsNone(daily.on(end + timedelta(days=1)))

    def test_single_point_is_extended(self):
        daily = interpolate_daily(pts(("2025-07-01", 30300.0)), hold_days=400)
        self.assertEqual(len(daily), 401)
        self.assertEqual(daily["2026-01-01"], 30300.0)

    def test_duplicate_dates_do_not_divide_by_zero(self):
        daily = interpolate_daily(
            pts(("2024-01-01", 1.0), ("2024-01-01", 2.0), ("2024-01-11", 3.0)), hold_days=0
        )
        self.assertEqual(daily["2024-01-01"], 2.0)
        self.assertAlmostEqual(daily["2024-01-06"], 2.5)
        self.assertEqual(daily["2024-01-11"], 3.0)

    def test_empty_series(self):
        self.assertEqual(len(interpolate_daily([])), 0)


class TestDailyIndex(unittest.TestCase):
    def test_read_only(self):
        index = DailyIndex.from_points(pts(("2025-01-01", 5.0)))
        with self.assertRaises(TypeError):
            index["2025-01-02"] = 6.0
        self.assertEqual(dict(index), {"2025-01-01": 5.0})

    def test_exact_lookup(self):
        index = DailyIndex.from_points(pts(("2025-01-01", 5.0), ("2025-01-08", 6.0)))
        self.assertEqual(index.on(date(2025, 1, 8)), 6.0)
        self.assertIsNone(index.on(date(2025, 1, 5)))


if __name__ == "__main__":
    unittest.main()
