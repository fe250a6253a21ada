import unittest
from datetime import date

from net_liquidity_monitor.errors import DegenerateHistoryError, IncompleteDataError
from net_liquidity_monitor.indicators.calculator import (
    LiquidityCalculator,
    find_year_anchor,
    pct_of_gdp,
)
from net_liquidity_monitor.models import ObservationPoint, SeriesError

from tests.helpers import history_data, pts, snapshot_data, weekly


class TestSnapshot(unittest.TestCase):
    def setUp(self):
        self.calc = LiquidityCalculator()

    def test_net_liquidity_and_pct_gdp(self):
        snap = self.calc.snapshot(snapshot_data())
        self.assertEqual(snap.date, date(2026, 1, 14))
        self.assertEqual(snap.on_rrp, 200_000.0)
        self.assertEqual(snap.net_liquidity, 5_600_000.0)
        self.assertAlmostEqual(snap.pct_gdp, 18.48, places=2)

    def test_fallbacks_for_agency_debt_and_gdp(self):
        data = snapshot_data()
        data["FEDDT"] = SeriesError("FEDDT", 500)
        del data["GDP"]
        snap = self.calc.snapshot(data)
        self.assertEqual(snap.agency_debt, 2347.0)
        self.assertEqual(snap.gdp, 30300.0)

    def test_missing_required_series(self):
        data = snapshot_data()
        data["WTREGEN"] = SeriesError("WTREGEN", 503)
        data["WALCL"] = []
        with self.assertRaises(IncompleteDataError) as ctx:
            self.calc.snapshot(data)
        self.assertEqual(ctx.exception.missing, ["WALCL", "WTREGEN"])

    def test_non_positive_gdp_gives_zero_pct(self):
        self.assertEqual(pct_of_gdp(5_600_000.0, 0.0), 0.0)
        self.assertEqual(pct_of_gdp(5_600_000.0, -1.0), 0.0)


class TestYearAnchor(unittest.TestCase):
    def test_exact_year_end_wins(self):
        points = pts(("2025-12-24", 1.0), ("2025-12-30", 2.0), ("2025-12-31", 3.0), ("2026-01-02", 4.0))
        self.assertEqual(find_year_anchor(points, 2025).date, date(2025, 12, 31))

    def test_nearest_in_year_end_window(self):
        points = pts(("2025-12-17", 1.0), ("2025-12-30", 2.0), ("2026-01-02", 3.0))
        self.assertEqual(find_year_anchor(points, 2025).date, date(2025, 12, 30))

    def test_first_after_late_december_cutoff(self):
        points = pts(("2025-12-10", 1.0), ("2025-12-26", 2.0), ("2026-01-15", 3.0))
        self.assertEqual(find_year_anchor(points, 2025).date, date(2025, 12, 26))

    def test_earliest_as_last_resort(self):
        points = pts(("2025-06-01", 1.0), ("2025-09-01", 2.0))
        self.assertEqual(find_year_anchor(points, 2025).date, date(2025, 6, 1))

    def test_empty(self):
        self.assertIsNone(find_year_anchor([], 2025))


class TestYtdDeltas(unittest.TestCase):
    def setUp(self):
        self.calc = LiquidityCalculator()

    def test_component_and_net_deltas(self):
        deltas = self.calc.ytd_deltas(snapshot_data())
        values = {d.name: d.value for d in deltas}
        self.assertEqual(
            [d.name for d in deltas],
            ["Treasuries", "Agency Debt", "MBS", "TGA", "ON RRP", "NET LIQ Δ"],
        )
        self.assertEqual(values["Treasuries"], 100.0)
        self.assertEqual(values["Agency Debt"], 0.0)
        self.assertEqual(values["MBS"], -20.0)
        self.assertEqual(values["TGA"], -100.0)
        self.assertEqual(values["ON RRP"], 190.0)
        # (100 + 0 - 20) - (-100) - 190
        self.assertEqual(values["NET LIQ Δ"], -10.0)

    def test_missing_agency_debt_counts_as_zero(self):
        data = snapshot_data()
        del data["FEDDT"]
        values = {d.name: d.value for d in self.calc.ytd_deltas(data)}
        self.assertEqual(values["Agency Debt"], 0.0)

    def test_explicit_anchor_year(self):
        data = snapshot_data()
        data["TREAST"] = pts(("2024-12-31", 4_000_000.0), ("2025-12-31", 4_100_000.0), ("2026-01-14", 4_200_000.0))
        values = {d.name: d.value for d in self.calc.ytd_deltas(data, anchor_year=2024)}
        self.assertEqual(values["Treasuries"], 200.0)

    def test_missing_required_series(self):
        data = snapshot_data()
        data["WSHOMCB"] = SeriesError("WSHOMCB", 404)
        with self.assertRaises(IncompleteDataError):
            self.calc.ytd_deltas(data)


class TestHistory(unittest.TestCase):
    def setUp(self):
        self.calc = LiquidityCalculator()

    def test_pct_of_gdp_per_week(self):
        history = self.calc.history(history_data(60))
        self.assertEqual(len(history), 60)
        # (7,000,000 - 700,000 - 500,000) / 1000 / 28000 on the first week
        self.assertAlmostEqual(history[0].pct, 20.71, places=2)
        self.assertTrue(all(0 < p.pct < 50 for p in history))

    def test_out_of_range_points_dropped(self):
        data = history_data(60)
        walcl = list(data["WALCL"])
        walcl[10] = ObservationPoint(walcl[10].date, 20_000_000.0)  # ~69% of GDP
        walcl[20] = ObservationPoint(walcl[20].date, 500_000.0)  # negative net liquidity
        data["WALCL"] = walcl
        history = self.calc.history(data)
        self.assertEqual(len(history), 58)
        self.assertNotIn(walcl[10].date, [p.date for p in history])
        self.assertTrue(all(0 < p.pct < 50 for p in history))

    def test_rrp_optional(self):
        data = history_data(60)
        data["RRPONTSYD"] = SeriesError("RRPONTSYD", 500)
        history = self.calc.history(data)
        # (7,000,000 - 700,000) / 1000 / 28000
        self.assertAlmostEqual(history[0].pct, 22.49, places=2)

    def test_dates_before_gdp_are_skipped(self):
        data = history_data(60)
        data["WALCL"] = weekly(date(2023, 11, 1), 5, 7_000_000.0) + data["WALCL"]
        self.assertEqual(len(self.calc.history(data)), 60)

    def test_degenerate_history_rejected(self):
        with self.assertRaises(DegenerateHistoryError) as ctx:
            self.calc.history(history_data(30))
        self.assertEqual(ctx.exception.points, 30)

    def test_exactly_minimum_is_rejected(self):
        with self.assertRaises(DegenerateHistoryError):
            self.calc.history(history_data(50))
        self.assertEqual(len(self.calc.history(history_data(51))), 51)

    def test_missing_gdp(self):
        data = history_data(60)
        del data["GDP"]
        with self.assertRaises(IncompleteDataError) as ctx:
            self.calc.history(data)
        self.assertEqual(ctx.exception.missing, ["GDP"])


if __name__ == "__main__":
    unittest.main()
