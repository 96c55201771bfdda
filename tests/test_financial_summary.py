"""Tests for the closing aggregation (summarize_entries) and entry counting."""

import unittest
from types import SimpleNamespace

from fleetdesk.services.financial import count_entries, month_name, summarize_entries


def _entry(entry_type: str, amount: float) -> SimpleNamespace:
    return SimpleNamespace(type=entry_type, amount=amount)


class TestSummarizeEntries(unittest.TestCase):
    def test_balance_and_margin(self) -> None:
        totals = summarize_entries(
            [_entry("entrada", 100), _entry("saida", 40), _entry("imposto", 10)]
        )
        self.assertEqual(totals.total_entries, 100)
        self.assertEqual(totals.total_expenses, 40)
        self.assertEqual(totals.total_taxes, 10)
        self.assertEqual(totals.balance, 50)
        self.assertEqual(totals.profit_margin, 50)

    def test_no_income_means_zero_margin(self) -> None:
        totals = summarize_entries([_entry("saida", 30)])
        self.assertEqual(totals.total_entries, 0)
        self.assertEqual(totals.balance, -30)
        self.assertEqual(totals.profit_margin, 0)

    def test_empty_input(self) -> None:
        totals = summarize_entries([])
        self.assertEqual(totals.model_dump(), {
            "total_entries": 0.0,
            "total_expenses": 0.0,
            "total_taxes": 0.0,
            "balance": 0.0,
            "profit_margin": 0.0,
        })

    def test_unknown_types_are_ignored(self) -> None:
        totals = summarize_entries([_entry("entrada", 80), _entry("transferencia", 1000)])
        self.assertEqual(totals.total_entries, 80)
        self.assertEqual(totals.balance, 80)
        self.assertEqual(totals.profit_margin, 100)

    def test_accepts_dicts_and_fractions(self) -> None:
        totals = summarize_entries(
            [{"type": "entrada", "amount": 200.5}, {"type": "saida", "amount": 50.25}]
        )
        self.assertAlmostEqual(totals.balance, 150.25)
        self.assertAlmostEqual(totals.profit_margin, 150.25 / 200.5 * 100)

    def test_is_idempotent(self) -> None:
        entries = [_entry("entrada", 10), _entry("imposto", 1)]
        self.assertEqual(summarize_entries(entries), summarize_entries(entries))


class TestCountEntries(unittest.TestCase):
    def test_counts_by_type(self) -> None:
        counts = count_entries(
            [_entry("entrada", 1), _entry("entrada", 2), _entry("saida", 3), _entry("other", 4)]
        )
        self.assertEqual((counts.entries, counts.expenses, counts.taxes, counts.total), (2, 1, 0, 4))


class TestMonthName(unittest.TestCase):
    def test_portuguese_names(self) -> None:
        self.assertEqual(month_name(3, 2025), "Março 2025")
        self.assertEqual(month_name(12, 2024), "Dezembro 2024")


if __name__ == "__main__":
    unittest.main()
