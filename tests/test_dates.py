"""Tests for the DD/MM/YYYY or ISO date parsing used by request schemas."""

import unittest
from datetime import date

from pydantic import ValidationError

from fleetdesk.schemas.common import parse_flexible_date
from fleetdesk.schemas.financial import FinancialEntryCreate


class TestParseFlexibleDate(unittest.TestCase):
    def test_brazilian_format(self) -> None:
        self.assertEqual(parse_flexible_date("05/03/2025"), date(2025, 3, 5))

    def test_iso_date_and_datetime(self) -> None:
        self.assertEqual(parse_flexible_date("2025-03-05"), date(2025, 3, 5))
        self.assertEqual(parse_flexible_date("2025-03-05T14:30:00"), date(2025, 3, 5))

    def test_impossible_calendar_day(self) -> None:
        with self.assertRaises(ValueError):
            parse_flexible_date("31/02/2025")

    def test_garbage(self) -> None:
        for bad in ("", "05-03", "aa/bb/cccc", "05/03/1850"):
            with self.subTest(value=bad), self.assertRaises(ValueError):
                parse_flexible_date(bad)


class TestEntrySchemaDates(unittest.TestCase):
    def test_entry_accepts_both_formats(self) -> None:
        base = {"description": "Frete", "amount": 10, "category": "frete", "type": "entrada"}
        a = FinancialEntryCreate(**base, date="01/02/2025")
        b = FinancialEntryCreate(**base, date="2025-02-01")
        self.assertEqual(a.date, b.date)

    def test_entry_rejects_non_positive_amount(self) -> None:
        with self.assertRaises(ValidationError):
            FinancialEntryCreate(
                description="Frete", amount=0, category="frete", type="entrada", date="01/02/2025"
            )


if __name__ == "__main__":
    unittest.main()
