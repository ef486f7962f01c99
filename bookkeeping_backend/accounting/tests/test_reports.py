# accounting/tests/test_reports.py

from __future__ import annotations

from django.test import SimpleTestCase

from accounting.services.balance_sheet_service import build_balance_sheet
from accounting.services.overview_service import build_overview
from accounting.services.profit_and_loss_service import build_profit_and_loss
from accounting.services.trial_balance_service import (
    build_net_trial_balance,
    build_trial_balance,
)
from accounting.tests.builders import account, capital_entry, demo_chart, entry, supplies_entry


class TrialBalanceTests(SimpleTestCase):
    def test_capital_injection_gross_rows(self):
        report = build_trial_balance([capital_entry()])

        self.assertEqual(
            report["accounts"],
            [
                {"account": "Cash", "debit": 50000.0, "credit": 0.0, "debit_minor": 5_000_000, "credit_minor": 0},
                {"account": "Owner's Equity", "debit": 0.0, "credit": 50000.0, "debit_minor": 0, "credit_minor": 5_000_000},
            ],
        )
        self.assertTrue(report["totals"]["balanced"])
        self.assertEqual(report["totals"]["debit_minor"], report["totals"]["credit_minor"])

    def test_gross_mode_keeps_both_sides(self):
        report = build_trial_balance([capital_entry(), supplies_entry()])
        cash = next(row for row in report["accounts"] if row["account"] == "Cash")

        self.assertEqual(cash["debit"], 50000.0)
        self.assertEqual(cash["credit"], 250.0)
        self.assertEqual(report["totals"]["debit"], 50250.0)
        self.assertEqual(report["totals"]["credit"], 50250.0)

    def test_unbalanced_journal_is_reported(self):
        broken = entry("B1", "2024-03-01", "Half posted", ("Cash", "100", "0"))
        report = build_trial_balance([capital_entry(), broken])

        self.assertFalse(report["totals"]["balanced"])
        self.assertEqual(report["totals"]["difference"], 100.0)

    def test_net_mode_places_balances_on_their_natural_side(self):
        depreciation = entry(
            "JE003",
            "2024-01-31",
            "Monthly depreciation",
            ("Depreciation Expense", "100", "0"),
            ("Accumulated Depreciation - Equipment", "0", "100"),
        )
        report = build_net_trial_balance(
            demo_chart(), [capital_entry(), supplies_entry(), depreciation]
        )
        rows = {row["account"]: row for row in report["accounts"]}

        self.assertEqual(rows["Cash"]["debit"], 49750.0)
        self.assertEqual(rows["Owner's Equity"]["credit"], 50000.0)
        self.assertEqual(rows["Office Supplies Expense"]["debit"], 250.0)
        # contra asset with a negative balance lands on the credit side
        self.assertEqual(rows["Accumulated Depreciation - Equipment"]["credit"], 100.0)
        self.assertEqual(rows["Accumulated Depreciation - Equipment"]["debit"], 0.0)
        self.assertTrue(report["totals"]["balanced"])
        self.assertEqual(report["totals"]["debit_minor"], 5_010_000)


class ProfitAndLossTests(SimpleTestCase):
    def test_office_supplies_expense(self):
        report = build_profit_and_loss(demo_chart(), [capital_entry(), supplies_entry()])

        self.assertEqual(report["revenue"], [])
        self.assertEqual(
            report["expenses"],
            [{"name": "Office Supplies Expense", "code": "6300", "amount": 250.0, "amount_minor": 25_000}],
        )
        self.assertEqual(report["total_expenses"], 250.0)
        self.assertEqual(report["net_income"], -250.0)
        self.assertEqual(report["net_income_minor"], -25_000)

    def test_revenue_and_net_income(self):
        sale = entry("S1", "2024-02-01", "Cash sale", ("Cash", "1200", "0"), ("Sales Revenue", "0", "1200"))
        report = build_profit_and_loss(demo_chart(), [supplies_entry(), sale])

        self.assertEqual(report["revenue"][0]["name"], "Sales Revenue")
        self.assertEqual(report["total_revenue"], 1200.0)
        self.assertEqual(report["net_income"], 950.0)

    def test_fully_reversed_accounts_are_hidden(self):
        sale = entry("S1", "2024-02-01", "Sale", ("Cash", "80", "0"), ("Sales Revenue", "0", "80"))
        reversal = entry("S1-R", "2024-02-02", "Reversal", ("Sales Revenue", "80", "0"), ("Cash", "0", "80"))

        report = build_profit_and_loss(demo_chart(), [sale, reversal])

        self.assertEqual(report["revenue"], [])
        self.assertEqual(report["net_income_minor"], 0)


class BalanceSheetTests(SimpleTestCase):
    def test_capital_injection_balances(self):
        report = build_balance_sheet(demo_chart(), [capital_entry()])

        self.assertEqual(report["total_assets"], 50000.0)
        self.assertEqual(report["total_equity"], 50000.0)
        self.assertEqual(report["total_liabilities"], 0.0)
        self.assertTrue(report["is_balanced"])
        self.assertEqual(report["warnings"], [])
        self.assertEqual([row["name"] for row in report["assets"]["current"]], ["Cash"])
        self.assertEqual([row["name"] for row in report["equity"]], ["Owner's Equity"])

    def test_current_period_earnings_keep_equation(self):
        report = build_balance_sheet(demo_chart(), [capital_entry(), supplies_entry()])

        earnings = report["equity"][-1]
        self.assertEqual(earnings["name"], "Current Period Earnings")
        self.assertEqual(earnings["amount"], -250.0)
        self.assertEqual(report["total_assets"], 49750.0)
        self.assertEqual(report["total_equity"], 49750.0)
        self.assertTrue(report["is_balanced"])

    def test_assets_and_liabilities_are_classified(self):
        purchase = entry(
            "P1",
            "2024-02-10",
            "Equipment on loan",
            ("Equipment", "8000", "0"),
            ("Long-term Debt", "0", "6000"),
            ("Accounts Payable", "0", "2000"),
        )
        report = build_balance_sheet(demo_chart(), [capital_entry(), purchase])

        self.assertEqual([r["name"] for r in report["assets"]["non_current"]], ["Equipment"])
        self.assertEqual([r["name"] for r in report["liabilities"]["current"]], ["Accounts Payable"])
        self.assertEqual([r["name"] for r in report["liabilities"]["long_term"]], ["Long-term Debt"])
        self.assertEqual(report["total_liabilities"], 8000.0)
        self.assertEqual(report["total_liabilities_and_equity"], 58000.0)
        self.assertTrue(report["is_balanced"])

    def test_subcategory_routes_asset(self):
        chart = [
            account("1000", "Cash", "ASSET"),
            account("1300", "Prepaid Rent", "ASSET", subcategory="CURRENT_ASSETS"),
            account("3000", "Owner's Equity", "EQUITY"),
        ]
        prepaid = entry("P2", "2024-02-01", "Prepay rent", ("Prepaid Rent", "600", "0"), ("Owner's Equity", "0", "600"))

        report = build_balance_sheet(chart, [prepaid])

        self.assertEqual([r["name"] for r in report["assets"]["current"]], ["Prepaid Rent"])
        self.assertEqual(report["assets"]["non_current"], [])

    def test_imbalance_is_surfaced_not_corrected(self):
        broken = entry("B1", "2024-03-01", "Half posted", ("Cash", "100", "0"))

        with self.assertLogs("accounting.services.balance_sheet_service", level="WARNING"):
            report = build_balance_sheet(demo_chart(), [capital_entry(), broken])

        self.assertFalse(report["is_balanced"])
        self.assertEqual(report["total_assets"], 50100.0)
        self.assertEqual(report["difference_minor"], 10_000)
        self.assertEqual(report["warnings"][0]["code"], "balance_sheet_unbalanced")
        self.assertEqual(report["warnings"][0]["difference_minor"], 10_000)


class OverviewTests(SimpleTestCase):
    def test_headline_figures(self):
        chart = demo_chart() + [account("9000", "Suspense", "ASSET", is_active=False)]
        entries = [
            capital_entry(),
            supplies_entry(),
            entry("JE003", "2024-01-20", "Cash sale", ("Cash", "500", "0"), ("Sales Revenue", "0", "500")),
            entry("JE004", "2024-01-21", "Cash sale", ("Cash", "300", "0"), ("Sales Revenue", "0", "300")),
        ]

        overview = build_overview(chart, entries)

        self.assertEqual(overview["total_assets"], 50550.0)
        self.assertEqual(overview["net_income"], 550.0)
        self.assertEqual(overview["journal_entry_count"], 4)
        self.assertEqual(overview["active_account_count"], len(demo_chart()))
        self.assertTrue(overview["is_balanced"])
        self.assertEqual(
            [item["reference"] for item in overview["recent_activity"]],
            ["JE004", "JE003", "JE002"],
        )


class IdempotenceTests(SimpleTestCase):
    def test_reports_are_identical_on_rerun(self):
        chart = demo_chart()
        entries = [capital_entry(), supplies_entry()]

        for builder in (build_net_trial_balance, build_profit_and_loss, build_balance_sheet, build_overview):
            with self.subTest(builder=builder.__name__):
                self.assertEqual(builder(chart, entries), builder(chart, entries))

        self.assertEqual(build_trial_balance(entries), build_trial_balance(entries))
