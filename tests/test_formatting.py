import unittest

from display_stocks.services.formatting import (
    currency_from_culture,
    format_change,
    format_currency,
    format_number,
)


class FormattingTest(unittest.TestCase):
    def test_us_culture_resolves_usd(self):
        self.assertEqual(currency_from_culture("en-US"), "USD")

    def test_other_cultures_fall_back_to_usd(self):
        self.assertEqual(currency_from_culture("de-DE"), "USD")
        self.assertEqual(currency_from_culture("en-GB"), "USD")
        self.assertEqual(currency_from_culture("garbage"), "USD")
        self.assertEqual(currency_from_culture(""), "USD")

    def test_english_currency_format(self):
        self.assertEqual(format_currency(1234.567, "en-US"), "$1,234.57")
        self.assertEqual(format_currency(0.5, "en-US"), "$0.50")
        self.assertEqual(format_currency(-12.3, "en-US"), "-$12.30")

    def test_german_separators_and_suffix_symbol(self):
        self.assertEqual(format_currency(1234.5, "de-DE", "USD"), "1.234,50 $")

    def test_unknown_language_uses_english_conventions(self):
        self.assertEqual(format_currency(9.99, "xx-YY"), "$9.99")

    def test_unknown_currency_code_is_printed_as_code(self):
        self.assertEqual(format_currency(5, "en-US", "CHF"), "CHF 5.00")

    def test_change_arrow_follows_sign(self):
        self.assertEqual(format_change(1.25), "⭡(1.25)")
        self.assertEqual(format_change(0), "⭡(0)")
        self.assertEqual(format_change(-0.5), "⭣(-0.5)")

    def test_format_number_drops_trailing_zero(self):
        self.assertEqual(format_number(2.0), "2")
        self.assertEqual(format_number(-0.0), "0")
        self.assertEqual(format_number(0.1), "0.1")


if __name__ == "__main__":
    unittest.main()
