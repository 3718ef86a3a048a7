import unittest

from display_stocks.schemas.pagination import PaginationState
from display_stocks.schemas.quote import Quote, QuoteSnapshot
from display_stocks.services.renderer import MISSING_KEY_MESSAGE, DisplayRenderer


def snapshot_of(*quotes: Quote) -> QuoteSnapshot:
    return QuoteSnapshot(quotes={q.symbol: q for q in quotes}, raw={}, fetched_at=0)


class DisplayRendererTest(unittest.TestCase):
    def setUp(self):
        self.renderer = DisplayRenderer(container_class="small", animation_speed_ms=250)

    def test_rows_show_price_and_change(self):
        snapshot = snapshot_of(
            Quote(symbol="AAPL", latest_price=190.456, change=1.5),
            Quote(symbol="MSFT", latest_price=410.0, change=-2.25),
        )
        pagination = PaginationState(pages=[["AAPL", "MSFT"]])

        view = self.renderer.render(snapshot, pagination)

        self.assertIsNone(view.message)
        self.assertEqual(view.container_class, "small")
        self.assertEqual(view.animation_speed_ms, 250)
        self.assertEqual(
            [(r.price_text, r.change_text) for r in view.rows],
            [("AAPL: $190.46", "⭡(1.5)"), ("MSFT: $410.00", "⭣(-2.25)")],
        )

    def test_absent_symbol_renders_unknown_without_change(self):
        snapshot = snapshot_of(Quote(symbol="AAPL", latest_price=1.0, change=0.0))
        pagination = PaginationState(pages=[["AAPL", "ZZZZ"]])

        view = self.renderer.render(snapshot, pagination)

        self.assertEqual(view.rows[1].symbol, "ZZZZ")
        self.assertEqual(view.rows[1].price_text, "ZZZZ: Unknown")
        self.assertEqual(view.rows[1].change_text, "")

    def test_empty_snapshot_renders_every_symbol_unknown(self):
        pagination = PaginationState(pages=[["AAPL", "MSFT"]])

        view = self.renderer.render(QuoteSnapshot.empty(), pagination)

        self.assertEqual([r.price_text for r in view.rows], ["AAPL: Unknown", "MSFT: Unknown"])

    def test_only_the_current_page_is_rendered_while_rotating(self):
        pagination = PaginationState(
            current_page=2,
            page_count=2,
            pagination_active=True,
            rotation_started=True,
            pages=[["A", "B", "C", "D", "E"], ["F"]],
        )

        view = self.renderer.render(QuoteSnapshot.empty(), pagination)

        self.assertEqual([r.symbol for r in view.rows], ["F"])
        self.assertEqual(view.current_page, 2)
        self.assertEqual(view.page_count, 2)
        self.assertTrue(view.pagination_active)

    def test_missing_key_view(self):
        view = self.renderer.render_missing_key()

        self.assertEqual(view.message, MISSING_KEY_MESSAGE)
        self.assertEqual(view.rows, [])

    def test_blank_container_class_defaults_to_medium(self):
        renderer = DisplayRenderer(container_class="")

        self.assertEqual(renderer.render_missing_key().container_class, "medium")


if __name__ == "__main__":
    unittest.main()
