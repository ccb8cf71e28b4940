from __future__ import annotations

import math
import unittest

from contracts.layout import Fragment, Page, Size
from layout.errors import MalformedFragmentError
from layout.row_grouping import GroupingState, group_rows, row_key
from layout.strategy import FractionalEpsilon, GapThreshold, strategy_from_dict


def _frag(text: str, x: float, y: float, page: int = 1) -> Fragment:
    return Fragment(text=text, x=x, y=y, width=5.0, height=1.0, page=page)


def _page(fragments: list[Fragment], page_number: int = 1, height: float = 100.0) -> Page:
    return Page(page_number=page_number, size=Size(width=80.0, height=height), fragments=fragments)


class TestFractionalEpsilon(unittest.TestCase):
    def test_simple_table(self) -> None:
        # deliberately shuffled
        page = _page(
            [
                _frag("B3", 20, 5),
                _frag("A2", 10, 0),
                _frag("B1", 0, 5),
                _frag("A1", 0, 0),
                _frag("A3", 20, 0),
                _frag("B2", 10, 5),
            ]
        )
        rows = group_rows([page], FractionalEpsilon(1))

        self.assertEqual(len(rows), 2)
        self.assertAlmostEqual(rows[0].y, 0.0)
        self.assertAlmostEqual(rows[1].y, 5.0)
        self.assertEqual(rows[0].texts(), ["A1", "A2", "A3"])
        self.assertEqual(rows[1].texts(), ["B1", "B2", "B3"])

    def test_close_values_share_a_row(self) -> None:
        page = _page([_frag("a", 0, 10.01), _frag("b", 5, 10.04), _frag("c", 10, 10.3)])
        rows = group_rows([page], FractionalEpsilon(1))
        self.assertEqual([r.texts() for r in rows], [["a", "b"], ["c"]])
        self.assertAlmostEqual(rows[0].y, 10.0)

    def test_precision_controls_row_width(self) -> None:
        page = _page([_frag("a", 0, 10.01), _frag("b", 5, 10.04)])
        self.assertEqual(len(group_rows([page], FractionalEpsilon(2))), 2)
        self.assertEqual(len(group_rows([page], FractionalEpsilon(0))), 1)

    def test_rounding_is_ties_to_even(self) -> None:
        # 0.25 and 0.75 are exact binary ties
        page = _page([_frag("a", 0, 0.25), _frag("b", 5, 0.2), _frag("c", 0, 0.75), _frag("d", 5, 0.8)])
        rows = group_rows([page], FractionalEpsilon(1))
        self.assertEqual([r.texts() for r in rows], [["a", "b"], ["c", "d"]])
        self.assertAlmostEqual(rows[0].y, 0.2)
        self.assertAlmostEqual(rows[1].y, 0.8)


class TestGapThreshold(unittest.TestCase):
    def test_small_steps_form_one_row(self) -> None:
        page = _page([_frag("a", 30, 10.0), _frag("b", 0, 10.1), _frag("c", 10, 10.15), _frag("d", 20, 10.2)])
        rows = group_rows([page], GapThreshold(minimum_gap=0.2, maximum_break_threshold=0.5))
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].texts(), ["b", "c", "d", "a"])
        self.assertAlmostEqual(rows[0].y, 10.0)

    def test_single_large_gap_starts_new_row(self) -> None:
        page = _page([_frag("a", 0, 10.0), _frag("b", 5, 10.1), _frag("c", 0, 11.0), _frag("d", 5, 11.1)])
        rows = group_rows([page], GapThreshold(minimum_gap=0.2, maximum_break_threshold=0.5))
        self.assertEqual([r.texts() for r in rows], [["a", "b"], ["c", "d"]])
        self.assertAlmostEqual(rows[1].y, 11.0)

    def test_cumulative_drift_starts_new_row(self) -> None:
        page = _page([_frag(str(i), i, i * 0.1) for i in range(5)])
        rows = group_rows([page], GapThreshold(minimum_gap=0.2, maximum_break_threshold=0.35))
        self.assertEqual([r.texts() for r in rows], [["0", "1", "2", "3"], ["4"]])
        self.assertAlmostEqual(rows[1].y, 0.4)

    def test_row_key_step(self) -> None:
        strategy = GapThreshold(minimum_gap=1.0, maximum_break_threshold=2.0)
        state = GroupingState()
        state, k1 = row_key(state, 5.0, strategy)
        state, k2 = row_key(state, 5.5, strategy)
        state, k3 = row_key(state, 7.0, strategy)
        self.assertEqual((k1, k2, k3), (5.0, 5.0, 7.0))
        self.assertEqual(state.grouping_start_y, 7.0)
        self.assertEqual(state.last_y, 7.0)


class TestCrossPage(unittest.TestCase):
    def test_absolute_y_accumulates_page_heights(self) -> None:
        pages = [
            _page([_frag("p3", 0, 4.0, page=3)], page_number=3, height=30.0),
            _page([_frag("p1", 0, 4.0, page=1)], page_number=1, height=10.0),
            _page([_frag("p2", 0, 4.0, page=2)], page_number=2, height=20.0),
        ]
        rows = group_rows(pages, FractionalEpsilon(1))
        self.assertEqual([r.texts() for r in rows], [["p1"], ["p2"], ["p3"]])
        self.assertEqual([r.items[0].page for r in rows], [1, 2, 3])
        self.assertAlmostEqual(rows[0].items[0].y, 4.0)
        self.assertAlmostEqual(rows[1].items[0].y, 14.0)
        self.assertAlmostEqual(rows[2].items[0].y, 34.0)

    def test_gap_state_carries_across_pages(self) -> None:
        # last fragment of page 1 sits at the page bottom, first of page 2 at its top
        pages = [
            _page([_frag("end", 0, 9.95)], page_number=1, height=10.0),
            _page([_frag("start", 5, 0.05)], page_number=2, height=10.0),
        ]
        rows = group_rows(pages, GapThreshold(minimum_gap=0.2, maximum_break_threshold=0.5))
        self.assertEqual([r.texts() for r in rows], [["end", "start"]])

    def test_every_fragment_lands_in_exactly_one_row(self) -> None:
        fragments = [_frag(f"t{i}", (i * 7) % 50, (i * 13) % 40 + 0.37 * (i % 3)) for i in range(60)]
        pages = [_page(fragments[:30], page_number=1, height=40.0), _page(fragments[30:], page_number=2, height=40.0)]
        for strategy in (FractionalEpsilon(1), FractionalEpsilon(0), GapThreshold(0.5, 1.0)):
            with self.subTest(strategy=strategy):
                rows = group_rows(pages, strategy)
                texts = [t for r in rows for t in r.texts()]
                self.assertEqual(sorted(texts), sorted(f.text for f in fragments))
                ys = [r.y for r in rows]
                self.assertEqual(ys, sorted(set(ys)))
                for r in rows:
                    xs = [i.x for i in r.items]
                    self.assertEqual(xs, sorted(xs))

    def test_calls_do_not_share_state(self) -> None:
        pages = [_page([_frag("a", 0, 1.0), _frag("b", 0, 3.0)])]
        strategy = GapThreshold(minimum_gap=0.5, maximum_break_threshold=1.0)
        first = [r.to_dict() for r in group_rows(pages, strategy)]
        second = [r.to_dict() for r in group_rows(pages, strategy)]
        self.assertEqual(first, second)

    def test_empty_input(self) -> None:
        self.assertEqual(group_rows([], FractionalEpsilon(1)), [])
        self.assertEqual(group_rows([_page([])], FractionalEpsilon(1)), [])


class TestValidation(unittest.TestCase):
    def test_undefined_geometry_is_fatal(self) -> None:
        page = _page([_frag("a", 0, 1.0), _frag("bad", math.nan, 2.0)])
        with self.assertRaises(MalformedFragmentError) as ctx:
            group_rows([page], FractionalEpsilon(1))
        self.assertEqual(ctx.exception.code, "LAYOUT_MALFORMED_FRAGMENT")

    def test_strategy_validation(self) -> None:
        with self.assertRaises(ValueError):
            FractionalEpsilon(-1)
        with self.assertRaises(TypeError):
            FractionalEpsilon(1.5)  # type: ignore[arg-type]
        with self.assertRaises(ValueError):
            GapThreshold(minimum_gap=0, maximum_break_threshold=1.0)
        with self.assertRaises(ValueError):
            GapThreshold(minimum_gap=0.4, maximum_break_threshold=-1)

    def test_strategy_from_dict(self) -> None:
        self.assertEqual(strategy_from_dict({"kind": "fractional_epsilon", "precision": 2}), FractionalEpsilon(2))
        self.assertEqual(
            strategy_from_dict(GapThreshold(0.4, 0.3).to_dict()),
            GapThreshold(minimum_gap=0.4, maximum_break_threshold=0.3),
        )
        with self.assertRaises(ValueError):
            strategy_from_dict({"minimum_gap": 0.4})


if __name__ == "__main__":
    unittest.main()
