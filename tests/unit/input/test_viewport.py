from __future__ import annotations

import unittest

from lazynav.input.focus import FocusState
from lazynav.input.viewport import DetailViewport, ListViewport


class DetailViewportTests(unittest.TestCase):
    def test_scroll_clamps_to_content(self) -> None:
        viewport = DetailViewport(step=5)
        viewport.set_extent(content_rows=17, visible_rows=5)
        self.assertTrue(viewport.scroll(1))
        self.assertEqual(viewport.offset, 5)
        viewport.scroll(1)
        viewport.scroll(1)
        self.assertEqual(viewport.offset, 12)
        self.assertFalse(viewport.scroll(1))
        viewport.scroll(-1)
        self.assertEqual(viewport.offset, 7)
        viewport.scroll(-1)
        viewport.scroll(-1)
        self.assertEqual(viewport.offset, 0)

    def test_short_content_does_not_scroll(self) -> None:
        viewport = DetailViewport(step=5)
        viewport.set_extent(content_rows=3, visible_rows=10)
        self.assertFalse(viewport.scroll(1))
        self.assertEqual(viewport.offset, 0)

    def test_new_target_resets_offset_and_shrinking_content_clamps(self) -> None:
        viewport = DetailViewport(step=4)
        viewport.follow("a")
        viewport.set_extent(20, 5)
        viewport.scroll(1)
        viewport.follow("a")
        self.assertEqual(viewport.offset, 4)
        viewport.set_extent(6, 5)
        self.assertEqual(viewport.offset, 1)
        viewport.follow("b")
        self.assertEqual(viewport.offset, 0)


class ListViewportTests(unittest.TestCase):
    def test_follow_keeps_selection_visible(self) -> None:
        viewport = ListViewport()
        self.assertEqual(viewport.follow(12, 30, 10), 3)
        self.assertEqual(viewport.follow(5, 30, 10), 3)
        self.assertEqual(viewport.follow(1, 30, 10), 1)
        self.assertEqual(viewport.follow(None, 4, 10), 0)


class FocusStateTests(unittest.TestCase):
    def test_prompt_buffer_editing(self) -> None:
        focus = FocusState()
        self.assertFalse(focus.in_text_field)
        focus.open_prompt("art")
        focus.type_text(".x")
        focus.backspace()
        self.assertTrue(focus.in_text_field)
        self.assertEqual(focus.close_prompt(), "art.")
        self.assertFalse(focus.in_text_field)
        self.assertEqual(focus.buffer, "")


if __name__ == "__main__":
    unittest.main()
