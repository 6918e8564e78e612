from __future__ import annotations

import unittest

from lazynav.highlight import DEFAULT_STYLE, highlight_json, normalize_style
from lazynav.render.ansi import strip_ansi


class HighlightJsonTests(unittest.TestCase):
    def test_unknown_style_falls_back_to_default(self) -> None:
        self.assertEqual(normalize_style("definitely-not-a-style"), DEFAULT_STYLE)
        self.assertEqual(normalize_style(None), DEFAULT_STYLE)
        self.assertEqual(normalize_style("monokai"), "monokai")

    def test_highlighting_keeps_the_text(self) -> None:
        text = '{\n  "current_path": "art",\n  "selected_index": 0\n}\n'
        colored = highlight_json(text)
        self.assertIn("\x1b[", colored)
        self.assertEqual(strip_ansi(colored).strip(), text.strip())


if __name__ == "__main__":
    unittest.main()
