from __future__ import annotations

import re
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]


class PackagingMetadataTests(unittest.TestCase):
    def test_readme_is_the_user_facing_readme(self) -> None:
        text = (PROJECT_ROOT / "pyproject.toml").read_text(encoding="utf-8")
        match = re.search(r'^readme\s*=\s*"([^"]+)"', text, re.MULTILINE)
        self.assertIsNotNone(match)
        self.assertEqual(match.group(1), "README.md")
        self.assertTrue((PROJECT_ROOT / match.group(1)).is_file())


if __name__ == "__main__":
    unittest.main()
