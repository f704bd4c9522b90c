import unittest
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.scoring import category_cap, get_scoring_config, get_scoring_value, scoring_version  # noqa: E402


class ScoringConfigTests(unittest.TestCase):
    def test_loader_and_value_lookup(self):
        config = get_scoring_config()
        self.assertIsInstance(config, dict)
        self.assertEqual(get_scoring_value("matching.weights.skills"), 0.35)
        self.assertEqual(get_scoring_value("matching.weights.unknown", "fallback"), "fallback")
        self.assertIsNone(get_scoring_value(""))

    def test_category_caps_sum_to_one_hundred(self):
        caps = [category_cap(name) for name in ("formatting", "keywords", "content", "ats_compatibility")]
        self.assertEqual(caps, [25, 30, 25, 20])
        self.assertEqual(sum(caps), 100)

    def test_match_weights_sum_to_one(self):
        weights = get_scoring_value("matching.weights")
        self.assertAlmostEqual(sum(weights.values()), 1.0, places=9)

    def test_unknown_category_cap_raises(self):
        with self.assertRaises(RuntimeError):
            category_cap("design")

    def test_scoring_version_is_pinned(self):
        self.assertEqual(scoring_version(), "v2.1-deterministic")


if __name__ == "__main__":
    unittest.main()
