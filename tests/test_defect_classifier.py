import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features.defect_classifier import (  # noqa: E402
    QUOTE_RULES,
    classify_candidate,
    extract_defect_quotes,
    quote_key,
    split_compound_bullet,
    truncate_quote,
)
from app.schemas.normalized import SegmentedContent  # noqa: E402


class DefectClassifierTests(unittest.TestCase):
    def test_rules_run_in_fixed_priority_order(self):
        self.assertEqual(
            [rule.category for rule in QUOTE_RULES],
            [
                "weak_language",
                "passive_voice",
                "responsibility_framing",
                "missing_metrics",
                "unclear_impact",
                "generic_description",
            ],
        )

    def test_weak_language_rewrites_phrase(self):
        quote = classify_candidate("Responsible for customer support")
        self.assertIsNotNone(quote)
        self.assertEqual(quote.category, "weak_language")
        self.assertEqual(quote.issue, 'Uses weak, passive language: "responsible for"')
        self.assertEqual(quote.suggested_improvement, "Managed customer support")

    def test_weak_language_swallows_leading_auxiliary(self):
        quote = classify_candidate("Was responsible for onboarding new clients")
        self.assertEqual(quote.suggested_improvement, "Managed onboarding new clients")

    def test_first_matching_rule_wins(self):
        quote = classify_candidate("Helped with various projects for the team")
        self.assertEqual(quote.category, "weak_language")

    def test_passive_voice_fronts_participle(self):
        quote = classify_candidate("Quarterly budgets were prepared for the finance team")
        self.assertEqual(quote.category, "passive_voice")
        self.assertEqual(quote.suggested_improvement, "Prepared quarterly budgets for the finance team")

    def test_passive_voice_drops_first_person_agent(self):
        quote = classify_candidate("The migration plan was reviewed by me.")
        self.assertEqual(quote.category, "passive_voice")
        self.assertEqual(quote.suggested_improvement, "Reviewed the migration plan.")

    def test_responsibility_framing_appends_outcome(self):
        quote = classify_candidate("Supervised the warehouse night shift crew")
        self.assertEqual(quote.category, "responsibility_framing")
        self.assertTrue(quote.suggested_improvement.startswith("Supervised the warehouse night shift crew, resulting in"))

    def test_supervision_with_numbers_is_not_flagged(self):
        self.assertIsNone(classify_candidate("Supervised 12 warehouse associates across 3 shifts"))

    def test_missing_metrics_uses_keyword_clause(self):
        quote = classify_candidate("Developed a data pipeline for sales forecasting")
        self.assertEqual(quote.category, "missing_metrics")
        self.assertEqual(
            quote.suggested_improvement,
            "Developed a data pipeline for sales forecasting, improving accuracy by 25%",
        )
        generic = classify_candidate("Developed onboarding materials for new hires")
        self.assertTrue(generic.suggested_improvement.endswith(", achieving a 15% improvement in efficiency"))

    def test_unclear_impact_for_broader_action_verbs(self):
        quote = classify_candidate("Built internal dashboards for the sales organization")
        self.assertEqual(quote.category, "unclear_impact")
        self.assertIn('"built"', quote.issue)

    def test_impact_marker_suppresses_unclear_impact(self):
        self.assertIsNone(classify_candidate("Built internal dashboards that boosted sales visibility"))

    def test_generic_description_replaces_vague_quantifier(self):
        quote = classify_candidate("Worked with various stakeholders across departments")
        self.assertEqual(quote.category, "generic_description")
        self.assertEqual(quote.suggested_improvement, "Worked with 15 different stakeholders across departments")

    def test_quantified_achievement_is_clean(self):
        self.assertIsNone(classify_candidate("Increased revenue by 25% through new pricing strategy"))

    def test_duplicates_are_removed_by_normalized_key(self):
        content = SegmentedContent(
            bullet_points=[
                "Responsible for customer support",
                "responsible for  customer support.",
                "Responsible for customer support",
            ]
        )
        quotes = extract_defect_quotes(content)
        self.assertEqual(len(quotes), 1)
        keys = {quote_key(quote.category, quote.original_text) for quote in quotes}
        self.assertEqual(len(keys), len(quotes))

    def test_quote_count_is_capped(self):
        bullets = [f"Responsible for regional account number {chr(65 + index)} support" for index in range(26)]
        quotes = extract_defect_quotes(SegmentedContent(bullet_points=bullets))
        self.assertEqual(len(quotes), 20)

    def test_short_candidates_are_skipped(self):
        self.assertEqual(extract_defect_quotes(SegmentedContent(bullet_points=["Handled it"])), [])

    def test_sentences_are_used_when_no_bullets(self):
        content = SegmentedContent(sentences=["Responsible for customer support in the east region"])
        quotes = extract_defect_quotes(content)
        self.assertEqual([quote.category for quote in quotes], ["weak_language"])

    def test_compound_bullets_are_split(self):
        parts = split_compound_bullet("Responsible for payroll; Supervised the warehouse crew")
        self.assertEqual(parts, ["Responsible for payroll", "Supervised the warehouse crew"])
        quotes = extract_defect_quotes(
            SegmentedContent(bullet_points=["Responsible for payroll; Supervised the warehouse crew"])
        )
        self.assertEqual([quote.category for quote in quotes], ["weak_language", "responsibility_framing"])

    def test_long_quotes_are_truncated(self):
        text = "word " * 80
        truncated = truncate_quote(text.strip())
        self.assertEqual(len(truncated), 200)
        self.assertTrue(truncated.endswith("..."))


if __name__ == "__main__":
    unittest.main()
