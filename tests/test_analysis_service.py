import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.core.config.scoring import scoring_version  # noqa: E402
from app.services.analysis_service import (  # noqa: E402
    AnalysisInputError,
    analysis_id,
    analyze_resume,
    validate_resume_text,
)

STRONG_RESUME = (
    "Maria Gonzalez\n"
    "maria.gonzalez@example.com | (555) 123-4567\n"
    "Professional Summary\n"
    "Supply chain analyst with 8 years of experience improving logistics performance for retail and "
    "manufacturing clients, combining SQL and Tableau reporting with hands-on vendor negotiation.\n"
    "Experience\n"
    "Senior Supply Chain Analyst, Northwind Traders, 2019 - 2024\n"
    "- Reduced freight spend by 18% ($1.2M annually) by renegotiating carrier contracts\n"
    "- Increased on-time delivery from 87% to 96% across 14 distribution centers\n"
    "- Developed a SQL forecasting model that improved inventory accuracy by 22%\n"
    "- Led a team of 6 analysts delivering weekly executive dashboards in Tableau\n"
    "Supply Chain Analyst, Contoso Retail, 2016 - 2019\n"
    "- Implemented cycle-count process that reduced stock discrepancies by 35%\n"
    "- Created Excel pricing tools used by 40 buyers, saving 10 hours per week\n"
    "- Achieved 99.5% customs compliance across 3,000 import shipments\n"
    "Education\n"
    "B.S. Industrial Engineering, State University, 2016\n"
    "Skills\n"
    "SQL, Python, Excel, Tableau, data analysis, inventory management, leadership, vendor management\n"
)

WEAK_RESUME = (
    "Alex Smith\n"
    "Summary\n"
    "Customer service representative.\n"
    "Experience\n"
    "- Responsible for customer support\n"
    "- Helped with onboarding of new staff\n"
    "Skills\n"
    "Communication\n"
)

PASSIVE_RESUME = (
    "Sam Carter\n"
    "Summary\n"
    "Finance coordinator supporting regional operations.\n"
    "Experience\n"
    "- Quarterly budgets were prepared for the finance team\n"
    "- Vendor contracts were negotiated with regional suppliers\n"
    "- Customs filings were submitted ahead of deadlines\n"
    "Skills\n"
    "Excel, reporting\n"
)


class AnalysisServiceTests(unittest.TestCase):
    def test_identical_input_yields_identical_score_and_id(self):
        first = analyze_resume(STRONG_RESUME, "resume.pdf")
        second = analyze_resume(STRONG_RESUME, "resume.pdf")
        self.assertEqual(first.overall_score, second.overall_score)
        self.assertEqual(first.consistency_check.analysis_id, second.consistency_check.analysis_id)
        self.assertEqual(
            first.model_dump(exclude={"consistency_check": {"generated_at"}}),
            second.model_dump(exclude={"consistency_check": {"generated_at"}}),
        )

    def test_analysis_id_includes_scoring_version(self):
        result = analyze_resume(STRONG_RESUME, "resume.pdf")
        version = scoring_version()
        self.assertEqual(result.consistency_check.scoring_version, version)
        self.assertTrue(result.consistency_check.analysis_id.endswith(f"-{version}"))
        self.assertEqual(result.consistency_check.analysis_id, analysis_id(STRONG_RESUME, version))
        self.assertNotEqual(analysis_id(STRONG_RESUME, version), analysis_id(WEAK_RESUME, version))
        self.assertTrue(result.consistency_check.deterministic_score)

    def test_scores_stay_within_bounds(self):
        for text in (STRONG_RESUME, WEAK_RESUME, PASSIVE_RESUME, "", "x"):
            result = analyze_resume(text, "resume.docx")
            self.assertGreaterEqual(result.overall_score, 0)
            self.assertLessEqual(result.overall_score, 100)
            for category in result.score_breakdown.categories():
                self.assertGreaterEqual(category.score, 0)
                self.assertLessEqual(category.score, category.max_score)

    def test_overall_score_subtracts_rule_penalty_once(self):
        for text in (STRONG_RESUME, WEAK_RESUME, PASSIVE_RESUME):
            result = analyze_resume(text, "resume.pdf")
            category_total = sum(category.score for category in result.score_breakdown.categories())
            penalty = sum(issue.penalty for issue in result.rule_issues)
            self.assertEqual(result.rule_penalty, penalty)
            self.assertEqual(result.overall_score, max(0, category_total - penalty))

    def test_strong_resume_outscores_weak_resume(self):
        strong = analyze_resume(STRONG_RESUME, "resume.pdf")
        weak = analyze_resume(WEAK_RESUME, "resume.pdf")
        self.assertGreater(strong.overall_score, weak.overall_score)
        self.assertGreaterEqual(len(strong.score_breakdown.content.positive_points), 2)

    def test_weak_language_without_numbers_scores_poorly(self):
        result = analyze_resume(WEAK_RESUME, "resume.pdf")
        categories = [quote.category for quote in result.resume_quotes]
        self.assertIn("weak_language", categories)
        weak_deductions = [
            item for item in result.score_breakdown.keywords.deductions if item.reason.startswith("Weak language")
        ]
        self.assertEqual([item.points for item in weak_deductions], [3])
        self.assertLess(result.overall_score, 70)
        self.assertEqual(result.hr_perspective.likely_outcome, "unlikely_advance")

    def test_passive_voice_is_penalized_in_both_layers(self):
        # The same passive-voice signal lowers Keywords and also raises a rule issue.
        result = analyze_resume(PASSIVE_RESUME, "resume.pdf")
        passive_quotes = [quote for quote in result.resume_quotes if quote.category == "passive_voice"]
        self.assertEqual(len(passive_quotes), 3)
        keyword_reasons = {item.reason: item.points for item in result.score_breakdown.keywords.deductions}
        passive_keyword = [points for reason, points in keyword_reasons.items() if reason.startswith("Frequent passive")]
        self.assertEqual(passive_keyword, [4])
        passive_rules = [issue for issue in result.rule_issues if issue.issue.startswith("Frequent passive voice")]
        self.assertEqual(len(passive_rules), 1)
        self.assertEqual(passive_rules[0].severity, "medium")

    def test_recommendations_follow_quote_order(self):
        result = analyze_resume(WEAK_RESUME, "resume.pdf")
        self.assertLessEqual(len(result.recommendations), 8)
        self.assertEqual(
            [item.current_example for item in result.recommendations],
            [quote.original_text for quote in result.resume_quotes][:8],
        )
        first = result.recommendations[0]
        self.assertEqual(first.priority, "high")
        self.assertEqual(first.category, "Weak Language")
        self.assertEqual(first.estimated_time_to_fix, "15-20 minutes")

    def test_insights_and_hr_perspective(self):
        result = analyze_resume(WEAK_RESUME, "resume.pdf")
        self.assertEqual(result.educational_insights[0].topic, "Why Your Score Might Be Lower Than Expected")
        self.assertLessEqual(len(result.educational_insights), 4)
        hr = result.hr_perspective
        self.assertEqual(hr.time_to_review, "6-10 seconds")
        self.assertLessEqual(len(hr.concerning_elements), 3)
        self.assertLessEqual(len(hr.specific_concerns), 2)
        self.assertTrue(all(concern.endswith("...") for concern in hr.specific_concerns))
        self.assertIn(f"{result.overall_score}/100", hr.overall_assessment)

    def test_input_validation_at_boundary(self):
        with self.assertRaises(AnalysisInputError) as ctx:
            validate_resume_text("too short")
        self.assertEqual(ctx.exception.status_code, 422)
        with self.assertRaises(AnalysisInputError):
            validate_resume_text("x" * 50001)
        self.assertEqual(validate_resume_text(f"  {STRONG_RESUME}  "), STRONG_RESUME.strip())


if __name__ == "__main__":
    unittest.main()
