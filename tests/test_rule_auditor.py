import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.features.rule_auditor import audit_structure, rule_penalty  # noqa: E402
from app.normalize.segmentation import segment_content  # noqa: E402
from app.schemas.analysis import DefectQuote, RuleIssue  # noqa: E402


def _quote(category: str, index: int) -> DefectQuote:
    return DefectQuote(
        original_text=f"Sample line {index}",
        context="context",
        issue="issue",
        suggested_improvement="improved",
        category=category,
    )


class RuleAuditorTests(unittest.TestCase):
    def test_thin_document_collects_high_severity_issues(self):
        text = "short text"
        issues = audit_structure(text, segment_content(text), [])
        self.assertTrue(all(issue.severity == "high" for issue in issues))
        self.assertEqual(
            sorted(issue.category for issue in issues),
            ["ats", "format", "impact", "structure", "structure", "structure"],
        )
        self.assertEqual(rule_penalty(issues), 24)

    def test_placeholders_are_reported_with_evidence(self):
        text = "Summary\nWorked at [Company Name] until TBD\n"
        issues = audit_structure(text, segment_content(text), [])
        placeholder = [issue for issue in issues if issue.issue.startswith("Template placeholders")]
        self.assertEqual(len(placeholder), 1)
        self.assertEqual(placeholder[0].evidence, "[Company Name], TBD")

    def test_long_bullets_use_longest_as_evidence(self):
        medium_bullet = " ".join(["analysis"] * 40)
        text = f"Experience\n- short bullet here\n- {medium_bullet}\n"
        issues = audit_structure(text, segment_content(text), [])
        bullet_issues = [issue for issue in issues if issue.issue.startswith("Bullet points run too long")]
        self.assertEqual(len(bullet_issues), 1)
        self.assertEqual(bullet_issues[0].severity, "medium")
        self.assertEqual(bullet_issues[0].evidence, medium_bullet)

        high_bullet = " ".join(["analysis"] * 50)
        text = f"Experience\n- {high_bullet}\n"
        issues = audit_structure(text, segment_content(text), [])
        self.assertIn("high", [issue.severity for issue in issues if issue.issue.startswith("Bullet points")])

    def test_word_count_near_edges_is_medium(self):
        text = " ".join(["word"] * 200)
        issues = audit_structure(text, segment_content(text), [])
        length = [issue for issue in issues if issue.category == "format"]
        self.assertEqual([issue.severity for issue in length], ["medium"])

    def test_quote_density_checks(self):
        quotes = [_quote("passive_voice", index) for index in range(3)]
        quotes += [_quote("unclear_impact", index) for index in range(2)]
        issues = audit_structure("Summary", segment_content("Summary"), quotes)
        density = [issue for issue in issues if issue.severity == "medium"]
        self.assertEqual(len(density), 1)
        self.assertEqual(density[0].category, "verbiage")
        self.assertEqual(density[0].penalty, 2)

    def test_penalty_weights(self):
        issues = [
            RuleIssue(severity="high", category="structure", issue="a"),
            RuleIssue(severity="medium", category="format", issue="b"),
            RuleIssue(severity="low", category="ats", issue="c"),
        ]
        self.assertEqual(rule_penalty(issues), 7)
        self.assertEqual(rule_penalty([]), 0)


if __name__ == "__main__":
    unittest.main()
