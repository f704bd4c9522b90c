import sys
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.main import app  # noqa: E402
from app.services.analysis_service import analyze_resume  # noqa: E402


RESUME_TEXT = (
    "Jordan Lee\n"
    "jordan.lee@example.com | (555) 201-3344\n"
    "Summary\n"
    "Operations analyst focused on logistics and trade compliance.\n"
    "Experience\n"
    "Operations Analyst, Northwind Freight, 2018 - 2023\n"
    "- Reduced customs clearance delays by 30% across 4 ports\n"
    "- Responsible for weekly freight reporting\n"
    "- Helped with onboarding new analysts\n"
    "Education\n"
    "B.S. in Supply Chain Management\n"
    "Skills\n"
    "Excel, SQL, CargoWise, Python\n"
)


class AnalysisApiTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def test_health_reports_scoring_version(self):
        response = self.client.get("/v1/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "healthy")
        self.assertTrue(body["scoring_version"])

    def test_short_resume_is_rejected(self):
        response = self.client.post("/v1/analysis/resume", json={"resume_text": "Too short"})
        self.assertEqual(response.status_code, 422)
        self.assertIn("too short", response.json()["detail"])

    def test_resume_analysis_contract_shape(self):
        response = self.client.post(
            "/v1/analysis/resume",
            json={"resume_text": RESUME_TEXT, "file_name": "jordan_lee.docx"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()

        for key in (
            "overall_score",
            "score_breakdown",
            "rule_penalty",
            "recommendations",
            "educational_insights",
            "hr_perspective",
            "resume_quotes",
            "rule_issues",
            "consistency_check",
        ):
            self.assertIn(key, body)
        self.assertGreaterEqual(body["overall_score"], 0)
        self.assertLessEqual(body["overall_score"], 100)
        self.assertTrue(body["consistency_check"]["deterministic_score"])
        categories = {quote["category"] for quote in body["resume_quotes"]}
        self.assertIn("weak_language", categories)

    def test_api_and_direct_call_agree_on_analysis_id(self):
        padded = f"\n  {RESUME_TEXT}  \n"
        body = self.client.post("/v1/analysis/resume", json={"resume_text": padded}).json()
        direct = analyze_resume(padded, "resume.pdf")
        self.assertEqual(body["consistency_check"]["analysis_id"], direct.consistency_check.analysis_id)
        self.assertEqual(body["overall_score"], direct.overall_score)

    def test_repeat_requests_share_analysis_id(self):
        payload = {"resume_text": RESUME_TEXT}
        first = self.client.post("/v1/analysis/resume", json=payload).json()
        second = self.client.post("/v1/analysis/resume", json=payload).json()
        self.assertEqual(first["overall_score"], second["overall_score"])
        self.assertEqual(first["consistency_check"]["analysis_id"], second["consistency_check"]["analysis_id"])

    def test_job_match_contract_shape(self):
        response = self.client.post(
            "/v1/analysis/match",
            json={
                "resume_text": RESUME_TEXT,
                "reference_year": 2024,
                "job_requirements": {
                    "hard_skills": [
                        {"skill": "CargoWise", "importance": "high"},
                        {"skill": "Trade Compliance", "importance": "medium"},
                    ],
                    "technologies": [{"technology": "Microsoft Excel"}],
                    "experience_keywords": [{"years_required": "3+ years"}],
                    "education_requirements": ["Bachelor's degree"],
                },
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["skills_match"]["score"], 100)
        self.assertEqual(body["experience_match"]["resume_years"], 5)
        self.assertTrue(body["education_match"]["matched"])
        self.assertEqual(body["match_score"], 100)

    def test_match_rejects_invalid_importance(self):
        response = self.client.post(
            "/v1/analysis/match",
            json={
                "resume_text": RESUME_TEXT,
                "job_requirements": {"hard_skills": [{"skill": "SQL", "importance": "critical"}]},
            },
        )
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
