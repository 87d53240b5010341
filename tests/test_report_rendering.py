import os
import random
import re
import sys
import unittest
from datetime import date
from pathlib import Path

os.environ.setdefault("ENRICHMENT_ENABLED", "0")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app.schemas.assessment import AssessmentAnalysis, AssessmentSubmission  # noqa: E402
from app.services.assessment_service import analyze_assessment, emergency_fallback_report  # noqa: E402
from app.services.report_rendering import render_assessment_html, render_subject  # noqa: E402

_FIT_RE = re.compile(r'<div class="fit-percentage">(\d+)%</div>')
_ALT_RE = re.compile(r'<span class="alt-fit">(\d+)</span>% fit')


def _submission(**overrides) -> AssessmentSubmission:
    ratings = [3] * 30
    for index in (6, 19, 23, 27, 29):
        ratings[index] = 5
    data = {
        "user_name": "Alex Morgan",
        "user_position": "Support Engineer",
        "target_job_title": "Software Engineer",
        "assessment_date": date(2025, 3, 14),
        "ratings": ratings,
    }
    data.update(overrides)
    return AssessmentSubmission(**data)


class ReportRenderingTests(unittest.TestCase):
    def setUp(self):
        os.environ["ENRICHMENT_ENABLED"] = "0"

    def test_fit_percentage_round_trips_through_html(self):
        submission = _submission()
        for seed in range(10):
            analysis = analyze_assessment(submission.ratings, submission.target_job_title, rng=random.Random(seed))
            html = render_assessment_html(submission, analysis)
            report = analysis.job_fit_analysis
            self.assertEqual(int(_FIT_RE.search(html).group(1)), report.fit_percentage)
            self.assertEqual(
                [int(value) for value in _ALT_RE.findall(html)],
                [position.fit_percentage for position in report.alternative_positions],
            )

    def test_html_contains_candidate_and_personality_sections(self):
        submission = _submission()
        analysis = analyze_assessment(submission.ratings, submission.target_job_title, rng=random.Random(1))
        html = render_assessment_html(submission, analysis, generated_on=date(2025, 3, 15))
        self.assertIn("Alex Morgan", html)
        self.assertIn("2025-03-14", html)
        self.assertIn("Generated on 2025-03-15", html)
        self.assertIn("Personality Analysis: Driver/Director", html)
        self.assertIn("HR Management Recommendations", html)
        self.assertEqual(html.count('class="assessment-item"'), 30)
        self.assertIn("5/5", html)

    def test_user_text_is_escaped(self):
        submission = _submission(user_name="<script>alert(1)</script>", user_position=None)
        analysis = analyze_assessment(submission.ratings, submission.target_job_title, rng=random.Random(1))
        html = render_assessment_html(submission, analysis)
        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)
        self.assertIn("Not specified", html)

    def test_fallback_analysis_renders_without_personality(self):
        submission = _submission()
        analysis = AssessmentAnalysis(job_fit_analysis=emergency_fallback_report(), message="Emergency fallback analysis")
        html = render_assessment_html(submission, analysis)
        self.assertEqual(int(_FIT_RE.search(html).group(1)), 70)
        self.assertNotIn("HR Management Recommendations", html)

    def test_subject_contains_name_and_fit(self):
        subject = render_subject("Alex\nMorgan", "Software Engineer", 87)
        self.assertIn("Alex Morgan", subject)
        self.assertIn("87%", subject)
        self.assertNotIn("\n", subject)


if __name__ == "__main__":
    unittest.main()
