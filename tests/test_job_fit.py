import random
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pydantic import ValidationError  # noqa: E402

from app.assessment.archetypes import load_archetypes  # noqa: E402
from app.assessment.job_fit import (  # noqa: E402
    JobFitReport,
    apply_jitter,
    estimate_job_fit,
    fit_level,
    fit_reasoning,
    load_job_fit_rules,
    select_fit_branch,
)
from app.services.assessment_service import emergency_fallback_report  # noqa: E402


class _FixedRandom:
    def __init__(self, value: int):
        self.value = value
        self.calls: list[tuple[int, int]] = []

    def randint(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        return self.value


def _archetype(trait: str):
    return load_archetypes()[trait]


class JobFitBranchTests(unittest.TestCase):
    def test_engineer_with_driver_uses_technical_branch(self):
        selection = select_fit_branch(_archetype("dominance"), "Software Engineer")
        self.assertEqual(selection.group_id, "technical")
        self.assertEqual(selection.base_percentage, 88)
        self.assertEqual(selection.alternative_positions[0].title, "Systems Analyst")
        self.assertEqual(selection.strengths_for_role[0], "Strong analytical thinking")

    def test_support_title_with_supporter(self):
        selection = select_fit_branch(_archetype("steadiness"), "Customer Support Representative")
        self.assertEqual(selection.group_id, "support")
        self.assertEqual(selection.base_percentage, 91)
        self.assertEqual(len(selection.alternative_positions), 3)

    def test_unmatched_title_uses_generic_defaults(self):
        archetype = _archetype("influence")
        for title in ("Xyzzy Role", "", None):
            with self.subTest(title=title):
                selection = select_fit_branch(archetype, title)
                self.assertIsNone(selection.group_id)
                self.assertEqual(selection.base_percentage, 65)
                self.assertEqual(selection.strengths_for_role, list(archetype.strengths[:3]))
                self.assertEqual(selection.challenges_for_role, list(archetype.challenges[:2]))
                self.assertEqual(
                    [position.title for position in selection.alternative_positions],
                    ["Customer Service Representative", "Project Coordinator", "Training Specialist"],
                )

    def test_sub_branch_base_percentages(self):
        cases = [
            ("conscientiousness", "Data Analyst", 88),
            ("empathy", "Backend Developer", 58),
            ("influence", "Technical Writer", 69),
            ("influence", "Sales Executive", 92),
            ("steadiness", "Business Development Associate", 71),
            ("conscientiousness", "Sales Associate", 79),
            ("dominance", "Operations Manager", 89),
            ("empathy", "Shift Supervisor", 77),
            ("adaptability", "Art Director", 72),
            ("influence", "Field Service Technician", 82),
            ("conscientiousness", "Help Desk Support", 78),
            ("dominance", "Customer Service Agent", 82),
            ("adaptability", "Graphic Design Intern", 87),
            ("steadiness", "Creative Producer", 73),
        ]
        for trait, title, expected in cases:
            with self.subTest(trait=trait, title=title):
                self.assertEqual(select_fit_branch(_archetype(trait), title).base_percentage, expected)

    def test_keyword_groups_follow_priority_order(self):
        # "marketing" is in both the sales and creative groups; sales comes first
        selection = select_fit_branch(_archetype("adaptability"), "Marketing Designer")
        self.assertEqual(selection.group_id, "sales")
        self.assertEqual(selection.base_percentage, 79)

    def test_branch_without_replacement_keeps_archetype_text(self):
        archetype = _archetype("empathy")
        selection = select_fit_branch(archetype, "Backend Developer")
        self.assertEqual(selection.strengths_for_role, list(archetype.strengths[:3]))
        self.assertEqual(
            selection.challenges_for_role,
            ["May need to develop technical depth", "Consider strengthening analytical skills"],
        )


class JobFitEstimateTests(unittest.TestCase):
    def test_jitter_is_drawn_from_inclusive_range(self):
        fixed = _FixedRandom(0)
        self.assertEqual(apply_jitter(70, fixed), 70)
        self.assertEqual(fixed.calls, [(-8, 8)])

    def test_jitter_covers_seventeen_outcomes(self):
        rng = random.Random(42)
        seen = {apply_jitter(70, rng) - 70 for _ in range(2000)}
        self.assertEqual(seen, set(range(-8, 9)))

    def test_result_is_clamped(self):
        self.assertEqual(apply_jitter(92, _FixedRandom(8)), 98)
        self.assertEqual(apply_jitter(50, _FixedRandom(-8)), 45)

    def test_driver_engineer_scenario(self):
        for seed in range(50):
            report = estimate_job_fit(_archetype("dominance"), "Software Engineer", rng=random.Random(seed))
            self.assertGreaterEqual(report.fit_percentage, 80)
            self.assertLessEqual(report.fit_percentage, 96)

    def test_supporter_support_scenario(self):
        for seed in range(50):
            report = estimate_job_fit(
                _archetype("steadiness"), "Customer Support Representative", rng=random.Random(seed)
            )
            self.assertGreaterEqual(report.fit_percentage, 83)
            self.assertLessEqual(report.fit_percentage, 98)

    def test_unknown_title_scenario(self):
        for seed in range(50):
            report = estimate_job_fit(_archetype("influence"), "Xyzzy Role", rng=random.Random(seed))
            self.assertGreaterEqual(report.fit_percentage, 57)
            self.assertLessEqual(report.fit_percentage, 73)

    def test_fit_always_within_bounds(self):
        titles = ["Software Engineer", "Sales Lead", "Designer", "Support", "Chef", ""]
        rng = random.Random(7)
        for archetype in load_archetypes().values():
            for title in titles:
                for _ in range(20):
                    report = estimate_job_fit(archetype, title, rng=rng)
                    self.assertGreaterEqual(report.fit_percentage, 45)
                    self.assertLessEqual(report.fit_percentage, 98)

    def test_report_shape_and_static_lists(self):
        rules = load_job_fit_rules()
        report = estimate_job_fit(_archetype("dominance"), "Software Engineer", rng=_FixedRandom(0))
        self.assertEqual(report.target_position, "Software Engineer")
        self.assertEqual(report.fit_percentage, 88)
        self.assertEqual(
            report.fit_reasoning,
            "Based on your Driver/Director personality type, you show excellent alignment with this role's requirements.",
        )
        self.assertEqual(report.interview_tips, list(rules.interview_tips))
        self.assertEqual(report.development_plan, list(rules.development_plan))
        other = estimate_job_fit(_archetype("empathy"), "Chef", rng=_FixedRandom(0))
        self.assertEqual(other.interview_tips, report.interview_tips)
        self.assertEqual(other.development_plan, report.development_plan)

    def test_fit_level_thresholds(self):
        self.assertEqual(fit_level(85).adjective, "excellent")
        self.assertEqual(fit_level(84).adjective, "strong")
        self.assertEqual(fit_level(75).adjective, "strong")
        self.assertEqual(fit_level(74).adjective, "good")
        self.assertEqual(fit_level(65).adjective, "good")
        self.assertEqual(fit_level(64).adjective, "moderate")
        self.assertEqual(fit_level(45).label, "Moderate Match")
        self.assertIn("moderate alignment", fit_reasoning("Helper/Nurturer", 50))


class JobFitReportBoundsTests(unittest.TestCase):
    def _valid(self) -> dict:
        report = estimate_job_fit(_archetype("dominance"), "Software Engineer", rng=_FixedRandom(0))
        return report.model_dump()

    def test_list_lengths_are_enforced(self):
        cases = {
            "strengths_for_role": ["One", "Two"],
            "challenges_for_role": ["Only one"],
            "alternative_positions": [{"title": "Solo", "fit_percentage": 80, "reasoning": "r"}],
            "interview_tips": ["1", "2", "3", "4"],
            "development_plan": ["1", "2", "3", "4", "5", "6"],
        }
        for field, value in cases.items():
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    JobFitReport.model_validate({**self._valid(), field: value})

    def test_estimated_and_fallback_reports_fit_the_bounds(self):
        for archetype in load_archetypes().values():
            for title in ("Software Engineer", "Sales Manager", "Chef"):
                report = estimate_job_fit(archetype, title, rng=_FixedRandom(0))
                JobFitReport.model_validate(report.model_dump())
        JobFitReport.model_validate(emergency_fallback_report().model_dump())


if __name__ == "__main__":
    unittest.main()
