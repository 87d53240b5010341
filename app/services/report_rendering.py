from __future__ import annotations

import html
from datetime import date
from typing import Iterable, Sequence

from app.assessment.archetypes import Archetype
from app.assessment.job_fit import JobFitReport, fit_level
from app.assessment.terms import ASSESSMENT_TERMS, MAX_RATING
from app.schemas.assessment import AssessmentAnalysis, AssessmentSubmission

_STYLE = """
        body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; margin: 0; padding: 20px; background-color: #f8fafc; }
        .container { max-width: 800px; margin: 0 auto; background: white; border-radius: 12px; box-shadow: 0 4px 6px rgba(0,0,0,0.1); overflow: hidden; }
        .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; text-align: center; }
        .content { padding: 30px; }
        .section { margin-bottom: 30px; padding: 20px; border-radius: 8px; background: #f8fafc; }
        .fit-score { color: white; padding: 20px; border-radius: 8px; text-align: center; margin: 20px 0; }
        .fit-percentage { font-size: 3em; font-weight: bold; margin: 0; }
        .alternative { background: white; padding: 15px; margin: 10px 0; border-radius: 8px; border: 1px solid #e5e7eb; }
        .assessment-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(250px, 1fr)); gap: 15px; margin: 20px 0; }
        .assessment-item { background: white; padding: 15px; border-radius: 6px; border: 1px solid #e5e7eb; display: flex; justify-content: space-between; align-items: center; }
        .footer { background: #f9fafb; padding: 20px; text-align: center; font-size: 12px; color: #6b7280; }
        ul { padding-left: 20px; }
        li { margin-bottom: 8px; }
"""


def _e(value: object) -> str:
    return html.escape(str(value), quote=True)


def _list_items(items: Iterable[str]) -> str:
    return "".join(f"<li>{_e(item)}</li>" for item in items)


def _section(title: str, body: str, *, heading: str = "h3") -> str:
    return f'<div class="section"><{heading}>{_e(title)}</{heading}>{body}</div>'


def render_subject(user_name: str, target_job_title: str, fit_percentage: int) -> str:
    subject = f"Personality Assessment Results - {user_name} ({target_job_title}) - {fit_percentage}% fit"
    # header values must stay on one line
    return " ".join(subject.split())


def render_score_bar(score: int) -> str:
    width = round(score / MAX_RATING * 100)
    return (
        '<div style="display: flex; align-items: center; gap: 10px;">'
        f"<span>{score}/{MAX_RATING}</span>"
        '<div style="width: 100px; height: 6px; background: #e5e7eb; border-radius: 3px; overflow: hidden;">'
        f'<div style="height: 100%; width: {width}%; '
        'background: linear-gradient(90deg, #ef4444, #f59e0b, #eab308, #22c55e, #10b981);"></div>'
        "</div></div>"
    )


def _fit_sections(report: JobFitReport, target_job_title: str) -> str:
    level = fit_level(report.fit_percentage)
    alternatives = "".join(
        '<div class="alternative">'
        f"<h4>{_e(position.title)}</h4>"
        f'<p><strong><span class="alt-fit">{position.fit_percentage}</span>% fit</strong></p>'
        f"<p>{_e(position.reasoning)}</p>"
        "</div>"
        for position in report.alternative_positions
    )
    return "".join(
        [
            _section(
                "Job Fit Analysis",
                f'<div class="fit-score" style="background: {level.color};">'
                f'<div class="fit-percentage">{report.fit_percentage}%</div>'
                f"<div>{_e(level.label)}</div>"
                "</div>"
                f"<p>{_e(report.fit_reasoning)}</p>",
                heading="h2",
            ),
            _section(f"Strengths for {target_job_title}", f"<ul>{_list_items(report.strengths_for_role)}</ul>"),
            _section("Areas to Address", f"<ul>{_list_items(report.challenges_for_role)}</ul>"),
            _section("Alternative Position Recommendations", alternatives),
            _section("Interview Recommendations", f"<ul>{_list_items(report.interview_tips)}</ul>"),
            _section("Development Plan", f"<ul>{_list_items(report.development_plan)}</ul>"),
        ]
    )


def _personality_sections(personality: Archetype) -> str:
    return "".join(
        [
            _section(
                f"Personality Analysis: {personality.primary_type}",
                f"<p><strong>Description:</strong> {_e(personality.description)}</p>"
                f"<h3>Core Strengths</h3><ul>{_list_items(personality.strengths)}</ul>"
                f"<h3>Development Areas</h3><ul>{_list_items(personality.challenges)}</ul>",
                heading="h2",
            ),
            _section(
                "Work Style & Environment",
                f"<p><strong>Work Style:</strong> {_e(personality.work_style)}</p>"
                f"<p><strong>Communication Style:</strong> {_e(personality.communication_style)}</p>"
                f"<p><strong>Ideal Environment:</strong> {_e(personality.ideal_environment)}</p>"
                f"<p><strong>Leadership Style:</strong> {_e(personality.leadership_style)}</p>"
                f"<p><strong>Team Role:</strong> {_e(personality.team_role)}</p>",
                heading="h2",
            ),
            _section("Key Motivators", f"<ul>{_list_items(personality.motivators)}</ul>"),
            _section("Potential Stressors", f"<ul>{_list_items(personality.stressors)}</ul>"),
            _section("Career Suggestions", f"<ul>{_list_items(personality.career_suggestions)}</ul>"),
            _section("Growth Areas", f"<ul>{_list_items(personality.development_areas)}</ul>"),
        ]
    )


def _responses_section(ratings: Sequence[int]) -> str:
    items = "".join(
        '<div class="assessment-item">'
        f"<span><strong>{_e(term)}</strong></span>"
        f"{render_score_bar(ratings[index] if index < len(ratings) else 0)}"
        "</div>"
        for index, term in enumerate(ASSESSMENT_TERMS)
    )
    return _section(
        "Detailed Assessment Responses",
        "<p><strong>30-Term Personality Assessment Results</strong> (1 = Not very, 5 = Very)</p>"
        f'<div class="assessment-grid">{items}</div>',
        heading="h2",
    )


def render_assessment_html(
    submission: AssessmentSubmission,
    analysis: AssessmentAnalysis,
    *,
    generated_on: date | None = None,
) -> str:
    report = analysis.job_fit_analysis
    personality = analysis.personality
    generated = generated_on or date.today()

    candidate = _section(
        "Candidate Information",
        f"<p><strong>Name:</strong> {_e(submission.user_name)}</p>"
        f"<p><strong>Target Position:</strong> {_e(submission.target_job_title)}</p>"
        f"<p><strong>Current Role:</strong> {_e(submission.user_position or 'Not specified')}</p>"
        f"<p><strong>Assessment Date:</strong> {submission.assessment_date.isoformat()}</p>"
        f"<p><strong>Personality Type:</strong> {_e(personality.primary_type if personality else 'Not available')}</p>"
        f"<p><strong>AI Enhanced:</strong> {'Yes' if analysis.enhanced else 'No'}</p>",
        heading="h2",
    )

    parts = [candidate, _fit_sections(report, submission.target_job_title)]
    if personality is not None:
        parts.append(_personality_sections(personality))
    parts.append(_responses_section(submission.ratings))
    if personality is not None:
        parts.append(_section("HR Management Recommendations", f"<ul>{_list_items(personality.management_tips)}</ul>"))

    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>Personality Assessment Results</title>
    <style>{_STYLE}</style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Employee Personality Assessment Report</h1>
            <p>Job Fit Evaluation</p>
            <p><strong>Confidential HR Document</strong></p>
        </div>
        <div class="content">
            {"".join(parts)}
        </div>
        <div class="footer">
            <p><strong>Employee Management System - Personality Assessment Tool</strong></p>
            <p>Generated on {generated.isoformat()}</p>
            <p>This assessment is confidential and intended for HR evaluation purposes only.</p>
        </div>
    </div>
</body>
</html>"""
