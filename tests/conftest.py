"""Shared fixtures for resumerank tests."""

import pytest

from resumerank.ats.models import (
    AnalysisResult, ATSScore, KeywordAnalysis, SectionAnalysis,
    Recommendation, RecommendationType, RecommendationCategory, Impact
)


SAMPLE_RESUME = """Jane Doe
Senior Software Engineer

PROFESSIONAL SUMMARY
Software engineer with 8 years of experience building web platforms in Python and JavaScript.

SKILLS
Python, JavaScript, TypeScript, React, Node.js, Docker, AWS, Git, PostgreSQL, REST, GraphQL

EXPERIENCE
Acme Corp, Senior Engineer, 2019 - 2024
• Led a team of 5 engineers delivering REST and GraphQL APIs on AWS.
• Managed CI/CD pipelines with Docker and Git for 40 services.
• Achieved 30% faster deployments through automated testing.

EDUCATION
Bachelor of Science in Computer Science, State University, graduated 2016

PROJECTS
• Developed an open source React component library used by 200 teams.
• Built a PostgreSQL migration tool in Python.

CERTIFICATIONS
AWS Certified Solutions Architect
"""

WEAK_RESUME = "Experienced engineer skilled in JavaScript and React. \n• Built APIs\n• Led team"


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME


@pytest.fixture
def weak_resume():
    return WEAK_RESUME


def critical_recommendation(title="Add Missing Keywords"):
    return Recommendation(
        type=RecommendationType.CRITICAL,
        category=RecommendationCategory.KEYWORDS,
        title=title,
        description="Include Python to improve keyword matching",
        impact=Impact.HIGH
    )


def formatting_recommendation():
    return Recommendation(
        type=RecommendationType.IMPORTANT,
        category=RecommendationCategory.FORMATTING,
        title="Improve Formatting",
        description="Use consistent formatting, bullet points, and clear section headers",
        impact=Impact.MEDIUM
    )


@pytest.fixture
def make_result():
    """Factory for AnalysisResult objects with controllable scores"""

    def _make(
        name="Candidate",
        overall=50,
        density=0.0,
        completeness=0,
        sections=(),
        recommendations=(),
        role="",
    ):
        return AnalysisResult(
            candidate_id=f"id-{name}",
            candidate_name=name,
            candidate_role=role,
            ats_score=ATSScore(
                overall=overall,
                keyword_match=0,
                formatting=0,
                section_completeness=completeness,
                readability=0
            ),
            keyword_analysis=KeywordAnalysis(
                matched=[], missing=[], density=density, relevance_score=0
            ),
            section_analysis=SectionAnalysis(
                completeness_score=completeness,
                **{section: True for section in sections}
            ),
            recommendations=list(recommendations),
        )

    return _make
