"""Tests for the recommendation rule table."""

import pytest

from resumerank.ats.models import (
    KeywordAnalysis, SectionAnalysis, RecommendationType, RecommendationCategory, Impact,
    RULE_BASED_CATEGORIES
)
from resumerank.ats.recommendations import RecommendationGenerator


ALL_SECTIONS = dict(
    summary=True, skills=True, experience=True,
    education=True, projects=True, certifications=True
)


def keywords(relevance, missing=()):
    return KeywordAnalysis(matched=[], missing=list(missing), density=0.0, relevance_score=relevance)


class TestRecommendationGenerator:
    """Tests for RecommendationGenerator.generate."""

    @pytest.fixture
    def generator(self):
        return RecommendationGenerator()

    def test_strong_resume_has_no_recommendations(self, generator):
        """Test nothing fires when every threshold is met."""
        recs = generator.generate(
            keywords(85), SectionAnalysis(completeness_score=90, **ALL_SECTIONS), 100, 100
        )
        assert recs == []

    def test_rule_order(self, generator):
        """Test all rules fire in a fixed order for a weak resume."""
        recs = generator.generate(keywords(10, ['Python']), SectionAnalysis(), 40, 50)

        assert [r.title for r in recs] == [
            "Add Missing Keywords",
            "Optimize Keyword Density",
            "Add Professional Summary",
            "Add Skills Section",
            "Include Projects",
            "Improve Formatting",
            "Enhance Readability",
        ]
        assert [r.type for r in recs] == [
            RecommendationType.CRITICAL,
            RecommendationType.IMPORTANT,
            RecommendationType.CRITICAL,
            RecommendationType.IMPORTANT,
            RecommendationType.SUGGESTION,
            RecommendationType.IMPORTANT,
            RecommendationType.SUGGESTION,
        ]
        assert all(r.category in RULE_BASED_CATEGORIES for r in recs)

    def test_missing_keywords_truncated(self, generator):
        """Test only the first five missing keywords are named."""
        missing = ['A', 'B', 'C', 'D', 'E', 'F', 'G']
        recs = generator.generate(
            keywords(20, missing), SectionAnalysis(**ALL_SECTIONS), 100, 100
        )

        assert recs[0].description == "Include A, B, C, D, E to improve keyword matching"
        assert recs[0].category == RecommendationCategory.KEYWORDS
        assert recs[0].impact == Impact.HIGH

    def test_only_density_rule_between_thresholds(self, generator):
        """Test relevance between 60 and 80 only triggers the density rule."""
        recs = generator.generate(keywords(70), SectionAnalysis(**ALL_SECTIONS), 100, 100)

        assert [r.title for r in recs] == ["Optimize Keyword Density"]

    def test_thresholds_are_strict(self, generator):
        """Test scores exactly at the thresholds do not fire."""
        recs = generator.generate(keywords(80), SectionAnalysis(**ALL_SECTIONS), 70, 70)

        assert recs == []

    def test_configurable_missing_keyword_count(self):
        """Test the number of named keywords is configurable."""
        generator = RecommendationGenerator(max_missing_keywords=2)
        recs = generator.generate(
            keywords(0, ['Python', 'AWS', 'Docker']), SectionAnalysis(**ALL_SECTIONS), 100, 100
        )

        assert recs[0].description == "Include Python, AWS to improve keyword matching"
