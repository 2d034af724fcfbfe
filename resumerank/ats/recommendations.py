# resumerank/ats/recommendations.py
import logging
from typing import List

from resumerank.ats.models import (
    KeywordAnalysis, SectionAnalysis, Recommendation,
    RecommendationType, RecommendationCategory, Impact
)

logger = logging.getLogger(__name__)


class RecommendationGenerator:
    """
    Rule table mapping analysis thresholds to improvement suggestions

    Rules are evaluated in a fixed order and every applicable rule fires;
    output order is rule order.
    """

    CRITICAL_RELEVANCE = 60
    TARGET_RELEVANCE = 80
    MIN_FORMATTING = 70
    MIN_READABILITY = 70

    def __init__(self, max_missing_keywords: int = 5):
        """
        Args:
            max_missing_keywords: How many missing keywords to name
        """
        self.max_missing_keywords = max_missing_keywords

    def generate(
        self,
        keyword_analysis: KeywordAnalysis,
        section_analysis: SectionAnalysis,
        formatting_score: int,
        readability_score: int
    ) -> List[Recommendation]:
        """
        Generate recommendations

        Returns:
            Recommendations in rule order (not sorted by severity)
        """
        recommendations = []

        recommendations.extend(self._keyword_rules(keyword_analysis))
        recommendations.extend(self._section_rules(section_analysis))
        recommendations.extend(self._formatting_rules(formatting_score))
        recommendations.extend(self._readability_rules(readability_score))

        logger.info(f"Generated {len(recommendations)} recommendations")
        return recommendations

    def _keyword_rules(self, keyword_analysis: KeywordAnalysis) -> List[Recommendation]:
        recommendations = []

        if keyword_analysis.relevance_score < self.CRITICAL_RELEVANCE:
            missing = keyword_analysis.missing[:self.max_missing_keywords]
            recommendations.append(Recommendation(
                type=RecommendationType.CRITICAL,
                category=RecommendationCategory.KEYWORDS,
                title="Add Missing Keywords",
                description=f"Include {', '.join(missing)} to improve keyword matching",
                impact=Impact.HIGH
            ))

        # Independent of the rule above; both may fire
        if keyword_analysis.relevance_score < self.TARGET_RELEVANCE:
            recommendations.append(Recommendation(
                type=RecommendationType.IMPORTANT,
                category=RecommendationCategory.KEYWORDS,
                title="Optimize Keyword Density",
                description="Naturally incorporate more relevant keywords throughout your resume",
                impact=Impact.MEDIUM
            ))

        return recommendations

    def _section_rules(self, section_analysis: SectionAnalysis) -> List[Recommendation]:
        recommendations = []

        if not section_analysis.summary:
            recommendations.append(Recommendation(
                type=RecommendationType.CRITICAL,
                category=RecommendationCategory.SECTIONS,
                title="Add Professional Summary",
                description="Include a compelling summary section at the top of your resume",
                impact=Impact.HIGH
            ))

        if not section_analysis.skills:
            recommendations.append(Recommendation(
                type=RecommendationType.IMPORTANT,
                category=RecommendationCategory.SECTIONS,
                title="Add Skills Section",
                description="Create a dedicated skills section highlighting your technical and soft skills",
                impact=Impact.HIGH
            ))

        if not section_analysis.projects:
            recommendations.append(Recommendation(
                type=RecommendationType.SUGGESTION,
                category=RecommendationCategory.SECTIONS,
                title="Include Projects",
                description="Add a projects section to showcase your practical experience",
                impact=Impact.MEDIUM
            ))

        return recommendations

    def _formatting_rules(self, formatting_score: int) -> List[Recommendation]:
        if formatting_score >= self.MIN_FORMATTING:
            return []

        return [Recommendation(
            type=RecommendationType.IMPORTANT,
            category=RecommendationCategory.FORMATTING,
            title="Improve Formatting",
            description="Use consistent formatting, bullet points, and clear section headers",
            impact=Impact.MEDIUM
        )]

    def _readability_rules(self, readability_score: int) -> List[Recommendation]:
        if readability_score >= self.MIN_READABILITY:
            return []

        return [Recommendation(
            type=RecommendationType.SUGGESTION,
            category=RecommendationCategory.CONTENT,
            title="Enhance Readability",
            description="Use shorter sentences and bullet points for better readability",
            impact=Impact.LOW
        )]
