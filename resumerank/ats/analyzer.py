# resumerank/ats/analyzer.py
import uuid
import random
import logging
from typing import Any, Callable, Iterable, List, Optional
from collections import defaultdict
from datetime import datetime

from resumerank.ats.models import (
    AnalysisResult, JobProfile, Recommendation,
    RecommendationType, CANONICAL_SECTIONS, coerce_external_recommendations
)
from resumerank.ats.job_profiles import JobProfileRegistry
from resumerank.ats.keyword_extractor import KeywordExtractor
from resumerank.ats.matcher import KeywordMatcher
from resumerank.ats.sections import SectionDetector
from resumerank.ats.scorer import (
    ScoringStrategy, WEIGHTED_STRATEGY,
    FormattingScorer, ReadabilityScorer, ScoreComposer
)
from resumerank.ats.recommendations import RecommendationGenerator

logger = logging.getLogger(__name__)


def _new_candidate_id() -> str:
    return uuid.uuid4().hex


class ATSAnalyzer:
    """
    Score one resume against a job profile and produce recommendations
    """

    def __init__(
        self,
        registry: Optional[JobProfileRegistry] = None,
        strategy: Optional[ScoringStrategy] = None,
        rng: Optional[random.Random] = None,
        max_extracted_keywords: int = 15,
        max_missing_keywords: int = 5,
        id_factory: Callable[[], str] = _new_candidate_id
    ):
        """
        Args:
            registry: Job profile catalog
            strategy: Scoring variant (defaults to weighted)
            rng: Randomness source for strategies with jitter
            max_extracted_keywords: Keywords taken from a custom job description
            max_missing_keywords: Missing keywords named in recommendations
            id_factory: Generates candidate ids
        """
        self.registry = registry or JobProfileRegistry()
        self.strategy = strategy or WEIGHTED_STRATEGY
        self.id_factory = id_factory

        self.keyword_extractor = KeywordExtractor(top_n=max_extracted_keywords)
        self.keyword_matcher = KeywordMatcher()
        self.section_detector = SectionDetector(strategy=self.strategy)
        self.formatting_scorer = FormattingScorer()
        self.readability_scorer = ReadabilityScorer()
        self.composer = ScoreComposer(strategy=self.strategy, rng=rng)
        self.recommender = RecommendationGenerator(max_missing_keywords=max_missing_keywords)

    @classmethod
    def from_config(cls, config, rng: Optional[random.Random] = None) -> 'ATSAnalyzer':
        return cls(
            registry=config.build_registry(),
            strategy=config.build_strategy(),
            rng=rng,
            max_extracted_keywords=config.max_extracted_keywords,
            max_missing_keywords=config.max_missing_keywords,
        )

    def resolve_profile(
        self,
        profile_id: Optional[str] = None,
        custom_job_description: Optional[str] = None
    ) -> JobProfile:
        """A custom job description wins over a profile id"""
        if custom_job_description and custom_job_description.strip():
            return self.keyword_extractor.build_profile(custom_job_description)
        return self.registry.resolve(profile_id)

    def analyze(
        self,
        resume_text: str,
        candidate_name: str,
        candidate_role: str,
        profile_id: Optional[str] = None,
        custom_job_description: Optional[str] = None,
        external_recommendations: Optional[Iterable[Any]] = None
    ) -> AnalysisResult:
        """
        Analyze a resume

        Args:
            resume_text: Plain resume text
            candidate_name: Candidate display name
            candidate_role: Candidate's current or target role
            profile_id: Registry id (unknown ids fall back to the default)
            custom_job_description: Free-text JD, overrides profile_id
            external_recommendations: Extra records appended after rule output

        Returns:
            AnalysisResult with a fresh candidate id
        """
        profile = self.resolve_profile(profile_id, custom_job_description)
        logger.info(f"Analyzing resume for {candidate_name} against '{profile.id}'")

        keyword_analysis = self.keyword_matcher.match_keywords(resume_text, profile.keywords)
        section_analysis = self.section_detector.detect_sections(
            resume_text, profile.required_sections
        )
        formatting_score = self.formatting_scorer.score(resume_text)
        readability_score = self.readability_scorer.score(resume_text)

        ats_score = self.composer.compose(
            keyword_analysis, section_analysis, formatting_score, readability_score
        )

        recommendations = self.recommender.generate(
            keyword_analysis, section_analysis, formatting_score, readability_score
        )

        external = coerce_external_recommendations(external_recommendations)
        if external:
            logger.info(f"Appending {len(external)} external recommendations")
            recommendations = recommendations + external

        result = AnalysisResult(
            candidate_id=self.id_factory(),
            candidate_name=candidate_name,
            candidate_role=candidate_role,
            ats_score=ats_score,
            keyword_analysis=keyword_analysis,
            section_analysis=section_analysis,
            recommendations=recommendations,
            analysis_date=datetime.now(),
            version=self.strategy.version
        )

        logger.info(f"ATS Score: {ats_score.overall}/100 ({ats_score.grade})")
        return result

    def generate_report(self, result: AnalysisResult) -> str:
        """
        Generate human-readable analysis report

        Returns:
            Formatted report string
        """
        score = result.ats_score
        keywords = result.keyword_analysis
        lines = []

        lines.append("=" * 70)
        lines.append(f"ATS ANALYSIS REPORT - {result.candidate_name}")
        lines.append("=" * 70)
        lines.append("")

        if result.candidate_role:
            lines.append(f"Role: {result.candidate_role}")
        if result.rank is not None:
            lines.append(f"Rank: #{result.rank}")
        lines.append(f"Overall ATS Score: {score.overall}/100 ({score.grade})")
        lines.append("")

        lines.append("Component Scores:")
        lines.append(f"  Keywords:     {score.keyword_match}/100")
        lines.append(f"  Sections:     {score.section_completeness}/100")
        lines.append(f"  Formatting:   {score.formatting}/100")
        lines.append(f"  Readability:  {score.readability}/100")
        lines.append("")

        total = len(keywords.matched) + len(keywords.missing)
        lines.append(f"Keyword Matching: {len(keywords.matched)}/{total}")
        if keywords.matched:
            lines.append(f"  Matched: {', '.join(keywords.matched)}")
        if keywords.missing:
            lines.append(f"  Missing: {', '.join(keywords.missing)}")
        lines.append("")

        sections = result.section_analysis
        lines.append("Sections:")
        for section in CANONICAL_SECTIONS:
            mark = '✓' if sections.is_present(section) else '✗'
            lines.append(f"  {mark} {section}")
        lines.append("")

        by_type = defaultdict(list)
        for rec in result.recommendations:
            by_type[rec.type].append(rec)

        for rec_type in RecommendationType:
            recs: List[Recommendation] = by_type.get(rec_type, [])
            if not recs:
                continue

            lines.append(f"{rec_type.value.upper()} ({len(recs)} items):")
            lines.append("-" * 70)
            for i, rec in enumerate(recs, 1):
                lines.append(f"{i}. {rec.title} [{rec.category.value}]")
                lines.append(f"   → {rec.description}")
                lines.append(f"   Impact: {rec.impact.value}")
                lines.append("")

        lines.append("=" * 70)

        return "\n".join(lines)
