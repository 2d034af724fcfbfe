# resumerank/ats/__init__.py
"""
ATS (Applicant Tracking System) scoring of resume text against job profiles
"""

from resumerank.ats.models import (
    JobProfile, KeywordAnalysis, SectionAnalysis, ATSScore,
    Recommendation, ExternalRecommendation, AnalysisResult,
    RecommendationType, RecommendationCategory, Impact
)
from resumerank.ats.job_profiles import JobProfileRegistry
from resumerank.ats.keyword_extractor import KeywordExtractor
from resumerank.ats.matcher import KeywordMatcher
from resumerank.ats.scorer import (
    ScoringStrategy, FormattingScorer, ReadabilityScorer, ScoreComposer, get_strategy
)
from resumerank.ats.sections import SectionDetector
from resumerank.ats.recommendations import RecommendationGenerator
from resumerank.ats.analyzer import ATSAnalyzer

__all__ = [
    'JobProfile',
    'KeywordAnalysis',
    'SectionAnalysis',
    'ATSScore',
    'Recommendation',
    'ExternalRecommendation',
    'AnalysisResult',
    'RecommendationType',
    'RecommendationCategory',
    'Impact',
    'JobProfileRegistry',
    'KeywordExtractor',
    'KeywordMatcher',
    'ScoringStrategy',
    'FormattingScorer',
    'ReadabilityScorer',
    'ScoreComposer',
    'get_strategy',
    'SectionDetector',
    'RecommendationGenerator',
    'ATSAnalyzer',
]
