# resumerank/ats/models.py
import logging
from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, FrozenSet, Any, Iterable
from enum import Enum
from datetime import datetime

from resumerank.utils import round_half_up

logger = logging.getLogger(__name__)


CANONICAL_SECTIONS = (
    'summary', 'skills', 'experience', 'education', 'projects', 'certifications'
)


class RecommendationType(Enum):
    """How urgently a recommendation should be addressed"""
    CRITICAL = "critical"           # Must fix
    IMPORTANT = "important"         # Should fix
    SUGGESTION = "suggestion"       # Nice to have


class RecommendationCategory(Enum):
    """Area of the resume a recommendation targets"""
    KEYWORDS = "keywords"
    FORMATTING = "formatting"
    SECTIONS = "sections"
    CONTENT = "content"
    # Only used by externally sourced recommendations
    AI_ENHANCED = "ai_enhanced"
    ROLE_SPECIFIC = "role_specific"


RULE_BASED_CATEGORIES = frozenset({
    RecommendationCategory.KEYWORDS,
    RecommendationCategory.FORMATTING,
    RecommendationCategory.SECTIONS,
    RecommendationCategory.CONTENT,
})


class Impact(Enum):
    """Expected effect of applying a recommendation"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class JobProfile:
    """Target keywords and sections a resume is scored against"""
    id: str
    keywords: Tuple[str, ...]
    required_sections: FrozenSet[str]
    title: str = ""
    alignment_keywords: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'title': self.title,
            'keywords': list(self.keywords),
            'requiredSections': [s for s in CANONICAL_SECTIONS if s in self.required_sections],
        }


@dataclass
class KeywordAnalysis:
    """Result of matching profile keywords against resume text"""
    matched: List[str]
    missing: List[str]
    density: float                 # base density + frequency bonus, unclamped
    relevance_score: int           # 0-100

    def to_dict(self) -> Dict[str, Any]:
        return {
            'matched': list(self.matched),
            'missing': list(self.missing),
            'density': self.density,
            'relevanceScore': self.relevance_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'KeywordAnalysis':
        return cls(
            matched=list(data.get('matched', [])),
            missing=list(data.get('missing', [])),
            density=float(data.get('density', 0.0)),
            relevance_score=round_half_up(float(data.get('relevanceScore', 0))),
        )


@dataclass
class SectionAnalysis:
    """Presence of each canonical section plus a completeness score"""
    summary: bool = False
    skills: bool = False
    experience: bool = False
    education: bool = False
    projects: bool = False
    certifications: bool = False
    completeness_score: int = 0    # 0-100

    def is_present(self, section: str) -> bool:
        return bool(getattr(self, section, False))

    @property
    def present_sections(self) -> List[str]:
        return [s for s in CANONICAL_SECTIONS if self.is_present(s)]

    def to_dict(self) -> Dict[str, Any]:
        data = {section: self.is_present(section) for section in CANONICAL_SECTIONS}
        data['completenessScore'] = self.completeness_score
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SectionAnalysis':
        flags = {section: bool(data.get(section, False)) for section in CANONICAL_SECTIONS}
        return cls(completeness_score=round_half_up(float(data.get('completenessScore', 0))), **flags)


@dataclass
class ATSScore:
    """Overall and component scores, each 0-100"""
    overall: int
    keyword_match: int
    formatting: int
    section_completeness: int
    readability: int

    @property
    def grade(self) -> str:
        """Get score band"""
        if self.overall >= 85:
            return "excellent"
        elif self.overall >= 70:
            return "good"
        elif self.overall >= 50:
            return "fair"
        else:
            return "poor"

    def to_dict(self) -> Dict[str, int]:
        return {
            'overall': self.overall,
            'keywordMatch': self.keyword_match,
            'formatting': self.formatting,
            'sectionCompleteness': self.section_completeness,
            'readability': self.readability,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ATSScore':
        return cls(
            overall=round_half_up(float(data['overall'])),
            keyword_match=round_half_up(float(data['keywordMatch'])),
            formatting=round_half_up(float(data['formatting'])),
            section_completeness=round_half_up(float(data['sectionCompleteness'])),
            readability=round_half_up(float(data['readability'])),
        )


@dataclass(frozen=True)
class Recommendation:
    """Improvement suggestion produced by the rule engine"""
    type: RecommendationType
    category: RecommendationCategory
    title: str
    description: str
    impact: Impact

    @property
    def is_critical(self) -> bool:
        return self.type == RecommendationType.CRITICAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'category': self.category.value,
            'title': self.title,
            'description': self.description,
            'impact': self.impact.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Recommendation':
        """Rebuild a recommendation, keeping provenance of AI-sourced records"""
        if 'aiGenerated' in data or 'confidence' in data:
            return ExternalRecommendation.from_dict(data)

        return cls(
            type=RecommendationType(data['type']),
            category=RecommendationCategory(data['category']),
            title=data['title'],
            description=data['description'],
            impact=Impact(data['impact']),
        )


@dataclass(frozen=True)
class ExternalRecommendation(Recommendation):
    """Recommendation supplied by a collaborator such as an LLM"""
    confidence: float = 0.0        # 0.0 to 1.0
    ai_generated: bool = True

    REQUIRED_FIELDS = ('type', 'category', 'title', 'description', 'impact')

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['confidence'] = self.confidence
        data['aiGenerated'] = self.ai_generated
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExternalRecommendation':
        """
        Validate an externally generated record

        Raises:
            ValueError: if a required field is missing, blank or not a known value
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a mapping, got {type(data).__name__}")

        missing = [f for f in cls.REQUIRED_FIELDS if not data.get(f)]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        try:
            confidence = float(data.get('confidence', 0.0))
        except (TypeError, ValueError):
            raise ValueError(f"Invalid confidence: {data.get('confidence')!r}")

        return cls(
            type=RecommendationType(str(data['type']).lower()),
            category=RecommendationCategory(str(data['category']).lower()),
            title=str(data['title']).strip(),
            description=str(data['description']).strip(),
            impact=Impact(str(data['impact']).lower()),
            confidence=min(max(confidence, 0.0), 1.0),
            ai_generated=bool(data.get('aiGenerated', data.get('ai_generated', True))),
        )


def coerce_external_recommendations(items: Optional[Iterable[Any]]) -> List[Recommendation]:
    """
    Validate externally supplied recommendations, dropping malformed ones

    Accepts Recommendation instances as-is and mappings via
    ExternalRecommendation.from_dict.
    """
    if not items:
        return []

    accepted = []
    for item in items:
        if isinstance(item, Recommendation):
            accepted.append(item)
            continue

        try:
            accepted.append(ExternalRecommendation.from_dict(item))
        except ValueError as e:
            logger.warning(f"Dropping external recommendation: {e}")

    return accepted


@dataclass
class AnalysisResult:
    """Complete analysis of one resume against one job profile"""
    candidate_id: str
    candidate_name: str
    candidate_role: str
    ats_score: ATSScore
    keyword_analysis: KeywordAnalysis
    section_analysis: SectionAnalysis
    recommendations: List[Recommendation] = field(default_factory=list)

    # Set by the ranker only
    rank: Optional[int] = None
    ranking_score: Optional[int] = None

    # Metadata
    analysis_date: datetime = field(default_factory=datetime.now)
    version: int = 2

    @property
    def critical_count(self) -> int:
        return sum(1 for rec in self.recommendations if rec.is_critical)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'candidateId': self.candidate_id,
            'candidateName': self.candidate_name,
            'candidateRole': self.candidate_role,
            'atsScore': self.ats_score.to_dict(),
            'keywordAnalysis': self.keyword_analysis.to_dict(),
            'sectionAnalysis': self.section_analysis.to_dict(),
            'recommendations': [rec.to_dict() for rec in self.recommendations],
            'analysisDate': self.analysis_date.isoformat(),
            'version': self.version,
        }
        if self.rank is not None:
            data['rank'] = self.rank
        if self.ranking_score is not None:
            data['rankingScore'] = self.ranking_score
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnalysisResult':
        analysis_date = data.get('analysisDate')
        if isinstance(analysis_date, str):
            analysis_date = datetime.fromisoformat(analysis_date)

        return cls(
            candidate_id=data['candidateId'],
            candidate_name=data['candidateName'],
            candidate_role=data['candidateRole'],
            ats_score=ATSScore.from_dict(data['atsScore']),
            keyword_analysis=KeywordAnalysis.from_dict(data['keywordAnalysis']),
            section_analysis=SectionAnalysis.from_dict(data['sectionAnalysis']),
            recommendations=[
                Recommendation.from_dict(rec) for rec in data.get('recommendations', [])
            ],
            rank=data.get('rank'),
            ranking_score=data.get('rankingScore'),
            analysis_date=analysis_date or datetime.now(),
            version=int(data.get('version', 2)),
        )
