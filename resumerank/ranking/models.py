# resumerank/ranking/models.py
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
from datetime import datetime

from resumerank.ats.models import AnalysisResult


@dataclass
class ScoreDistribution:
    """Batch counts per overall-score band"""
    excellent: int = 0   # 85+
    good: int = 0        # 70-84
    fair: int = 0        # 50-69
    poor: int = 0        # <50

    @property
    def total(self) -> int:
        return self.excellent + self.good + self.fair + self.poor

    def to_dict(self) -> Dict[str, int]:
        return {
            'excellent': self.excellent,
            'good': self.good,
            'fair': self.fair,
            'poor': self.poor,
        }


@dataclass
class RankingInsights:
    """Pool-level statistics over a ranked batch"""
    top_performers: List[str] = field(default_factory=list)
    common_issues: List[str] = field(default_factory=list)
    improvement_areas: List[str] = field(default_factory=list)
    average_score: int = 0
    score_distribution: ScoreDistribution = field(default_factory=ScoreDistribution)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'topPerformers': list(self.top_performers),
            'commonIssues': list(self.common_issues),
            'improvementAreas': list(self.improvement_areas),
            'averageScore': self.average_score,
            'scoreDistribution': self.score_distribution.to_dict(),
        }


@dataclass
class ResumeSubmission:
    """One resume handed over by the upload collaborator"""
    resume_text: str
    candidate_name: str
    candidate_role: str = ""
    source: Optional[str] = None   # e.g. file path, for logging only


@dataclass
class RankingReport:
    """Ranked batch plus insights"""
    ranked_results: List[AnalysisResult]
    insights: RankingInsights
    dropped: List[str] = field(default_factory=list)
    ranking_date: datetime = field(default_factory=datetime.now)

    @property
    def total_resumes(self) -> int:
        return len(self.ranked_results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rankedAnalyses': [r.to_dict() for r in self.ranked_results],
            'insights': self.insights.to_dict(),
            'totalResumes': self.total_resumes,
            'dropped': list(self.dropped),
            'rankingDate': self.ranking_date.isoformat(),
        }
