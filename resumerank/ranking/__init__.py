# resumerank/ranking/__init__.py
"""
Batch ranking of ATS analyses and pool-level insights
"""

from resumerank.ranking.models import (
    ScoreDistribution, RankingInsights, ResumeSubmission, RankingReport
)
from resumerank.ranking.ranker import Ranker
from resumerank.ranking.insights import InsightAggregator
from resumerank.ranking.batch import BatchRanker

__all__ = [
    'ScoreDistribution',
    'RankingInsights',
    'ResumeSubmission',
    'RankingReport',
    'Ranker',
    'InsightAggregator',
    'BatchRanker',
]
