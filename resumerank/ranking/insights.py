# resumerank/ranking/insights.py
import logging
from collections import Counter
from typing import List, Sequence

from resumerank.ats.models import AnalysisResult
from resumerank.ranking.models import RankingInsights, ScoreDistribution
from resumerank.utils import round_half_up

logger = logging.getLogger(__name__)


class InsightAggregator:
    """
    Summarize a ranked batch: top performers, recurring issues, distribution
    """

    EXCELLENT = 85
    GOOD = 70
    FAIR = 50

    MAX_TOP_PERFORMERS = 3
    MAX_COMMON_ISSUES = 5
    COMMON_ISSUE_SHARE = 0.3   # issue must appear in more than 30% of the batch

    def aggregate(self, ranked_results: Sequence[AnalysisResult]) -> RankingInsights:
        """
        Compute insights for a ranked batch

        An empty batch yields empty collections and a zero average.
        """
        if not ranked_results:
            return RankingInsights()

        total = len(ranked_results)

        top_performers = [
            r.candidate_name for r in ranked_results
            if r.ats_score.overall >= self.EXCELLENT
        ][:self.MAX_TOP_PERFORMERS]

        common_issues = self._common_issues(ranked_results)
        distribution = self._distribution(ranked_results)
        average_score = round_half_up(
            sum(r.ats_score.overall for r in ranked_results) / total
        )

        improvement_areas = self._improvement_areas(distribution, common_issues, total)

        logger.info(f"Batch of {total}: average {average_score}, distribution {distribution.to_dict()}")
        return RankingInsights(
            top_performers=top_performers,
            common_issues=common_issues,
            improvement_areas=improvement_areas,
            average_score=average_score,
            score_distribution=distribution
        )

    def _common_issues(self, ranked_results: Sequence[AnalysisResult]) -> List[str]:
        counts = Counter(
            (rec.category.value, rec.title)
            for result in ranked_results
            for rec in result.recommendations
        )

        threshold = len(ranked_results) * self.COMMON_ISSUE_SHARE
        return [
            title
            for (_, title), count in counts.most_common(self.MAX_COMMON_ISSUES)
            if count > threshold
        ]

    def _distribution(self, ranked_results: Sequence[AnalysisResult]) -> ScoreDistribution:
        distribution = ScoreDistribution()

        for result in ranked_results:
            score = result.ats_score.overall
            if score >= self.EXCELLENT:
                distribution.excellent += 1
            elif score >= self.GOOD:
                distribution.good += 1
            elif score >= self.FAIR:
                distribution.fair += 1
            else:
                distribution.poor += 1

        return distribution

    def _improvement_areas(
        self,
        distribution: ScoreDistribution,
        common_issues: List[str],
        total: int
    ) -> List[str]:
        areas = []

        if distribution.poor > 0:
            areas.append('Focus on improving keyword matching and section completeness')
        if distribution.fair > total * 0.5:
            areas.append('Consider adding more industry-specific keywords')
        if any('formatting' in issue.lower() for issue in common_issues):
            areas.append('Improve resume formatting and structure')

        return areas
