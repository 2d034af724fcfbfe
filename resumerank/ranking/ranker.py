# resumerank/ranking/ranker.py
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from resumerank.ats.models import AnalysisResult
from resumerank.ats.job_profiles import JobProfileRegistry

logger = logging.getLogger(__name__)


class Ranker:
    """
    Order a batch of analyses by a ranking score derived from the ATS score
    """

    CORE_SECTIONS = ('summary', 'skills', 'experience', 'education')

    CRITICAL_PENALTY = 3
    ROLE_ALIGNMENT_BONUS = 3

    def __init__(self, registry: Optional[JobProfileRegistry] = None):
        """
        Args:
            registry: Supplies per-profile role alignment keywords
        """
        self.registry = registry or JobProfileRegistry()

    def rank(
        self,
        results: Sequence[AnalysisResult],
        profile_id: Optional[str] = None
    ) -> List[AnalysisResult]:
        """
        Rank analyses, best first

        Sorting is stable, so equal ranking scores keep input order. Ranks are
        1..N with no gaps. Input objects are not modified.

        Args:
            results: Analyses of one batch
            profile_id: Enables the role alignment bonus when given

        Returns:
            New AnalysisResult objects with rank and ranking_score set
        """
        logger.info(f"Ranking {len(results)} candidates")

        scored = [
            (self.calculate_ranking_score(result, profile_id), result)
            for result in results
        ]
        scored.sort(key=lambda item: item[0], reverse=True)

        ranked = [
            replace(result, rank=index + 1, ranking_score=score)
            for index, (score, result) in enumerate(scored)
        ]

        if ranked:
            logger.info(f"Top candidate: {ranked[0].candidate_name} ({ranked[0].ranking_score})")
        return ranked

    def calculate_ranking_score(
        self,
        result: AnalysisResult,
        profile_id: Optional[str] = None
    ) -> int:
        """
        Ranking score (0-100)

        Scoring:
        - Base: overall ATS score
        - Keyword density > 0.7: +10, > 0.5: +5
        - Section completeness > 90: +8, > 80: +4
        - Summary, skills, experience and education all present: +5
        - Critical recommendations: -3 each
        - Role or name mentions a profile alignment keyword: +3
        """
        score = result.ats_score.overall

        density = result.keyword_analysis.density
        if density > 0.7:
            score += 10
        elif density > 0.5:
            score += 5

        completeness = result.section_analysis.completeness_score
        if completeness > 90:
            score += 8
        elif completeness > 80:
            score += 4

        if all(result.section_analysis.is_present(s) for s in self.CORE_SECTIONS):
            score += 5

        score -= result.critical_count * self.CRITICAL_PENALTY

        if profile_id and self._is_role_aligned(result, profile_id):
            score += self.ROLE_ALIGNMENT_BONUS

        return max(0, min(100, score))

    def _is_role_aligned(self, result: AnalysisResult, profile_id: str) -> bool:
        profile = self.registry.get(profile_id)
        if profile is None:
            return False

        candidate_text = f"{result.candidate_role} {result.candidate_name}".lower()
        return any(keyword in candidate_text for keyword in profile.alignment_keywords)
