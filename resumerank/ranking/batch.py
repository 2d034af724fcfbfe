# resumerank/ranking/batch.py
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed, TimeoutError as FuturesTimeout
from typing import Any, Dict, List, Optional, Sequence

from resumerank.config import EngineConfig
from resumerank.ats.analyzer import ATSAnalyzer
from resumerank.ats.models import AnalysisResult
from resumerank.ranking.models import ResumeSubmission, RankingReport
from resumerank.ranking.ranker import Ranker
from resumerank.ranking.insights import InsightAggregator

logger = logging.getLogger(__name__)


class BatchRanker:
    """
    Analyze many resumes in parallel, then rank and aggregate the batch

    Analysis is the parallel map step; ranking and insights need the whole
    batch and run afterwards on the calling thread.
    """

    def __init__(
        self,
        analyzer: Optional[ATSAnalyzer] = None,
        ranker: Optional[Ranker] = None,
        aggregator: Optional[InsightAggregator] = None,
        max_workers: int = 4,
        timeout_seconds: Optional[float] = None
    ):
        """
        Args:
            analyzer: Per-resume analyzer
            ranker: Batch ranker
            aggregator: Insight aggregator
            max_workers: Number of parallel analysis workers
            timeout_seconds: Budget for the whole map step (None = unlimited)
        """
        self.analyzer = analyzer or ATSAnalyzer()
        self.ranker = ranker or Ranker(self.analyzer.registry)
        self.aggregator = aggregator or InsightAggregator()
        self.max_workers = max_workers
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config: EngineConfig) -> 'BatchRanker':
        analyzer = ATSAnalyzer.from_config(config)
        return cls(
            analyzer=analyzer,
            ranker=Ranker(analyzer.registry),
            max_workers=config.max_workers,
            timeout_seconds=config.timeout_seconds,
        )

    def run(
        self,
        submissions: Sequence[ResumeSubmission],
        profile_id: Optional[str] = None,
        custom_job_description: Optional[str] = None,
        external_recommendations: Optional[Dict[str, List[Any]]] = None
    ) -> RankingReport:
        """
        Analyze, rank and aggregate a batch

        Args:
            submissions: Resumes to score
            profile_id: Registry id for every resume
            custom_job_description: Free-text JD, overrides profile_id
            external_recommendations: Extra recommendations keyed by candidate name

        Returns:
            RankingReport; failed or timed-out submissions are listed in dropped
        """
        logger.info(f"Analyzing batch of {len(submissions)} resumes")

        results, dropped = self.analyze_all(
            submissions, profile_id, custom_job_description, external_recommendations
        )

        # Alignment bonus only applies to registry profiles
        rank_profile = None if custom_job_description else profile_id
        ranked = self.ranker.rank(results, rank_profile)
        insights = self.aggregator.aggregate(ranked)

        return RankingReport(ranked_results=ranked, insights=insights, dropped=dropped)

    def analyze_all(
        self,
        submissions: Sequence[ResumeSubmission],
        profile_id: Optional[str] = None,
        custom_job_description: Optional[str] = None,
        external_recommendations: Optional[Dict[str, List[Any]]] = None
    ):
        """
        Parallel map step

        Returns:
            (results in submission order, names of dropped submissions)
        """
        external_recommendations = external_recommendations or {}
        completed: Dict[int, AnalysisResult] = {}
        failed = set()
        dropped: List[str] = []

        if not submissions:
            return [], dropped

        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            future_to_index = {
                executor.submit(
                    self.analyzer.analyze,
                    submission.resume_text,
                    submission.candidate_name,
                    submission.candidate_role,
                    profile_id,
                    custom_job_description,
                    external_recommendations.get(submission.candidate_name)
                ): index
                for index, submission in enumerate(submissions)
            }

            try:
                for future in as_completed(future_to_index, timeout=self.timeout_seconds):
                    index = future_to_index[future]
                    submission = submissions[index]
                    try:
                        completed[index] = future.result()
                    except Exception as e:
                        logger.error(f"Error analyzing {submission.source or submission.candidate_name}: {e}")
                        failed.add(index)
                        dropped.append(submission.candidate_name)
            except FuturesTimeout:
                for future, index in future_to_index.items():
                    if index not in completed and index not in failed:
                        future.cancel()
                        logger.warning(
                            f"Analysis of {submissions[index].candidate_name} exceeded "
                            f"{self.timeout_seconds}s, dropping"
                        )
                        dropped.append(submissions[index].candidate_name)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        results = [completed[i] for i in sorted(completed)]
        logger.info(f"Analyzed {len(results)} resumes, dropped {len(dropped)}")
        return results, dropped
