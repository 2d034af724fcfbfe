# resumerank/ats/matcher.py
import re
import logging
from typing import List, Sequence, Pattern

from resumerank.ats.models import KeywordAnalysis
from resumerank.utils import round_half_up

logger = logging.getLogger(__name__)


class KeywordMatcher:
    """
    Match profile keywords against raw resume text
    """

    # Occurrence bonus is worth at most 20 points of relevance
    FREQUENCY_WEIGHT = 0.2
    MAX_FREQUENCY_BONUS = 0.2

    def match_keywords(self, resume_text: str, keywords: Sequence[str]) -> KeywordAnalysis:
        """
        Match keywords against resume text

        Args:
            resume_text: Plain resume text
            keywords: Profile keywords, in display case

        Returns:
            KeywordAnalysis with matched/missing in profile order
        """
        logger.info(f"Matching {len(keywords)} keywords against resume")

        text = resume_text or ""
        matched = []
        missing = []
        total_occurrences = 0

        for keyword in keywords:
            count = self._count_occurrences(keyword, text)
            if count > 0:
                matched.append(keyword)
                total_occurrences += count
            else:
                missing.append(keyword)

        total_keywords = len(keywords)
        if total_keywords == 0:
            return KeywordAnalysis(matched=[], missing=[], density=0.0, relevance_score=0)

        base_density = len(matched) / total_keywords
        frequency_bonus = min(
            total_occurrences / total_keywords * self.FREQUENCY_WEIGHT,
            self.MAX_FREQUENCY_BONUS
        )
        density = base_density + frequency_bonus
        relevance_score = min(round_half_up(density * 100), 100)

        logger.info(f"Found {len(matched)}/{total_keywords} keywords ({total_occurrences} occurrences)")
        return KeywordAnalysis(
            matched=matched,
            missing=missing,
            density=density,
            relevance_score=relevance_score
        )

    def _count_occurrences(self, keyword: str, text: str) -> int:
        """Count hits of every variant of a keyword"""
        if not keyword or not keyword.strip() or not text:
            return 0

        return sum(
            len(pattern.findall(text))
            for pattern in self._variant_patterns(keyword)
        )

    def _variant_patterns(self, keyword: str) -> List[Pattern]:
        """Word-bounded, case-insensitive patterns for each spelling variant"""
        return [
            re.compile(r'\b' + re.escape(variant) + r'\b', re.IGNORECASE)
            for variant in self.variants(keyword)
        ]

    @staticmethod
    def variants(keyword: str) -> List[str]:
        """
        Spelling variants of a keyword: as written, spaces removed,
        spaces as hyphens, spaces as underscores

        Variants are not de-duplicated, so a single-word keyword yields four
        identical patterns and each occurrence is counted four times.
        """
        keyword_lower = keyword.strip().lower()
        return [
            keyword_lower,
            re.sub(r'\s+', '', keyword_lower),
            re.sub(r'\s+', '-', keyword_lower),
            re.sub(r'\s+', '_', keyword_lower),
        ]
