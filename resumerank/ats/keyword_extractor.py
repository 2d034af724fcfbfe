# resumerank/ats/keyword_extractor.py
import logging
from typing import List, Iterable
from collections import Counter
from nltk.tokenize import RegexpTokenizer

from resumerank.ats.models import JobProfile

logger = logging.getLogger(__name__)

CUSTOM_PROFILE_ID = 'custom'

# Sections expected when the target comes from a free-text job description
CUSTOM_REQUIRED_SECTIONS = ('summary', 'skills', 'experience', 'education')


class KeywordExtractor:
    """
    Extract target keywords from a free-text job description

    Frequency based: the most common non-trivial words win. There is no
    semantic weighting.
    """

    STOP_WORDS = frozenset({
        'the', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for', 'of',
        'with', 'by', 'a', 'an',
    })

    MIN_TOKEN_LENGTH = 3

    def __init__(self, top_n: int = 15):
        """
        Args:
            top_n: Maximum keywords to return
        """
        self.top_n = top_n
        # Word-character runs, i.e. punctuation acts as whitespace
        self.tokenizer = RegexpTokenizer(r'\w+')

    def extract_keywords(self, job_description: str, top_n: int = None) -> List[str]:
        """
        Extract keywords ranked by frequency

        Ties keep first-seen order.

        Args:
            job_description: Full JD text
            top_n: Override for the configured maximum

        Returns:
            Lowercase keywords, most frequent first
        """
        limit = self.top_n if top_n is None else top_n
        if not job_description or limit <= 0:
            return []

        counts = Counter(self._candidate_tokens(job_description))
        keywords = [word for word, _ in counts.most_common(limit)]

        logger.info(f"Extracted {len(keywords)} keywords from job description")
        return keywords

    def build_profile(self, job_description: str) -> JobProfile:
        """Synthesize an ad-hoc profile from a job description"""
        return JobProfile(
            id=CUSTOM_PROFILE_ID,
            title="Custom Job Description",
            keywords=tuple(self.extract_keywords(job_description)),
            required_sections=frozenset(CUSTOM_REQUIRED_SECTIONS),
        )

    def _candidate_tokens(self, text: str) -> Iterable[str]:
        for token in self.tokenizer.tokenize(text.lower()):
            if len(token) < self.MIN_TOKEN_LENGTH:
                continue
            if token in self.STOP_WORDS:
                continue
            yield token
