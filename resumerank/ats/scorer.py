# resumerank/ats/scorer.py
import random
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from nltk.tokenize import RegexpTokenizer, WhitespaceTokenizer

from resumerank.ats.models import ATSScore, KeywordAnalysis, SectionAnalysis, CANONICAL_SECTIONS
from resumerank.utils import clamp_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringStrategy:
    """
    Named scoring variant: overall weights plus completeness method

    Two variants exist. 'weighted' (version 2) is the default; 'legacy'
    (version 1) reproduces the earlier boolean-count completeness and
    0.4/0.3/0.2/0.1 weighting.
    """
    name: str
    version: int
    overall_weights: Mapping[str, float]
    completeness_method: str                     # "weighted" or "count"
    section_weights: Mapping[str, float] = field(default_factory=dict)
    jitter: float = 0.0                          # max uniform noise added to overall

    def completeness(
        self,
        section_scores: Mapping[str, int],
        presence: Mapping[str, bool],
        required_sections: Iterable[str] = ()
    ) -> int:
        """Turn per-section results into a 0-100 completeness score"""
        if self.completeness_method == "weighted":
            weighted = sum(
                section_scores.get(section, 0) * weight
                for section, weight in self.section_weights.items()
            )
            return clamp_score(weighted)

        # Every present section counts, required or not; the ratio is clamped to 100
        required = [s for s in required_sections if s in CANONICAL_SECTIONS]
        denominator = len(required) or len(CANONICAL_SECTIONS)
        present = sum(1 for s in CANONICAL_SECTIONS if presence.get(s))
        return clamp_score(present / denominator * 100)

    def overall(
        self,
        keyword_match: int,
        section_completeness: int,
        formatting: int,
        readability: int,
        rng: Optional[random.Random] = None
    ) -> int:
        raw = (
            keyword_match * self.overall_weights['keyword'] +
            section_completeness * self.overall_weights['sections'] +
            formatting * self.overall_weights['formatting'] +
            readability * self.overall_weights['readability']
        )

        if self.jitter > 0:
            raw += (rng or random.Random()).uniform(0, self.jitter)

        return clamp_score(raw)

    def with_jitter(self, jitter: float) -> 'ScoringStrategy':
        return ScoringStrategy(
            name=self.name,
            version=self.version,
            overall_weights=self.overall_weights,
            completeness_method=self.completeness_method,
            section_weights=self.section_weights,
            jitter=jitter,
        )


WEIGHTED_STRATEGY = ScoringStrategy(
    name="weighted",
    version=2,
    overall_weights={
        'keyword': 0.35,       # 35% - Keywords are most important
        'sections': 0.25,      # 25% - Section completeness
        'formatting': 0.25,    # 25% - Structure quality
        'readability': 0.15,   # 15% - Sentence length, bullets
    },
    completeness_method="weighted",
    section_weights={
        'summary': 0.15,
        'skills': 0.20,
        'experience': 0.25,
        'education': 0.15,
        'projects': 0.15,
        'certifications': 0.10,
    },
)

LEGACY_STRATEGY = ScoringStrategy(
    name="legacy",
    version=1,
    overall_weights={
        'keyword': 0.40,
        'sections': 0.30,
        'formatting': 0.20,
        'readability': 0.10,
    },
    completeness_method="count",
)

STRATEGIES = {
    WEIGHTED_STRATEGY.name: WEIGHTED_STRATEGY,
    LEGACY_STRATEGY.name: LEGACY_STRATEGY,
}


def get_strategy(name: str = "weighted", jitter: float = 0.0) -> ScoringStrategy:
    """Look up a scoring strategy by name"""
    try:
        strategy = STRATEGIES[name]
    except KeyError:
        raise ValueError(
            f"Unknown scoring strategy '{name}' (choose from {', '.join(STRATEGIES)})"
        )

    if jitter < 0:
        raise ValueError(f"Jitter must be non-negative, got {jitter}")

    return strategy.with_jitter(jitter) if jitter else strategy


class FormattingScorer:
    """
    Heuristic structural quality score (0-100)

    Starts at 100 and only deducts.
    """

    MIN_LENGTH = 500
    MAX_LENGTH = 5000
    MIN_LINES = 10

    def score(self, resume_text: str) -> int:
        text = resume_text or ""
        score = 100

        if len(text) < self.MIN_LENGTH:
            score -= 20  # Too short
        if len(text) > self.MAX_LENGTH:
            score -= 10  # Too long
        if not any(ch.isupper() for ch in text):
            score -= 15  # No capital letters
        if not any(ch.isdigit() for ch in text):
            score -= 10  # No numbers (dates, metrics)
        if "\n" not in text:
            score -= 20  # No line breaks
        if len(text.split("\n")) < self.MIN_LINES:
            score -= 15  # Too few lines

        return max(0, score)


class ReadabilityScorer:
    """
    Heuristic readability score (0-100) from sentence length and bullets
    """

    MAX_AVG_WORDS = 25
    MIN_AVG_WORDS = 8
    BULLET_CHARS = '•-*'
    MIN_BULLETS = 5

    def __init__(self):
        self.sentence_tokenizer = RegexpTokenizer(r'[.!?]+', gaps=True)
        self.word_tokenizer = WhitespaceTokenizer()

    def score(self, resume_text: str) -> int:
        text = resume_text or ""

        sentences = [s for s in self.sentence_tokenizer.tokenize(text) if s.strip()]
        words = self.word_tokenizer.tokenize(text)

        # No sentences counts as "too short"
        avg_words = len(words) / len(sentences) if sentences else 0

        score = 100
        if avg_words > self.MAX_AVG_WORDS:
            score -= 20
        if avg_words < self.MIN_AVG_WORDS:
            score -= 15

        bullets = sum(text.count(ch) for ch in self.BULLET_CHARS)
        if bullets > self.MIN_BULLETS:
            score += 10

        return max(0, min(100, score))


class ScoreComposer:
    """
    Combine component scores into an ATSScore
    """

    def __init__(
        self,
        strategy: Optional[ScoringStrategy] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Args:
            strategy: Weighting variant (defaults to weighted)
            rng: Randomness source, only used when the strategy has jitter
        """
        self.strategy = strategy or WEIGHTED_STRATEGY
        self.rng = rng or random.Random()

    def compose(
        self,
        keyword_analysis: KeywordAnalysis,
        section_analysis: SectionAnalysis,
        formatting_score: int,
        readability_score: int
    ) -> ATSScore:
        keyword_match = clamp_score(keyword_analysis.relevance_score)
        section_completeness = clamp_score(section_analysis.completeness_score)
        formatting = clamp_score(formatting_score)
        readability = clamp_score(readability_score)

        overall = self.strategy.overall(
            keyword_match,
            section_completeness,
            formatting,
            readability,
            rng=self.rng
        )

        return ATSScore(
            overall=overall,
            keyword_match=keyword_match,
            formatting=formatting,
            section_completeness=section_completeness,
            readability=readability
        )
