# resumerank/ats/sections.py
import re
import logging
from typing import Dict, Iterable, Optional

from resumerank.ats.models import SectionAnalysis, CANONICAL_SECTIONS
from resumerank.ats.scorer import ScoringStrategy, WEIGHTED_STRATEGY

logger = logging.getLogger(__name__)


class SectionDetector:
    """
    Detect canonical resume sections in plain text
    """

    # Header patterns, searched anywhere in the text
    SECTION_HEADERS = {
        'summary': [
            r'summary',
            r'objective',
            r'profile',
            r'overview',
            r'introduction',
            r'executive summary',
            r'professional summary',
        ],
        'skills': [
            r'skills',
            r'technical skills',
            r'competencies',
            r'expertise',
            r'technologies',
            r'tools',
            r'languages',
        ],
        'experience': [
            r'experience',
            r'employment',
            r'work history',
            r'professional experience',
            r'career history',
            r'employment history',
        ],
        'education': [
            r'education',
            r'academic',
            r'degree',
            r'university',
            r'college',
            r'qualifications',
            r'certifications',
        ],
        'projects': [
            r'projects',
            r'portfolio',
            r'achievements',
            r'key projects',
            r'notable projects',
            r'work samples',
        ],
        'certifications': [
            r'certifications',
            r'certificates',
            r'licenses',
            r'accreditations',
            r'professional certifications',
        ],
    }

    # Words that suggest section content even without a header
    CONTENT_INDICATORS = {
        'summary': ['overview', 'background', 'professional', 'career'],
        'skills': ['proficient', 'experienced', 'knowledge', 'familiar'],
        'experience': ['responsibilities', 'achieved', 'managed', 'led'],
        'education': ['bachelor', 'master', 'phd', 'gpa', 'graduated'],
        'projects': ['developed', 'created', 'built', 'implemented'],
        'certifications': ['certified', 'licensed', 'accredited', 'authorized'],
    }

    HEADER_SCORE = 50
    INDICATOR_SCORE = 10
    MAX_SECTION_SCORE = 100

    def __init__(self, strategy: Optional[ScoringStrategy] = None):
        """
        Args:
            strategy: Decides how section scores become a completeness score
        """
        self.strategy = strategy or WEIGHTED_STRATEGY
        self._header_patterns = {
            section: [re.compile(p, re.IGNORECASE) for p in patterns]
            for section, patterns in self.SECTION_HEADERS.items()
        }

    def detect_sections(
        self,
        resume_text: str,
        required_sections: Iterable[str] = ()
    ) -> SectionAnalysis:
        """
        Detect sections and score completeness

        Presence flags and the completeness score are computed independently:
        a header match sets the flag, while completeness also credits
        content indicators.

        Args:
            resume_text: Plain resume text
            required_sections: Sections the target profile expects

        Returns:
            SectionAnalysis
        """
        text = resume_text or ""
        text_lower = text.lower()

        presence = {}
        section_scores = {}

        for section in CANONICAL_SECTIONS:
            found = self._has_header(section, text)
            presence[section] = found
            section_scores[section] = self._score_section(section, found, text_lower)

        completeness = self.strategy.completeness(
            section_scores, presence, required_sections
        )

        logger.debug(f"Section scores: {section_scores}")
        logger.info(
            f"Detected sections: {[s for s in CANONICAL_SECTIONS if presence[s]]} "
            f"(completeness {completeness})"
        )

        return SectionAnalysis(completeness_score=completeness, **presence)

    def section_scores(self, resume_text: str) -> Dict[str, int]:
        """Per-section 0-100 scores before weighting"""
        text = resume_text or ""
        return {
            section: self._score_section(section, self._has_header(section, text), text.lower())
            for section in CANONICAL_SECTIONS
        }

    def _has_header(self, section: str, text: str) -> bool:
        return any(pattern.search(text) for pattern in self._header_patterns[section])

    def _score_section(self, section: str, header_found: bool, text_lower: str) -> int:
        score = self.HEADER_SCORE if header_found else 0

        for indicator in self.CONTENT_INDICATORS[section]:
            if indicator in text_lower:
                score += self.INDICATOR_SCORE

        return min(score, self.MAX_SECTION_SCORE)
