"""Tests for keyword matching."""

import pytest

from resumerank.ats.matcher import KeywordMatcher


class TestKeywordMatcher:
    """Tests for KeywordMatcher.match_keywords."""

    @pytest.fixture
    def matcher(self):
        return KeywordMatcher()

    def test_empty_resume_matches_nothing(self, matcher):
        """Test empty text keeps every keyword missing, in order."""
        keywords = ['Python', 'AWS', 'Docker']
        analysis = matcher.match_keywords("", keywords)

        assert analysis.matched == []
        assert analysis.missing == keywords
        assert analysis.relevance_score == 0
        assert analysis.density == 0

    def test_empty_keyword_list(self, matcher):
        """Test no keywords gives a neutral zero result."""
        analysis = matcher.match_keywords("Python developer", [])

        assert analysis.matched == []
        assert analysis.missing == []
        assert analysis.density == 0.0
        assert analysis.relevance_score == 0

    def test_matched_and_missing_partition_keywords(self, matcher, sample_resume):
        """Test matched and missing are disjoint and cover the keyword list."""
        keywords = ['Python', 'Kubernetes', 'React', 'Terraform', 'Node.js', 'CI/CD']
        analysis = matcher.match_keywords(sample_resume, keywords)

        assert set(analysis.matched).isdisjoint(analysis.missing)
        assert sorted(analysis.matched + analysis.missing) == sorted(keywords)
        assert analysis.matched == ['Python', 'React', 'Node.js', 'CI/CD']
        assert analysis.missing == ['Kubernetes', 'Terraform']

    def test_case_insensitive(self, matcher):
        """Test keywords match regardless of case."""
        analysis = matcher.match_keywords("expert in PYTHON and aws", ['Python', 'AWS'])

        assert analysis.matched == ['Python', 'AWS']

    def test_word_boundaries(self, matcher):
        """Test a keyword does not match inside a longer word."""
        analysis = matcher.match_keywords("JavaScript developer", ['Java'])

        assert analysis.matched == []
        assert analysis.missing == ['Java']

    def test_multi_word_variants(self, matcher):
        """Test hyphenated and joined spellings of multi-word keywords match."""
        text = "Worked on machine-learning pipelines and powerbi dashboards"
        analysis = matcher.match_keywords(text, ['Machine Learning', 'Power BI'])

        assert analysis.matched == ['Machine Learning', 'Power BI']

    def test_relevance_score_with_frequency_bonus(self, matcher):
        """Test density combines match ratio and a capped frequency bonus."""
        analysis = matcher.match_keywords("I write Python.", ['Python', 'Java', 'Go', 'Rust'])

        assert analysis.matched == ['Python']
        assert analysis.density == pytest.approx(0.45)
        assert analysis.relevance_score == 45

    def test_single_word_occurrence_counts_every_variant(self, matcher):
        """Test one occurrence of a single-word keyword counts once per variant."""
        keywords = ['Python'] + [f'Missing{i}' for i in range(19)]
        analysis = matcher.match_keywords("Python", keywords)

        # base 1/20 plus bonus 4/20 * 0.2
        assert analysis.density == pytest.approx(0.09)
        assert analysis.relevance_score == 9

    def test_multi_word_occurrence_counts_matching_variants(self, matcher):
        """Test a multi-word keyword only counts the spellings that occur."""
        keywords = ['Machine Learning'] + [f'Missing{i}' for i in range(9)]
        analysis = matcher.match_keywords("machine learning", keywords)

        # base 1/10 plus bonus 1/10 * 0.2
        assert analysis.density == pytest.approx(0.12)
        assert analysis.relevance_score == 12

    def test_relevance_score_capped_at_100(self, matcher):
        """Test density may exceed 1 but relevance stays within 100."""
        analysis = matcher.match_keywords("Python Python Docker", ['Python', 'Docker'])

        assert analysis.density == pytest.approx(1.2)
        assert analysis.relevance_score == 100

    def test_blank_keyword_is_missing(self, matcher):
        """Test blank keywords never match."""
        analysis = matcher.match_keywords("Python", ['Python', '  '])

        assert analysis.matched == ['Python']
        assert analysis.missing == ['  ']


class TestKeywordVariants:
    """Tests for KeywordMatcher.variants."""

    def test_single_word_variants_repeat(self):
        """Test single-word keywords keep all four identical variants."""
        assert KeywordMatcher.variants('Python') == ['python'] * 4

    def test_multi_word_variants(self):
        """Test spaces are removed, hyphenated and underscored."""
        assert KeywordMatcher.variants('Machine Learning') == [
            'machine learning',
            'machinelearning',
            'machine-learning',
            'machine_learning',
        ]
