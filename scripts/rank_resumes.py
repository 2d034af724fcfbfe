# scripts/rank_resumes.py
#!/usr/bin/env python3
"""
Batch score and rank multiple candidates for the same role

Usage:
    python scripts/rank_resumes.py --resumes data/resumes/*.txt --profile data-analyst
    python scripts/rank_resumes.py --resumes data/resumes/*.txt --job-description data/jd/kafka_admin.txt --output reports/ranking.json
"""

import argparse
import json
import logging
import sys
import glob
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from resumerank.config import get_config
from resumerank.ranking.batch import BatchRanker
from resumerank.ranking.models import ResumeSubmission, RankingReport
from resumerank.utils import setup_logging

logger = logging.getLogger(__name__)


def load_submissions(resume_files):
    """Read plain-text resumes; candidate name is the file stem"""
    submissions = []

    for resume_file in resume_files:
        try:
            text = Path(resume_file).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading {resume_file}: {e}")
            continue

        submissions.append(ResumeSubmission(
            resume_text=text,
            candidate_name=Path(resume_file).stem,
            source=str(resume_file)
        ))

    return submissions


def print_comparison(report: RankingReport, target: str):
    """Print comparison table"""
    print("\n" + "=" * 90)
    print(f"{'CANDIDATE COMPARISON':^90}")
    print("=" * 90)
    print(f"Target: {target}")
    print()

    # Header
    print(f"{'Rank':<6} {'Candidate':<25} {'Ranking':<10} {'ATS':<10} {'Keywords':<10} {'Sections':<10} {'Grade':<10}")
    print("-" * 90)

    for result in report.ranked_results:
        name = result.candidate_name

        # Truncate name if too long
        if len(name) > 24:
            name = name[:21] + "..."

        score = result.ats_score
        color = (
            '\033[92m' if score.overall >= 85 else
            '\033[93m' if score.overall >= 70 else
            '\033[91m'
        )
        reset_color = '\033[0m'

        print(
            f"{result.rank:<6} "
            f"{name:<25} "
            f"{result.ranking_score:>3}/100    "
            f"{color}{score.overall:>3}/100{reset_color}    "
            f"{score.keyword_match:>3}/100    "
            f"{score.section_completeness:>3}/100    "
            f"{score.grade:<10}"
        )

    print("=" * 90)
    print()

    insights = report.insights
    print(f"Average ATS score: {insights.average_score}/100")
    dist = insights.score_distribution
    print(f"Distribution: excellent {dist.excellent}, good {dist.good}, fair {dist.fair}, poor {dist.poor}")

    if insights.common_issues:
        print("Common issues:")
        for issue in insights.common_issues:
            print(f"   • {issue}")

    if insights.improvement_areas:
        print("Improvement areas:")
        for area in insights.improvement_areas:
            print(f"   • {area}")

    if report.dropped:
        print(f"⚠️  Dropped: {', '.join(report.dropped)}")
    print()


def print_top_candidates(report: RankingReport, top_n=3):
    """Print detailed info for top candidates"""
    top = report.ranked_results[:top_n]

    print("=" * 90)
    print(f"TOP {len(top)} CANDIDATES - DETAILED VIEW")
    print("=" * 90)
    print()

    for result in top:
        print(f"{result.rank}. {result.candidate_name} ({result.ranking_score}/100)")
        print()

        keywords = result.keyword_analysis
        if keywords.matched:
            print(f"   Matched keywords: {', '.join(keywords.matched[:8])}")
        if keywords.missing:
            print(f"   Missing keywords: {', '.join(keywords.missing[:5])}")
        print()

        if result.recommendations:
            print("   Recommendations:")
            for rec in result.recommendations[:3]:
                print(f"   • [{rec.type.value}] {rec.title}")
            print()

        print("-" * 90)
        print()


def save_report(report: RankingReport, output_file):
    """Save ranking report as JSON"""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)

    print(f"✓ Ranking report saved to: {output_file}")


def main():
    parser = argparse.ArgumentParser(
        description='Batch score and rank multiple candidates for the same role'
    )

    parser.add_argument(
        '--resumes',
        nargs='+',
        required=True,
        help='Plain-text resume files to rank (supports wildcards)'
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        '--profile',
        help='Job profile id (e.g. software-engineer, data-analyst)'
    )
    target.add_argument(
        '--job-description',
        help='Path to a plain-text job description'
    )

    parser.add_argument(
        '--output',
        help='Output file for ranking report (JSON)'
    )

    parser.add_argument(
        '--top',
        type=int,
        default=3,
        help='Number of top candidates to show details for'
    )

    parser.add_argument(
        '--workers',
        type=int,
        help='Parallel analysis workers (overrides config)'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show pipeline logging'
    )

    args = parser.parse_args()
    setup_logging("INFO" if args.verbose else "WARNING")

    try:
        # Expand wildcards
        resume_files = []
        for pattern in args.resumes:
            resume_files.extend(sorted(glob.glob(pattern)))

        if not resume_files:
            print("ERROR: No resume files found")
            sys.exit(1)

        print(f"Found {len(resume_files)} resume(s) to rank")

        submissions = load_submissions(resume_files)
        if not submissions:
            print("ERROR: No resumes could be read")
            sys.exit(1)

        job_description = None
        if args.job_description:
            job_description = Path(args.job_description).read_text(encoding='utf-8')

        config = get_config()
        if args.workers:
            config.max_workers = args.workers

        batch = BatchRanker.from_config(config)
        target_label = (
            f"custom job description ({args.job_description})" if job_description
            else batch.analyzer.registry.resolve(args.profile).title
        )

        report = batch.run(
            submissions,
            profile_id=args.profile,
            custom_job_description=job_description
        )

        if not report.ranked_results:
            print("ERROR: No candidates successfully scored")
            sys.exit(1)

        print_comparison(report, target_label)
        print_top_candidates(report, args.top)

        if args.output:
            save_report(report, args.output)

        sys.exit(0)

    except Exception as e:
        logger.exception(f"ERROR: {e}")
        sys.exit(2)


if __name__ == '__main__':
    main()
