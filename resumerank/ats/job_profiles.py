# resumerank/ats/job_profiles.py
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from resumerank.ats.models import JobProfile, CANONICAL_SECTIONS

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_ID = 'software-engineer'


def _profile(profile_id, title, keywords, sections, alignment) -> JobProfile:
    return JobProfile(
        id=profile_id,
        title=title,
        keywords=tuple(keywords),
        required_sections=frozenset(sections),
        alignment_keywords=tuple(alignment),
    )


BUILTIN_PROFILES = {
    p.id: p for p in [
        _profile(
            'software-engineer', 'Software Engineer',
            [
                'JavaScript', 'TypeScript', 'React', 'Node.js', 'Python', 'Java',
                'Git', 'AWS', 'Docker', 'API', 'REST', 'GraphQL', 'MongoDB',
                'PostgreSQL', 'Agile', 'Scrum', 'CI/CD', 'Testing',
            ],
            ['summary', 'skills', 'experience', 'education'],
            ['developer', 'engineer', 'programming', 'coding'],
        ),
        _profile(
            'data-analyst', 'Data Analyst',
            [
                'SQL', 'Python', 'R', 'Excel', 'Tableau', 'Power BI', 'Statistics',
                'Machine Learning', 'Data Visualization', 'ETL', 'Analytics',
                'Pandas', 'NumPy', 'Jupyter', 'A/B Testing',
            ],
            ['summary', 'skills', 'experience', 'education', 'projects'],
            ['analyst', 'data', 'analysis', 'sql'],
        ),
        _profile(
            'marketing-manager', 'Marketing Manager',
            [
                'Digital Marketing', 'SEO', 'SEM', 'Google Analytics', 'Social Media',
                'Content Marketing', 'Campaign Management', 'Lead Generation', 'CRM',
                'Email Marketing', 'Brand Management',
            ],
            ['summary', 'skills', 'experience', 'education'],
            ['marketing', 'campaign', 'digital', 'seo'],
        ),
        _profile(
            'product-manager', 'Product Manager',
            [
                'Product Strategy', 'Roadmap', 'Stakeholder Management', 'User Research',
                'Analytics', 'Agile', 'Scrum', 'A/B Testing', 'KPIs', 'Market Research',
                'Product Launch', 'UX/UI',
            ],
            ['summary', 'skills', 'experience', 'education', 'projects'],
            ['product', 'strategy', 'roadmap', 'stakeholder'],
        ),
        _profile(
            'sales-representative', 'Sales Representative',
            [
                'Sales', 'Lead Generation', 'CRM', 'Salesforce', 'Cold Calling',
                'Negotiation', 'Client Relationships', 'Pipeline Management',
                'Quota Achievement', 'B2B', 'B2C',
            ],
            ['summary', 'skills', 'experience', 'education'],
            ['sales', 'client', 'relationship', 'crm'],
        ),
        _profile(
            'student', 'Student',
            [
                'Education', 'GPA', 'Projects', 'Internship', 'Leadership', 'Teamwork',
                'Communication', 'Problem Solving', 'Research', 'Volunteer',
                'Extracurricular', 'Coursework',
            ],
            ['education', 'skills', 'projects'],
            ['student', 'graduate', 'internship', 'project'],
        ),
    ]
}


class JobProfileRegistry:
    """
    Read-only catalog of job profiles keyed by id
    """

    def __init__(
        self,
        profiles: Optional[Dict[str, JobProfile]] = None,
        default_profile_id: str = DEFAULT_PROFILE_ID
    ):
        self._profiles = dict(BUILTIN_PROFILES)
        if profiles:
            self._profiles.update(profiles)

        if default_profile_id not in self._profiles:
            raise ValueError(f"Default profile not in registry: {default_profile_id}")
        self.default_profile_id = default_profile_id

    def __contains__(self, profile_id: str) -> bool:
        return profile_id in self._profiles

    def ids(self) -> List[str]:
        return list(self._profiles)

    def get(self, profile_id: Optional[str]) -> Optional[JobProfile]:
        if not profile_id:
            return None
        return self._profiles.get(profile_id)

    def resolve(self, profile_id: Optional[str]) -> JobProfile:
        """
        Look up a profile, falling back to the default profile

        Unknown ids are not an error: the default profile is used and a
        warning is logged.
        """
        profile = self.get(profile_id)
        if profile is not None:
            return profile

        if profile_id:
            logger.warning(
                f"Unknown job profile '{profile_id}', using '{self.default_profile_id}'"
            )
        return self._profiles[self.default_profile_id]

    @classmethod
    def from_yaml(
        cls,
        path: Union[str, Path],
        default_profile_id: str = DEFAULT_PROFILE_ID
    ) -> 'JobProfileRegistry':
        """
        Load extra profiles from YAML, overriding built-ins by id

        Expected layout:

            profiles:
              devops-engineer:
                title: DevOps Engineer
                keywords: [Kubernetes, Terraform]
                required_sections: [summary, skills, experience]
                alignment_keywords: [devops, sre]
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Profiles file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        profiles = {}
        for profile_id, entry in (data.get('profiles') or {}).items():
            sections = entry.get('required_sections', [])
            unknown = set(sections) - set(CANONICAL_SECTIONS)
            if unknown:
                raise ValueError(
                    f"Profile '{profile_id}' has unknown sections: {', '.join(sorted(unknown))}"
                )

            profiles[profile_id] = _profile(
                profile_id,
                entry.get('title', profile_id),
                entry.get('keywords', []),
                sections,
                entry.get('alignment_keywords', []),
            )

        logger.info(f"Loaded {len(profiles)} job profiles from {path}")
        return cls(profiles, default_profile_id=default_profile_id)
