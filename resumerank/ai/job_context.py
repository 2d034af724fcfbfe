# resumerank/ai/job_context.py
"""
Pull the target role, industry and key requirements out of a job description

Used to tailor prompts for AI recommendations. Pure regex tables, first match
wins.
"""

import re
from typing import List

ROLE_PATTERNS = [
    re.compile(p, re.IGNORECASE) for p in [
        r'(senior|junior|lead|principal|staff)\s+(software\s+)?(engineer|developer|programmer)',
        r'(data\s+(scientist|analyst|engineer))',
        r'(product|project|program)\s+manager',
        r'(marketing|sales|business)\s+(manager|director|specialist)',
        r'(ui|ux|frontend|backend|fullstack|devops)\s+(developer|engineer)',
        r'(cloud|aws|azure|gcp)\s+(architect|engineer|specialist)',
        r'(machine\s+learning|ai|artificial\s+intelligence)\s+(engineer|scientist)',
        r'(cybersecurity|security)\s+(analyst|engineer|specialist)',
        r'(qa|quality\s+assurance|test)\s+(engineer|analyst)',
        r'(system|network|infrastructure)\s+(administrator|engineer)',
        r'(consultant|advisor|specialist|coordinator)',
        r'(director|vp|head\s+of|chief)',
    ]
]

ROLE_KEYWORDS = [
    'engineer', 'developer', 'manager', 'analyst', 'scientist', 'architect',
    'specialist', 'coordinator', 'consultant', 'director', 'lead',
]

DEFAULT_ROLE = 'Professional'

TECH_SKILLS = [
    'JavaScript', 'TypeScript', 'React', 'Angular', 'Vue', 'Node.js', 'Python', 'Java', 'C#', 'C++',
    'SQL', 'MongoDB', 'PostgreSQL', 'MySQL', 'Redis', 'AWS', 'Azure', 'GCP', 'Docker', 'Kubernetes',
    'Git', 'Jenkins', 'CI/CD', 'Agile', 'Scrum', 'JIRA', 'Confluence', 'Tableau', 'Power BI',
    'Machine Learning', 'AI', 'Data Science', 'Statistics', 'R', 'TensorFlow', 'PyTorch',
    'HTML', 'CSS', 'SASS', 'LESS', 'Webpack', 'Babel', 'ESLint', 'Jest', 'Cypress',
]

SOFT_SKILLS = [
    'leadership', 'communication', 'teamwork', 'problem solving', 'analytical thinking',
    'project management', 'time management', 'collaboration', 'mentoring', 'presentation',
]

EXPERIENCE_PATTERNS = [
    re.compile(p, re.IGNORECASE) for p in [
        r'(\d+)\+?\s+years?\s+of\s+experience',
        r'(\d+)\+?\s+years?\s+in\s+(\w+)',
        r'experience\s+with\s+(\w+)',
        r'proficient\s+in\s+(\w+)',
        r'expertise\s+in\s+(\w+)',
    ]
]

MAX_REQUIREMENTS = 10

INDUSTRY_PATTERNS = [
    (re.compile(r'(fintech|financial|banking|insurance)', re.IGNORECASE), 'Finance'),
    (re.compile(r'(healthcare|medical|pharmaceutical|biotech)', re.IGNORECASE), 'Healthcare'),
    (re.compile(r'(e-commerce|retail|shopping|marketplace)', re.IGNORECASE), 'E-commerce'),
    (re.compile(r'(education|edtech|learning|academic)', re.IGNORECASE), 'Education'),
    (re.compile(r'(automotive|transportation|logistics)', re.IGNORECASE), 'Transportation'),
    (re.compile(r'(real\s+estate|property|construction)', re.IGNORECASE), 'Real Estate'),
    (re.compile(r'(entertainment|media|gaming|streaming)', re.IGNORECASE), 'Entertainment'),
    (re.compile(r'(government|public\s+sector|civic)', re.IGNORECASE), 'Government'),
    (re.compile(r'(non-profit|charity|social\s+impact)', re.IGNORECASE), 'Non-profit'),
    (re.compile(r'(consulting|advisory|professional\s+services)', re.IGNORECASE), 'Consulting'),
]

DEFAULT_INDUSTRY = 'Technology'


def extract_job_role(job_description: str) -> str:
    """Role title as written in the JD, else a generic role word"""
    for pattern in ROLE_PATTERNS:
        match = pattern.search(job_description)
        if match:
            return match.group(0)

    text = job_description.lower()
    for keyword in ROLE_KEYWORDS:
        if keyword in text:
            return keyword.capitalize()

    return DEFAULT_ROLE


def extract_job_requirements(job_description: str) -> List[str]:
    """
    Technical skills, soft skills and experience phrases named in the JD

    Technical skills are case-sensitive and must stand alone, so 'R' or 'AI'
    do not match inside other words. Soft skills are case-insensitive.
    """
    requirements = [
        skill for skill in TECH_SKILLS
        if re.search(r'(?<!\w)' + re.escape(skill) + r'(?!\w)', job_description)
    ]

    text = job_description.lower()
    requirements.extend(skill for skill in SOFT_SKILLS if skill in text)

    for pattern in EXPERIENCE_PATTERNS:
        match = pattern.search(job_description)
        if match:
            requirements.append(match.group(0))

    return requirements[:MAX_REQUIREMENTS]


def extract_industry(job_description: str) -> str:
    for pattern, industry in INDUSTRY_PATTERNS:
        if pattern.search(job_description):
            return industry
    return DEFAULT_INDUSTRY
