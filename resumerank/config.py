# resumerank/config.py
import os
from dataclasses import dataclass, fields
from typing import Optional
from pathlib import Path
import yaml

from resumerank.ats.job_profiles import JobProfileRegistry, DEFAULT_PROFILE_ID
from resumerank.ats.scorer import ScoringStrategy, get_strategy


@dataclass
class EngineConfig:
    """Configuration for ATS analysis and ranking"""

    # Job profiles
    default_profile_id: str = DEFAULT_PROFILE_ID
    profiles_path: Optional[str] = None       # extra profiles YAML

    # Scoring
    scoring_strategy: str = "weighted"         # "weighted" or "legacy"
    jitter: float = 0.0                        # 0 keeps scoring deterministic

    # Keyword extraction / recommendations
    max_extracted_keywords: int = 15
    max_missing_keywords: int = 5

    # Batch analysis
    max_workers: int = 4
    timeout_seconds: Optional[float] = None    # whole-batch budget

    def __post_init__(self):
        """Fail fast on bad strategy names"""
        get_strategy(self.scoring_strategy, self.jitter)

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    def build_strategy(self) -> ScoringStrategy:
        return get_strategy(self.scoring_strategy, self.jitter)

    def build_registry(self) -> JobProfileRegistry:
        if self.profiles_path:
            return JobProfileRegistry.from_yaml(
                self.profiles_path,
                default_profile_id=self.default_profile_id
            )
        return JobProfileRegistry(default_profile_id=self.default_profile_id)

    @classmethod
    def from_yaml(cls, path: str):
        """Load configuration from YAML file"""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        engine = {k: v for k, v in (data.get('engine') or {}).items() if k in known}
        return cls(**engine)


def get_config() -> EngineConfig:
    """Get engine configuration"""
    config_path = os.getenv('RESUMERANK_CONFIG', 'config/engine.yaml')

    if Path(config_path).exists():
        return EngineConfig.from_yaml(config_path)
    return EngineConfig()
