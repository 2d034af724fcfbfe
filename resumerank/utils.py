# resumerank/utils.py
import math
import logging
from pathlib import Path
from typing import Optional
from datetime import datetime

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None):
    """Configure logging for scripts and the API server"""
    handlers = [logging.StreamHandler()]

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"resumerank_{datetime.now().strftime('%Y%m%d')}.log"
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def round_half_up(value: float) -> int:
    """Round to nearest integer, .5 going up (not banker's rounding)"""
    return int(math.floor(value + 0.5))


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    """Round and clamp a score into [low, high]"""
    return max(low, min(high, round_half_up(value)))
