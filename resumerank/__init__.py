# resumerank/__init__.py
"""
Rule-based resume scoring, ranking and candidate pool insights
"""

__version__ = "0.2.0"
