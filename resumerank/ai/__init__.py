# resumerank/ai/__init__.py
"""
AI-sourced resume recommendations
"""

from resumerank.ai.ollama_client import OllamaClient

__all__ = [
    'OllamaClient',
]
