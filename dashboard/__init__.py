# dashboard/__init__.py
"""
HTTP API for resume analysis and ranking
"""
