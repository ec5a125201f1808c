"""
MFL Salary Exporter

Fetches multi-season salary data for a MyFantasyLeague league, reconciles the
overlapping salary sources and exports the top salaries per position.
"""

__version__ = "1.0.0"
