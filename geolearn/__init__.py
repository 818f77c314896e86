"""
GeoLearn: adaptive learner-modeling engine for a geography quiz.

Packages:
- core: domain registry, immutable learner state, errors
- adaptive: mastery estimators, difficulty and domain selection, badges
- cli: typer command line for simulated sessions
"""

__version__ = "1.0.0"
