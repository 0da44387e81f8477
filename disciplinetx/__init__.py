"""
DisciplineTX - Personal Trading Discipline Tracker

A self-hosted Python system for tracking daily trading habits,
mood check-ins, journals and trade reviews, and turning them into
streaks, completion rates and performance statistics.

This system exists to build consistency, not activity.
"""

__version__ = "0.1.0"
