"""
Focus Planner - picks the work item that deserves attention right now.
"""

__version__ = "1.0.0"
