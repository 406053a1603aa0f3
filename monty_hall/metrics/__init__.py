"""Result tabulation."""

from .summary import summarize, ResultsSummary

__all__ = ["summarize", "ResultsSummary"]
