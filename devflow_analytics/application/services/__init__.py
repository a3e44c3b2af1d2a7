"""
Application Services Package

Use case implementations orchestrating the domain services.
"""

from .analysis_service import AnalysisService, AnalysisError

__all__ = [
    "AnalysisService",
    "AnalysisError",
]
