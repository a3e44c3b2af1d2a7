"""
Ports Package

Abstract interfaces between the application core and its adapters.
"""

from .inbound_ports import IAnalysisUseCase

__all__ = [
    "IAnalysisUseCase",
]
