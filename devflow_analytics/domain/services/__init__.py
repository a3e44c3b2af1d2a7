"""
Domain Services Package

Pure analysis logic over graph snapshots: scoring, bottleneck detection,
critical path search and progress analysis. No infrastructure dependencies.
"""

from .complexity_scorer import ComplexityScorer, score_node, weight_connection, bucket_scores
from .graph_builder import build_connection_graph, build_path_graph
from .bottleneck_detector import BottleneckDetector
from .critical_path import CriticalPathSolver
from .progress_analyzer import ProgressAnalyzer, current_time_ms, utc_day
from .recommendations import generate_recommendations

__all__ = [
    # Scoring
    "ComplexityScorer",
    "score_node",
    "weight_connection",
    "bucket_scores",
    # Graph views
    "build_connection_graph",
    "build_path_graph",
    # Structural diagnostics
    "BottleneckDetector",
    "CriticalPathSolver",
    # Progress
    "ProgressAnalyzer",
    "current_time_ms",
    "utc_day",
    # Recommendations
    "generate_recommendations",
]
