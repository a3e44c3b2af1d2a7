"""
DevFlow Analytics

Dependency-graph analytics engine for task graphs: complexity scoring,
bottleneck detection, critical path search and progress/velocity
statistics, served through an asynchronous request/response worker.

Layout:
    domain/       graph snapshot models and pure analysis services
    application/  analysis use case port and service
    adapters/     message models, request dispatcher, worker pool
    config/       settings and dependency injection container
"""

__version__ = "0.1.0"
