"""
Domain Package

Graph snapshot models and the pure analysis services that operate on them.
"""
