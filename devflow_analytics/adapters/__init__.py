"""
Adapters Package

Infrastructure adapters implementing the application's ports.
"""
