"""
Application Layer

Inbound ports and the services that implement them.
"""
