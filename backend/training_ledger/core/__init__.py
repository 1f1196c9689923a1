"""
Cross-cutting concerns: configuration, logging, metrics, errors and caller
authorization.
"""
