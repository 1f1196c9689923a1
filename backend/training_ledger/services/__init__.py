"""
Service layer: registry, calendar, admin selection, booking and queries.
"""
