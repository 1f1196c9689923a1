"""
HTTP surface: routers and middleware.
"""
