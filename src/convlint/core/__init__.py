"""
Core linting machinery: per-file context, engine and result models.
"""
