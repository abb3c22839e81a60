"""
Domain Layer

Pure request validation and link signing logic.
"""
