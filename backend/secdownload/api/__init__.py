"""
API Layer

HTTP endpoints: the signed download route and the v1 management API.
"""
