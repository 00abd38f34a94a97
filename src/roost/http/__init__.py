"""HTTP types — Request, Response, Headers, QueryParams.

Immutable values passed through handlers and middleware.
"""
