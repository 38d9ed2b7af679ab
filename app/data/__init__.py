"""
Data access layer.

Design rules:
- Views call ONLY the `use_*` hooks in data.service.
- Every API failure surfaces as data.client.ApiError and becomes an error QueryResult.
- No env var reads here (config-only).
"""
