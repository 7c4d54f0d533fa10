"""
API layer for the Mystery Message backend.

Exposes HTTP endpoints under /api/v1 (sign-up, verification, sign-in,
message acceptance, anonymous message intake, retrieval and deletion,
message suggestions).
"""
