"""
Mystery Message backend root package.

This package contains the FastAPI app entry point (main.py), API routes,
use cases for sign-up/verification/sign-in and anonymous messaging,
domain models, and infrastructure (MongoDB, SMTP, Groq).
"""
