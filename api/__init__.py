"""
Module 05 - Minimal API (FastAPI)

HTTP API for whitelist commitments:
- POST /tree - Compute root, layers and proofs
- POST /proof - Proof for a single entry
- POST /verify - Verify a proof against a root
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
