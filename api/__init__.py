"""
Merkle Distributor HTTP API (FastAPI)

- GET /distribution - Published root and claim progress
- GET /proofs/{index} - Entry and inclusion proof
- GET /claims/{index} - Claim status
- POST /claims - Redeem an entry
- GET /health - Health check

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
