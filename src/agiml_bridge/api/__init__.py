"""HTTP service exposing the AGIML transform (FastAPI)."""
