"""HTTP service layer (FastAPI app and uvicorn dev server)."""
