"""HTTP facade (FastAPI) over the form schema engine."""
