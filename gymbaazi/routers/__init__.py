"""FastAPI routers for the GymBaazi API."""
