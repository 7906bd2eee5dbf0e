"""HTTP API layer: FastAPI app, routers and dependencies."""
