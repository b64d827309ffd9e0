"""HTTP transport: FastAPI application, request models and routers."""
