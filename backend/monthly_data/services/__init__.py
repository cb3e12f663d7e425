"""Services Layer — request orchestration between the API routes and the store."""
