"""Student roster manager: FastAPI backend, JSON/SQL stores and an HTML roster page."""
