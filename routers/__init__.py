"""FastAPI routers. Each module exposes `router`; server.py includes them."""
