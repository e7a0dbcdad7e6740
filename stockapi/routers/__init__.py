"""
FastAPI routers, one per entity kind.

Each module exposes an ``APIRouter`` mounted under ``/api/<entity>`` by the
application factory (app.py).
"""
