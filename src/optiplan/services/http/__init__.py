"""HTTP services for OptiPlan."""

from .server import app, create_app, get_gateway, run_local_server

__all__ = [
    "app",
    "create_app",
    "get_gateway",
    "run_local_server",
]
