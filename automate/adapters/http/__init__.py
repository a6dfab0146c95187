"""HTTP adapters: store backend executor."""

from automate.adapters.http.backend_executor import BackendExecutor

__all__ = [
    "BackendExecutor",
]
