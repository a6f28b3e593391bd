"""HTTP middleware: request ID and request timeout.

Applied in main app; order matters (first added = outermost).
"""

from app.middleware.request import RequestIDMiddleware, TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
