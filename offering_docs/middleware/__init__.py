"""HTTP middleware: timeout, request size limit, request ID, security headers.

Applied in main app; order matters (last added = outermost).
"""

from offering_docs.middleware.request_id import RequestIDMiddleware
from offering_docs.middleware.request_size_limit import RequestSizeLimitMiddleware
from offering_docs.middleware.security_headers import SecurityHeadersMiddleware
from offering_docs.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestSizeLimitMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
]
