"""HTTP middleware: request ID, request size limit and API audit log.

Applied in main app; order matters (last added = outermost).
"""

from eduhub.middleware.audit_log import ApiAuditLogMiddleware
from eduhub.middleware.request_id import RequestIDMiddleware
from eduhub.middleware.request_size_limit import RequestSizeLimitMiddleware

__all__ = ["ApiAuditLogMiddleware", "RequestIDMiddleware", "RequestSizeLimitMiddleware"]
