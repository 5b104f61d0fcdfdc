"""
diff_review — interactive review of machine-proposed code changes.

Library usage::

    from diff_review import ReviewController, HttpAuthority

    controller = ReviewController(HttpAuthority("http://127.0.0.1:8080"), session_id)
    await controller.load()
    await controller.apply_change(change_id)
    await controller.complete_session()
"""

from .authority import HttpAuthority
from .controller import ReviewController, Outcome, BulkResult

__all__ = ["ReviewController", "Outcome", "BulkResult", "HttpAuthority"]
