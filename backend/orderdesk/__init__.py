"""Expose the application factory at package level.

Callers can ``from orderdesk import create_app`` without traversing the
package structure; gunicorn loads ``orderdesk:create_app()``.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
