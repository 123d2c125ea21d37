"""Storefront login session caching."""

from shopcheck.core.auth.sessions import LoginSessionCache, session_key

__all__ = ["LoginSessionCache", "session_key"]
