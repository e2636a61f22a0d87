"""
Note Nexus Backend — Authentication & Authorization
====================================================

tokens:        sign and verify bearer tokens (PyJWT, HS256)
dependencies:  FastAPI dependencies that turn a route's declared Capability
               into the checks it needs (token, then role lookup)
"""

from notenexus.auth.dependencies import Capability, Identity, require

__all__ = ["Capability", "Identity", "require"]
