"""
Note Nexus Backend — Middleware Package
========================================

Request → [Request ID] → [Access Log] → [CORS] → Route Handler

The request id is assigned first so the access log line and every error
response for the request carry the same id.
"""
