"""
Note Nexus Backend — Application Package
=========================================

HTTP backend for the Note Nexus course platform: user roles, class review,
bookmarks and paid enrollment.

    ┌─────────────────────────────────────┐
    │  Routes (HTTP + capability checks)  │
    ├─────────────────────────────────────┤
    │  Services (business rules)          │
    ├─────────────────────────────────────┤
    │  Models & Schemas                   │
    ├─────────────────────────────────────┤
    │  Database (async SQLAlchemy)        │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
