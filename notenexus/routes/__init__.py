"""
Note Nexus Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:       POST /jwt
    - users.py:      /user, /user-role, /all-users, /set-role, /instructors
    - classes.py:    /class, /classes, /class-approve, /class-deny,
                     /my-classes, /all-classes
    - bookmarks.py:  /select-class, /selected-classes
    - payments.py:   /create-payment-intent, /payment-histry, /is-enrolled
    - health.py:     GET /, GET /health

Each route names its Capability (public, authenticated, admin, instructor)
through require(); routes stay thin and delegate to services.
"""
