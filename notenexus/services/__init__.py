"""
Note Nexus Backend — Services Package
======================================

Business logic, independent of HTTP. Each service is a stateless singleton
whose methods take the request's AsyncSession.

    user_service       registration, roles, instructor listing
    class_service      submission, review, catalogue
    bookmark_service   saved classes
    payment_service    intents, enrollment recording, history
    payment_gateway    card payment provider adapter
"""
