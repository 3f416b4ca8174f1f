# Routes package init
"""
Jotter Backend: API Routes Package
===================================

Route Inventory:
    - notes.py:   POST/GET /notes, GET/PATCH/DELETE /notes/{note_id}
    - users.py:   POST /users, POST /users/login, POST /users/logout,
                  POST /users/logoutAll, GET /users/me
    - health.py:  GET  /health

Routes stay thin: they resolve the principal and session, call a service,
and return its result. Error bodies come from the global handlers.
"""
