# Services package init
"""
Jotter Backend: Services Layer
===============================

Service Inventory:
    - NoteService: create / list / get / update / delete pipelines for notes
    - ownership:   authorize() / ensure_owner() guard (creator_id == principal.id)
    - UserService: registration, login, token revocation

Services are stateless singletons; each call receives the request's
AsyncSession and authenticated principal.
"""
