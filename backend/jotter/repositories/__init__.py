"""
Jotter Backend: Repositories (Data Access Layer)
=================================================

Each repository wraps one AsyncSession and encapsulates the queries for a
single entity. Repositories return ORM objects and raise application
exceptions (NotFoundError, ValidationError); they never decide who may see
what. Ownership checks belong to the service layer.
"""
