"""
Service layer abstraction.

Each service encapsulates the persistence logic for a domain so API
handlers never build SQL themselves.
"""
