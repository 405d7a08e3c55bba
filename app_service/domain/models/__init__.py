"""
Domain Models
=============

Entities and value objects. Plain dataclasses, no persistence concerns.
"""
