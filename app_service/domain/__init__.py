"""
Domain Layer
============

Core business logic and domain models.
This layer has no dependencies on external frameworks or infrastructure.

Contains:
- Models: Entities and value objects representing business concepts

Domain code never imports application, ports or adapters.
"""
