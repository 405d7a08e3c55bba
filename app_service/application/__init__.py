"""
Application Layer
=================

Application services and use cases.
This layer orchestrates domain entities through ports.

Contains:
- Use Cases: Business operations, one class per operation, named *Case
- Services: Application services that coordinate several use cases, named *Service

Both are discovered by name and wired by the ports they implement and
depend on (see app_service.di). They never import adapters.
"""
