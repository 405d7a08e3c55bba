"""
Adapters Layer
==============

Concrete implementations bound to a specific technology.

Contains:
- Driving adapters: inbound, invoke the application (controllers, consumers)
- Driven adapters: outbound, implement outbound ports (clients, repositories)

Adapters depend on ports and the application, never the other way round.
"""
