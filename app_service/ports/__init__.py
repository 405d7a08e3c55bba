"""
Ports Layer
===========

Capability contracts (abstract classes or typing.Protocol) that the domain
and application depend on, with no knowledge of their implementation.

Contains:
- Inbound ports: operations the application offers to driving adapters
- Outbound ports: capabilities the application needs from driven adapters

Ports are never discovered themselves; they are the keys components are
registered and resolved by.
"""
