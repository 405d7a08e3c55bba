"""
Outbound Ports
==============

Capabilities the application requires from the outside world: object
storage, queues, key-value stores, secret stores, persistence.
Implemented by driven adapters.
"""
