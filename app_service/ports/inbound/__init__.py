"""
Inbound Ports
=============

Operations exposed by the application (implemented by use cases, called by
driving adapters such as HTTP controllers).
"""
