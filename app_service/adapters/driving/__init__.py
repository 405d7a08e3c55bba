"""
Driving Adapters
================

Inbound adapters that invoke the application through inbound ports.
"""
