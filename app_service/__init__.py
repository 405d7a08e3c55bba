"""
app_service
===========

Microservice archetype organized in Domain, Application, Ports and Adapters
layers, wired by component discovery (see app_service.di).
"""
__version__ = "1.0.0"
