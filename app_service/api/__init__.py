"""
API Package
===========

FastAPI wiring: dependency helpers and framework default routes.
"""
