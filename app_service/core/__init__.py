"""
Core Package
============

Process-wide configuration and logging setup.
"""
