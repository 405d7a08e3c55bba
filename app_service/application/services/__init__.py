"""
Application Services
====================

Coordinators over several use cases. Discoverable when the class name ends
in "Service".
"""
