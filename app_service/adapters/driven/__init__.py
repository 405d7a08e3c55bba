"""
Driven Adapters
===============

Outbound adapters implementing outbound ports. A driven adapter is
discoverable when its name ends in "Service", e.g.

    class S3StorageService(ObjectStorage):
        def __init__(self, settings: Settings):
            ...
"""
