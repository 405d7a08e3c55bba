"""Sample packages used as scan namespaces by the tests."""
