"""
API package containing the HTTP routes.

``router`` in ``router.py`` aggregates the endpoint modules and is
mounted under ``/api`` by the application factory.
"""
