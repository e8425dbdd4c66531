"""
Endpoint modules.

Each module defines an APIRouter for one resource: ``records`` for
writing daily records and ``flocks`` for reading flocks back.
"""
