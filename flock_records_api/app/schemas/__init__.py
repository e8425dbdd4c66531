"""
Pydantic schema definitions for API payloads and the stored document.

Python attributes are snake_case; the JSON on the wire and on disk uses
camelCase (``flockId``, ``dailyRecords``...) through an alias generator.
"""
