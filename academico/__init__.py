"""
Seminário Acadêmico
Academic administration backend for a theological seminary.

Architecture:
- schemas: the data contract (pydantic) shared by API and portal
- services: grade/attendance rules, compound registrations, Directus client
- PostgreSQL: every academic record, accessed with raw SQL
"""

__version__ = "1.0.0"
