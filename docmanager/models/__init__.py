"""
API request/response schemas.

Dependencies: pydantic
System role: HTTP contracts for users, documents and ingestion jobs
"""
