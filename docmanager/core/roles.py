"""
User roles.

Dependencies: None
System role: Role vocabulary shared by models, policy and API schemas
"""

import enum


class UserRole(str, enum.Enum):
    """
    Roles assigned to user accounts.

    ADMIN: Full access to every user, document and ingestion job
    EDITOR: Manages own documents and ingestion jobs
    VIEWER: Default role for self-registered accounts
    """

    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"
