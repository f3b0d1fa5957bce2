"""
User document model.

Maps to the `users` MongoDB collection. Only the fields the finder flows
read are modelled; account management lives with the auth provider.
"""

from __future__ import annotations

from typing import Optional

from schemas.models.base import DocBaseModel


class UserDoc(DocBaseModel):
    """Document model for the `users` collection."""

    name: str
    email: str
    phone: Optional[str] = None

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else ""
