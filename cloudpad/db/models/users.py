"""
➡️ But : Table des comptes (credential store) : identifiant, hash du mot de passe, drapeau admin.

Le mot de passe en clair n'est jamais stocké, seul le hash argon2 l'est.
"""

from sqlmodel import Field

from .base import BaseModelDB

class User(BaseModelDB, table=True):
    username: str = Field(index=True, unique=True)
    hashed_password: str
    admin: bool = Field(default=False)
