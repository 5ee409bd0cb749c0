"""
➡️ But : Configurer la base et gérer les sessions de base de données.

build_engine() : connexion à la base (sqlite:///cloudpad.db par défaut, Postgres via DATABASE_URL).

init_db() : crée les tables à partir des modèles SQLModel.

get_session() : dépendance FastAPI qui ouvre une session sur l'engine de l'application
(request.app.state.engine), la fournit aux routes, puis la ferme proprement.

🔹 Avantages :

Un seul endroit pour gérer les connexions DB.

Pas d'engine global : chaque app (prod, tests) porte le sien.
"""

from typing import Dict, Any
from fastapi import Request
from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

# Import all models for creating all tables
from cloudpad.db.models.users import User  # noqa: F401
from cloudpad.db.models.notes import Note  # noqa: F401
from cloudpad.db.models.sessions import SessionRecord  # noqa: F401


def build_engine(url: str, *, echo: bool = False) -> Engine:
    assert url, "DATABASE_URL must be set"

    is_sqlite = url.startswith("sqlite:")
    in_memory = is_sqlite and (url in ("sqlite://", "sqlite:///") or ":memory:" in url)

    connect_args: Dict[str, Any] = {}
    kwargs: Dict[str, Any] = {}
    if is_sqlite:
        # Requis pour SQLite quand utilisé dans un app serveur (multi-threads)
        connect_args["check_same_thread"] = False
    if in_memory:
        # une seule connexion partagée, sinon chaque thread voit une base vide
        kwargs["poolclass"] = StaticPool

    return create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        pool_pre_ping=not is_sqlite,  # ping utile pour Postgres/MySQL ; inutile pour SQLite
        **kwargs,
    )


def init_db(engine: Engine) -> None:
    """
    Crée les tables si elles n'existent pas.
    """
    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    """
    Dépendance FastAPI : fournit une session par requête.
    Utilisation :
        def route(..., session: Session = Depends(get_session)):
            ...
    """
    with Session(request.app.state.engine) as session:
        yield session
