import logging
from typing import Any, Generic, Optional, Sequence, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel, Session, select, func

from cloudpad.core.errors import StorageError

logger = logging.getLogger(__name__)

# Type générique pour le modèle (User, Note, SessionRecord)
ModelT = TypeVar("ModelT", bound=SQLModel)

class BaseRepository(Generic[ModelT]):
    """
    Repository de base pour les opérations CRUD standards.

    👉 Ne contient aucune logique métier.
    👉 Gère la persistance générique : create, read, update, count.
    👉 Les repositories concrets définissent `model = MaClasseSQLModel`.
    👉 Toute erreur SQLAlchemy au commit devient une StorageError (après rollback),
       sauf IntegrityError, relancée telle quelle après rollback.
    """

    model: Type[ModelT]

    def __init__(self, session: Session):
        self.session = session

    # ---------- READ ----------

    def count(self) -> int:
        """Retourne le nombre total d’enregistrements."""
        return self.session.exec(select(func.count(self.model.id))).one()

    def get(self, id_: Any) -> Optional[ModelT]:
        """Retourne un enregistrement par son identifiant, ou None."""
        return self.session.get(self.model, id_)

    def all(self) -> Sequence[ModelT]:
        return self.session.exec(select(self.model).order_by(self.model.id)).all()

    # ---------- CREATE ----------

    def create(self, **fields) -> ModelT:
        """Crée et persiste un nouvel enregistrement."""
        entity = self.model(**fields)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- UPDATE ----------

    def update(self, entity: ModelT, **changes) -> ModelT:
        """Met à jour un enregistrement existant."""
        for key, value in changes.items():
            setattr(entity, key, value)
        self.session.add(entity)
        self._commit()
        self.session.refresh(entity)
        return entity

    # ---------- Transaction ----------

    def _commit(self) -> None:
        try:
            self.session.commit()
        except IntegrityError:
            # contrainte (unique, FK) : au service de décider quelle erreur métier lever
            self.session.rollback()
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception("Commit failed on %s", self.model.__name__)
            raise StorageError() from e
