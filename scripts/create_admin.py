"""
Crée un compte administrateur, ou promeut un compte existant.

    python scripts/create_admin.py alice 'motdepasse'

Les comptes admin ne se créent jamais via l'API.
"""

import argparse
import logging

from sqlmodel import Session

from cloudpad.core.config import settings
from cloudpad.core.log import configure_logging
from cloudpad.db.repositories.users import UserRepository
from cloudpad.db.session import build_engine, init_db
from cloudpad.security.password import hash_password

logger = logging.getLogger("cloudpad.scripts.create_admin")


def create_admin(session: Session, username: str, password: str) -> None:
    repo = UserRepository(session)
    user = repo.get_by_username(username)
    if user:
        repo.update(user, admin=True, hashed_password=hash_password(password))
        logger.info("User %s promoted to admin", username)
    else:
        repo.create(username=username, hashed_password=hash_password(password), admin=True)
        logger.info("Admin %s created", username)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("username")
    parser.add_argument("password")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(settings.DATABASE_URL)
    init_db(engine)
    with Session(engine) as session:
        create_admin(session, args.username, args.password)
    engine.dispose()


if __name__ == "__main__":
    main()
