"""
➡️ But : assembler toutes les pièces du puzzle.

create_app(settings) crée l’instance FastAPI et configure :

l'état du process (app.state.settings, app.state.engine),

le cycle de vie : au démarrage création des tables + purge des sessions expirées,
à l'arrêt fermeture des connexions,

la traduction des erreurs métier en réponses HTTP,

les routers (auth, notes, admin).

🔹 Avantages :

Pas d'état global caché : les tests créent leur propre app sur une base en mémoire.

Point unique d’exécution : uvicorn cloudpad.main:app --reload.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

import uvicorn

from cloudpad.core.config import Settings, settings as default_settings
from cloudpad.core.errors import CloudPadError, StorageError
from cloudpad.core.log import configure_logging
from cloudpad.core.openapi import custom_openapi
from cloudpad.db.session import build_engine, init_db
from cloudpad.db.repositories.sessions import SessionRepository
from cloudpad.security.sessions import SessionManager

from cloudpad.api.routers import admin, authentication, notes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Démarrage
    engine = app.state.engine
    init_db(engine)
    with Session(engine) as session:
        SessionManager(
            repo=SessionRepository(session),
            settings=app.state.settings.session_settings,
        ).prune_expired()
    logger.info("%s started (env=%s)", app.title, app.state.settings.ENV)
    yield
    # Arrêt
    engine.dispose()
    logger.info("%s stopped", app.title)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Inscription, connexion, session"},
            {"name": "notes", "description": "Notes de l'utilisateur connecté"},
            {"name": "admin", "description": "Réservé aux administrateurs"},
        ],
    )
    app.state.settings = settings
    # echo seulement en dev pour ne pas polluer les logs en prod
    app.state.engine = build_engine(settings.DATABASE_URL, echo=(settings.ENV == "dev"))

    # CORS : le cookie de session impose credentials
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    # Erreurs
    @app.exception_handler(CloudPadError)
    async def cloudpad_error_handler(request: Request, exc: CloudPadError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
        err = StorageError()
        return JSONResponse(status_code=err.status_code, content={"detail": err.detail})

    # Routers
    app.include_router(authentication.router)
    app.include_router(notes.router)
    app.include_router(admin.router)

    @app.get("/", include_in_schema=False)
    def root():
        return {"message": "CloudPad backend is LIVE"}

    # Génération du schéma OpenAPI custom
    app.openapi = lambda: custom_openapi(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=default_settings.HOST, port=default_settings.PORT) # http://localhost:3000
