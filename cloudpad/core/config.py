"""
➡️ But : Centraliser tous les paramètres configurables (nom d’app, URL DB, secret de session, cookie, port...).

Utilise pydantic-settings pour charger automatiquement les variables d’environnement (.env, variables système…).

Fournit un objet settings par défaut, que tu importes ailleurs :

from cloudpad.core.config import settings
print(settings.APP_NAME)

L'application reçoit toujours ses Settings explicitement (create_app(settings)),
ce qui permet aux tests d'utiliser une base en mémoire.


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).
"""

from datetime import timedelta
from typing import Optional

from pydantic_settings import BaseSettings

from cloudpad.security.sessions import SessionSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "CloudPad"
    ENV: str = "dev"  # dev | prod | test
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # DB
    # -----------------------------
    SQLITE_PATH: str = "cloudpad.db"  # fichier SQLite
    # Si tu veux forcer une URL différente (ex: Postgres), définis DATABASE_URL dans l'env.
    DATABASE_URL: Optional[str] = None

    # -----------------------------
    # Sessions
    # -----------------------------
    SESSION_SECRET: str = "dev_secret"    # ⚠️ change en prod
    SESSION_ALGORITHM: str = "HS256"
    SESSION_TTL_HOURS: int = 24

    # Cookie de session
    SESSION_COOKIE_NAME: str = "cloudpad.sid"
    SESSION_COOKIE_SAMESITE: str = "lax"     # "lax" | "strict" | "none"
    SESSION_COOKIE_PATH: str = "/"
    SESSION_COOKIE_SECURE: Optional[bool] = None   # auto selon ENV si None
    SESSION_COOKIE_MAX_AGE: Optional[int] = None   # auto depuis SESSION_TTL si None

    LOGOUT_REDIRECT_URL: str = "/login.html"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }

    # -----------------------------
    # Post-process values
    # -----------------------------
    def model_post_init(self, __context): # appelée automatiquement
        # DATABASE_URL par défaut depuis SQLITE_PATH si non fourni
        if not self.DATABASE_URL:
            object.__setattr__(self, "DATABASE_URL", f"sqlite:///{self.SQLITE_PATH}")

        # Cookie secure auto: true en prod si non spécifié
        if self.SESSION_COOKIE_SECURE is None:
            object.__setattr__(self, "SESSION_COOKIE_SECURE", self.ENV == "prod")

        # max_age auto depuis SESSION_TTL
        if self.SESSION_COOKIE_MAX_AGE is None:
            object.__setattr__(self, "SESSION_COOKIE_MAX_AGE", self.SESSION_TTL_HOURS * 60 * 60)

    @property
    def session_settings(self) -> SessionSettings:
        """Objet prêt à l'emploi pour le SessionManager."""
        return SessionSettings(
            secret=self.SESSION_SECRET,
            algorithm=self.SESSION_ALGORITHM,
            ttl=timedelta(hours=self.SESSION_TTL_HOURS),
        )


# Instance globale (valeurs de l'environnement) utilisée par défaut par create_app()
settings = Settings()
