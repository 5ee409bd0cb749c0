"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) ajoute au schéma généré par FastAPI les conventions de l'API CloudPad
(cookie de session, format des erreurs, heures UTC).
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API CloudPad : notes personnelles sauvegardées automatiquement.\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- Authentification par cookie de session `cloudpad.sid` (httpOnly, SameSite=Lax, 24h).\n"
            "- Erreurs : `{\"detail\": \"message\"}`.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
