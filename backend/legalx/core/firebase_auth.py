"""
Integração com Firebase.

Inicializa o Admin SDK (compartilhado por Authentication e Firestore) e
valida tokens ID enviados pelo frontend.
"""

from typing import Any

import structlog
from firebase_admin import App, auth, credentials, initialize_app
from firebase_admin.exceptions import FirebaseError

from legalx.core.config import settings
from legalx.core.exceptions import FirebaseAuthError, InvalidTokenError

logger = structlog.get_logger()

_firebase_app: App | None = None


def get_firebase_app() -> App:
    """Inicializa Firebase Admin SDK sob demanda."""
    global _firebase_app

    if _firebase_app is None:
        options = None
        if settings.FIREBASE_PROJECT_ID:
            options = {"projectId": settings.FIREBASE_PROJECT_ID}
        try:
            if settings.FIREBASE_CREDENTIALS_PATH:
                cred = credentials.Certificate(settings.FIREBASE_CREDENTIALS_PATH)
                _firebase_app = initialize_app(cred, options)
            else:
                # ADC (Cloud Run)
                _firebase_app = initialize_app(options=options)

            logger.info("Firebase Admin SDK inicializado")
        except (ValueError, OSError) as e:
            logger.error("Erro ao inicializar Firebase Admin", error=str(e))
            raise FirebaseAuthError(f"Erro ao inicializar Firebase: {e}") from e

    return _firebase_app


class FirebaseAuthService:
    """Valida tokens ID do Firebase Authentication."""

    async def verify_token(self, id_token: str) -> dict[str, Any]:
        """
        Verifica token ID do Firebase.

        Returns:
            Claims do token (uid, email, name...)

        Raises:
            InvalidTokenError: Token inválido, revogado ou expirado
        """
        try:
            decoded_token = auth.verify_id_token(id_token, app=get_firebase_app())
        except auth.ExpiredIdTokenError:
            logger.warning("Token Firebase expirado")
            raise InvalidTokenError()
        except (auth.InvalidIdTokenError, auth.RevokedIdTokenError) as e:
            logger.warning("Token Firebase inválido", error=str(e))
            raise InvalidTokenError()
        except FirebaseError as e:
            logger.error("Erro Firebase", error=str(e))
            raise FirebaseAuthError(str(e))

        logger.debug(
            "Token Firebase verificado",
            uid=decoded_token.get("uid"),
            email=decoded_token.get("email"),
        )
        return decoded_token


firebase_auth_service = FirebaseAuthService()
