"""
Services Layer.

Camada de lógica de negócio do LegalX.
"""

from legalx.services.backup_service import BackupService
from legalx.services.equipe_service import EquipeService, ResultadoConvite
from legalx.services.record_store import ScopedStore

__all__ = [
    "BackupService",
    "EquipeService",
    "ResultadoConvite",
    "ScopedStore",
]
