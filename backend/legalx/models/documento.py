"""
Modelo de Documento gerado (procuração, recibo).
"""

import enum
from typing import Any

from pydantic import Field

from legalx.models.base import DocumentModel, RegistroMixin


class TipoDocumento(str, enum.Enum):
    PROCURACAO = "procuracao"
    RECIBO = "recibo"


class DocumentoBase(DocumentModel):
    """Campos do documento; `dados` depende do tipo."""

    tipo: TipoDocumento
    cliente: str = Field(..., min_length=1)
    dados: dict[str, Any] = Field(default_factory=dict)


class Documento(DocumentoBase, RegistroMixin):
    """Documento gravado."""
