"""
Schemas de Documento gerado.
"""

from typing import Any

from legalx.models.documento import DocumentoBase, TipoDocumento
from legalx.schemas.base import BaseSchema


class DocumentoCreate(DocumentoBase):
    """Schema para gravação de procuração ou recibo."""


class DocumentoUpdate(BaseSchema):
    tipo: TipoDocumento | None = None
    cliente: str | None = None
    dados: dict[str, Any] | None = None
