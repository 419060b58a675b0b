"""
Schemas de exportação, importação e verificação de integridade.
"""

from typing import Any

from pydantic import BaseModel, Field

from legalx.schemas.base import BaseSchema

# Ordem e nomes das coleções no arquivo de backup
ENTIDADES_BACKUP = (
    "processos",
    "eventos",
    "receitas",
    "despesas",
    "documentos",
    "advogados",
    "funcionarios",
)


class BackupPayload(BaseModel):
    """Arquivo de backup. Coleções ausentes ficam intocadas na importação."""

    versao: str = "1.0"
    exportado_em: str | None = None
    processos: list[dict[str, Any]] | None = None
    eventos: list[dict[str, Any]] | None = None
    receitas: list[dict[str, Any]] | None = None
    despesas: list[dict[str, Any]] | None = None
    documentos: list[dict[str, Any]] | None = None
    advogados: list[dict[str, Any]] | None = None
    funcionarios: list[dict[str, Any]] | None = None


class ImportacaoRequest(BaseSchema):
    dados: BackupPayload
    confirmar: bool = False


class ImportacaoResultado(BaseModel):
    """Quantidade gravada por coleção e cópia de segurança anterior."""

    importados: dict[str, int] = Field(default_factory=dict)
    falhas: dict[str, int] = Field(default_factory=dict)
    backup_anterior: dict[str, Any]


class ProblemaIntegridade(BaseModel):
    entidade: str
    id: str | None = None
    problemas: list[str]


class RelatorioIntegridade(BaseModel):
    valido: bool
    total_registros: int
    problemas: list[ProblemaIntegridade] = Field(default_factory=list)
