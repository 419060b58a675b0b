"""
Schemas base compartilhados.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

T = TypeVar("T")


class BaseSchema(BaseModel):
    """Schema base com configurações padrão."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class APIResponse(BaseModel, Generic[T]):
    """
    Resposta padronizada da API.

    Exemplo de uso:
        return APIResponse(success=True, data=processo)
    """

    success: bool
    data: T | None = None
    message: str | None = None


class ListResponse(BaseModel, Generic[T]):
    """Listagem completa do contexto ativo."""

    success: bool = True
    data: list[T]
    total: int


class ErrorDetail(BaseModel):
    """Detalhes de erro."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Resposta de erro padronizada."""

    success: bool = False
    error: ErrorDetail
