"""
Base dos modelos de documento.

Todo registro guardado no backend tem ID gerado pelo servidor e metadados
de contexto (user_id, team_id) carimbados no momento da gravação.
"""

import re
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict

# Campos gravados como timestamp nativo em vez de string ISO
TIMESTAMP_FIELDS = frozenset(
    {"created_at", "updated_at", "added_at", "expires_at", "used_at", "last_active_at"}
)

# Metadados controlados pelo Store; nunca vêm do cliente
META_FIELDS = frozenset({"id", "user_id", "team_id", "created_at", "updated_at"})


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DocumentModel(BaseModel):
    """Modelo base com configurações padrão."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
    )


class RegistroMixin(BaseModel):
    """Metadados de registro e de contexto."""

    id: str
    user_id: str
    team_id: str | None = None
    created_at: datetime
    updated_at: datetime | None = None


def to_document(model: BaseModel, exclude: set[str] | None = None) -> dict[str, Any]:
    """
    Converte modelo em dicionário gravável.

    Datas e enums viram strings; timestamps permanecem datetime para que o
    backend os guarde no tipo nativo e ordene corretamente.
    """
    exclude = {"id"} | (exclude or set())
    data = model.model_dump(mode="json", exclude=exclude)
    for field in TIMESTAMP_FIELDS & data.keys():
        data[field] = getattr(model, field)
    return data


# ==================== CPF ====================

def _digito_cpf(numeros: str, peso_inicial: int) -> int:
    soma = sum(int(d) * peso for d, peso in zip(numeros, range(peso_inicial, 1, -1)))
    resto = 11 - (soma % 11)
    return 0 if resto >= 10 else resto


def cpf_valido(cpf: str) -> bool:
    """Valida CPF pelos dígitos verificadores."""
    numeros = re.sub(r"\D", "", cpf)
    if len(numeros) != 11 or numeros == numeros[0] * 11:
        return False
    return (
        _digito_cpf(numeros[:9], 10) == int(numeros[9])
        and _digito_cpf(numeros[:10], 11) == int(numeros[10])
    )


def formatar_cpf(cpf: str) -> str:
    """Formata CPF como 000.000.000-00."""
    n = re.sub(r"\D", "", cpf)
    return f"{n[:3]}.{n[3:6]}.{n[6:9]}-{n[9:]}"


def _validar_cpf(v: str) -> str:
    if not cpf_valido(v):
        raise ValueError("CPF inválido")
    return formatar_cpf(v)


CPF = Annotated[str, AfterValidator(_validar_cpf)]


def _nomes_preenchidos(v: list[str]) -> list[str]:
    return [nome.strip() for nome in v if nome and nome.strip()]


NomesResponsaveis = Annotated[list[str], AfterValidator(_nomes_preenchidos)]


def _nomes_obrigatorios(v: list[str]) -> list[str]:
    nomes = _nomes_preenchidos(v)
    if not nomes:
        raise ValueError("Informe ao menos um responsável")
    return nomes


NomesObrigatorios = Annotated[list[str], AfterValidator(_nomes_obrigatorios)]
