"""
Testes para utilitários e helpers.
"""
import pytest

from legalx.core.exceptions import PermissionDeniedError, ValidationError
from legalx.core.middleware import status_for
from legalx.core.security import Ator, create_access_token, verify_token
from legalx.models.base import cpf_valido, formatar_cpf
from legalx.repositories.base import Contexto
from legalx.schemas.base import APIResponse


def test_create_and_verify_access_token():
    """Testa criação e leitura de token JWT local."""
    token = create_access_token("user-123", additional_claims={"email": "a@b.com"})

    assert isinstance(token, str)
    payload = verify_token(token)
    assert payload["sub"] == "user-123"
    assert payload["email"] == "a@b.com"


def test_verify_invalid_token():
    assert verify_token("nao-e-um-jwt") is None


def test_ator_from_claims():
    ator = Ator.from_claims({"uid": "abc", "email": " Ana@Escritorio.com ", "name": "Ana"})
    assert ator == Ator(uid="abc", email="ana@escritorio.com", nome="Ana")

    assert Ator.from_claims({"sub": "xyz"}).uid == "xyz"
    assert Ator.from_claims({"email": "sem@uid.com"}) is None


def test_contexto_paths():
    assert Contexto("u1").path("processes") == "userData/u1/processes"
    assert Contexto("u1", "t1").path("events") == "teamData/t1/events"


@pytest.mark.parametrize(
    "cpf,esperado",
    [
        ("529.982.247-25", True),
        ("52998224725", True),
        ("111.111.111-11", False),
        ("123.456.789-00", False),
        ("1234", False),
    ],
)
def test_cpf_valido(cpf, esperado):
    assert cpf_valido(cpf) is esperado


def test_formatar_cpf():
    assert formatar_cpf("52998224725") == "529.982.247-25"


def test_status_for_exceptions():
    assert status_for(PermissionDeniedError("financas", "criar")) == 403
    assert status_for(ValidationError("inválido")) == 422


def test_api_response_model():
    """Testa modelo de resposta da API."""
    response = APIResponse(success=True, data={"key": "value"}, message="OK")

    assert response.success is True
    assert response.data == {"key": "value"}
    assert response.message == "OK"
