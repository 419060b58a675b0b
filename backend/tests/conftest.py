"""
Pytest fixtures para testes do LegalX.
"""
import os

os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DOCUMENT_BACKEND", "memory")

from typing import Any, AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from legalx.core.dependencies import get_backend, get_current_actor  # noqa: E402
from legalx.core.exceptions import BackendUnavailableError  # noqa: E402
from legalx.core.security import Ator  # noqa: E402
from legalx.db.memory import InMemoryBackend  # noqa: E402
from legalx.main import app  # noqa: E402
from legalx.services.equipe_service import EquipeService  # noqa: E402
from legalx.services.record_store import ScopedStore  # noqa: E402

# CPF com dígitos verificadores válidos
CPF_VALIDO = "529.982.247-25"


class FailingBackend(InMemoryBackend):
    """Backend que falha em todas as operações."""

    async def _falhar(self, operation: str):
        raise BackendUnavailableError(operation, "connection reset")

    async def list_documents(self, path, order_by=None, descending=False):
        await self._falhar("list")

    async def query(self, path, filters, order_by=None, descending=False):
        await self._falhar("query")

    async def get(self, path, doc_id):
        await self._falhar("get")

    async def add(self, path, data):
        await self._falhar("add")

    async def set(self, path, doc_id, data):
        await self._falhar("set")

    async def update(self, path, doc_id, fields):
        await self._falhar("update")

    async def delete(self, path, doc_id):
        await self._falhar("delete")

    async def ping(self):
        return False


@pytest.fixture
def backend() -> InMemoryBackend:
    """Backend em memória isolado por teste."""
    return InMemoryBackend()


@pytest.fixture
def failing_backend() -> FailingBackend:
    return FailingBackend()


@pytest.fixture
def ator() -> Ator:
    return Ator(uid="user-ana", email="ana@escritorio.com", nome="Ana Souza")


@pytest.fixture
def outro_ator() -> Ator:
    return Ator(uid="user-bruno", email="bruno@escritorio.com", nome="Bruno Lima")


@pytest.fixture
def store(backend: InMemoryBackend, ator: Ator) -> ScopedStore:
    """Store no modo solo."""
    return ScopedStore(backend, ator)


@pytest.fixture
def equipe_service(backend: InMemoryBackend, ator: Ator) -> EquipeService:
    return EquipeService(backend, ator)


@pytest.fixture
def processo_data() -> dict[str, Any]:
    return {
        "nome": "Revisão de aposentadoria",
        "numero_processo": "0001234-56.2024.8.26.0100",
        "cliente": "Maria Oliveira",
        "tribunal": "TJSP",
        "advogados_responsaveis": ["Ana Souza"],
        "data_inicio": "2024-03-10",
    }


@pytest.fixture
def evento_data() -> dict[str, Any]:
    return {
        "titulo": "Audiência de conciliação",
        "data": "2024-04-02",
        "hora": "14:30",
        "tipo": "audiencia",
        "prioridade": "alta",
        "advogados": ["Ana Souza"],
    }


@pytest.fixture
def advogado_data() -> dict[str, Any]:
    return {
        "nome_completo": "Ana Souza",
        "cpf": CPF_VALIDO,
        "oab": "123456/SP",
        "comissao": 15,
        "email": "ana@escritorio.com",
    }


@pytest_asyncio.fixture
async def client(
    backend: InMemoryBackend,
    ator: Ator,
) -> AsyncGenerator[AsyncClient, None]:
    """Cria cliente HTTP autenticado para testes."""

    def override_get_backend():
        return backend

    async def override_get_current_actor():
        return ator

    app.dependency_overrides[get_backend] = override_get_backend
    app.dependency_overrides[get_current_actor] = override_get_current_actor

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def unauthenticated_client(
    backend: InMemoryBackend,
) -> AsyncGenerator[AsyncClient, None]:
    """Cria cliente HTTP sem autenticação."""
    app.dependency_overrides[get_backend] = lambda: backend

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
