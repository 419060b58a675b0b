"""
Rotas CRUD das coleções do escritório.

Leitura nunca é bloqueada no contexto que o usuário alcança; criação,
edição e exclusão passam por AcaoProtegida antes de chegar ao Store.
"""

from typing import Callable

from fastapi import APIRouter, status
from pydantic import BaseModel

from legalx.core.dependencies import Gate, Store
from legalx.core.exceptions import ResourceNotFoundError, WriteFailedError
from legalx.core.permissions import Acao, AcaoProtegida, Modulo
from legalx.repositories.base import ScopedRepository
from legalx.schemas.base import APIResponse, ListResponse
from legalx.services.record_store import ScopedStore


def crud_router(
    *,
    prefix: str,
    tag: str,
    modulo: Modulo,
    repositorio: Callable[[ScopedStore], ScopedRepository],
    model: type[BaseModel],
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    recurso: str,
    artigo: str = "o",
) -> APIRouter:
    """
    Monta o router de uma coleção.

    Uso:
        router = crud_router(
            prefix="/processos",
            tag="Processos",
            modulo=Modulo.PROCESSOS,
            repositorio=lambda store: store.processos,
            model=Processo,
            create_schema=ProcessoCreate,
            update_schema=ProcessoUpdate,
            recurso="Processo",
        )
    """
    router = APIRouter(prefix=prefix, tags=[tag])

    @router.get("", response_model=ListResponse[model])
    async def listar(store: Store):
        registros = await repositorio(store).get_all()
        return ListResponse(data=registros, total=len(registros))

    @router.get("/{registro_id}", response_model=APIResponse[model])
    async def obter(registro_id: str, store: Store):
        registro = await repositorio(store).get_by_id(registro_id)
        if registro is None:
            raise ResourceNotFoundError(recurso, registro_id)
        return APIResponse(success=True, data=registro)

    @router.post(
        "",
        response_model=APIResponse[model],
        status_code=status.HTTP_201_CREATED,
    )
    async def criar(dados: create_schema, store: Store, gate: Gate):
        registro = await AcaoProtegida(gate, modulo, Acao.CRIAR).executar_ou_falhar(
            lambda: repositorio(store).save(dados),
            WriteFailedError(recurso.lower(), "salvar"),
        )
        return APIResponse(
            success=True, data=registro, message=f"{recurso} criad{artigo} com sucesso"
        )

    @router.patch("/{registro_id}", response_model=APIResponse[model])
    async def atualizar(registro_id: str, dados: update_schema, store: Store, gate: Gate):
        # None do Store: ausente no contexto ativo ou falha de backend (já registrada)
        registro = await AcaoProtegida(gate, modulo, Acao.EDITAR).executar_ou_falhar(
            lambda: repositorio(store).update(
                registro_id, dados.model_dump(exclude_unset=True)
            ),
            ResourceNotFoundError(recurso, registro_id),
        )
        return APIResponse(success=True, data=registro, message=f"{recurso} atualizad{artigo}")

    @router.delete("/{registro_id}", response_model=APIResponse[None])
    async def remover(registro_id: str, store: Store, gate: Gate):
        await AcaoProtegida(gate, modulo, Acao.EXCLUIR).executar_ou_falhar(
            lambda: repositorio(store).delete(registro_id),
            ResourceNotFoundError(recurso, registro_id),
        )
        return APIResponse(success=True, message=f"{recurso} removid{artigo}")

    return router
