"""
Router principal da API v1.

Agrega todas as rotas organizadas por domínio.
"""

from fastapi import APIRouter

from legalx.api.v1.endpoints import (
    agenda,
    auth,
    backup,
    contexto,
    dashboard,
    documentos,
    equipes,
    financeiro,
    health,
    pessoal,
    processos,
)

api_router = APIRouter()

# Health check
api_router.include_router(health.router, prefix="/health", tags=["Health"])

# Autenticação e contexto ativo
api_router.include_router(auth.router)
api_router.include_router(contexto.router)

# Registros do escritório
api_router.include_router(processos.router)
api_router.include_router(agenda.router)
api_router.include_router(financeiro.router)
api_router.include_router(documentos.router)
api_router.include_router(pessoal.router)

# Painel e backup
api_router.include_router(dashboard.router)
api_router.include_router(backup.router)

# Equipes e convites
api_router.include_router(equipes.router)
api_router.include_router(equipes.convites_router)
