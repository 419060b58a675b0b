"""
Schemas do painel: estatísticas gerais do contexto ativo.
"""

from pydantic import BaseModel


class ContagemProcessos(BaseModel):
    total: int = 0
    em_andamento: int = 0
    concluidos: int = 0


class ContagemEventos(BaseModel):
    total: int = 0
    pendentes: int = 0
    concluidos: int = 0


class ContagemPessoas(BaseModel):
    total: int = 0
    ativos: int = 0
    inativos: int = 0


class EstatisticasGerais(BaseModel):
    """Contagens usadas no painel inicial."""

    processos: ContagemProcessos
    eventos: ContagemEventos
    documentos: int = 0
    advogados: ContagemPessoas
    funcionarios: ContagemPessoas
