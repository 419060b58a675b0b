"""
Repositories de Receitas e Despesas, ordenadas pela data do lançamento.
"""

from legalx.models.financeiro import Despesa, DespesaBase, Receita, ReceitaBase
from legalx.repositories.base import ScopedRepository


class ReceitaRepository(ScopedRepository[Receita]):
    collection = "revenues"
    model = Receita
    base_model = ReceitaBase
    order_by = "data"
    descending = True
    resource_name = "Receita"


class DespesaRepository(ScopedRepository[Despesa]):
    collection = "expenses"
    model = Despesa
    base_model = DespesaBase
    order_by = "data"
    descending = True
    resource_name = "Despesa"
