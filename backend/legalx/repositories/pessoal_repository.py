"""
Repositories do quadro de pessoal, em ordem alfabética.
"""

from legalx.models.pessoal import Advogado, AdvogadoBase, Funcionario, FuncionarioBase
from legalx.repositories.base import ScopedRepository


class AdvogadoRepository(ScopedRepository[Advogado]):
    collection = "lawyers"
    model = Advogado
    base_model = AdvogadoBase
    order_by = "nome_completo"
    descending = False
    resource_name = "Advogado"


class FuncionarioRepository(ScopedRepository[Funcionario]):
    collection = "employees"
    model = Funcionario
    base_model = FuncionarioBase
    order_by = "nome_completo"
    descending = False
    resource_name = "Funcionário"
