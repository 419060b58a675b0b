"""
Exceções customizadas da aplicação.

Define hierarquia de exceções para tratamento consistente de erros.
O Store converte falhas de backend em valores de retorno; só sobem como
exceção a falta de usuário autenticado, a validação de campos e as
negativas de permissão.
"""

from typing import Any


class LegalXException(Exception):
    """Exceção base do LegalX."""

    def __init__(
        self,
        message: str,
        code: str = "LEGALX_ERROR",
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


# === Exceções de Autenticação ===

class AuthenticationError(LegalXException):
    """Nenhum usuário autenticado ou credenciais inválidas."""

    def __init__(self, message: str = "Usuário não autenticado"):
        super().__init__(message, code="AUTH_ERROR")


class InvalidTokenError(AuthenticationError):
    """Token inválido ou expirado."""

    def __init__(self):
        super().__init__("Token inválido")
        self.code = "INVALID_TOKEN"


class FirebaseAuthError(AuthenticationError):
    """Erro de autenticação Firebase."""

    def __init__(self, message: str = "Erro na autenticação Firebase"):
        super().__init__(message)
        self.code = "FIREBASE_AUTH_ERROR"


# === Exceções de Autorização ===

class AuthorizationError(LegalXException):
    """Erro de autorização/permissão."""

    def __init__(self, message: str = "Acesso negado"):
        super().__init__(message, code="AUTHORIZATION_ERROR")


class PermissionDeniedError(AuthorizationError):
    """O papel do usuário não concede a ação no módulo."""

    def __init__(self, modulo: str, acao: str | None = None):
        message = f"Você não possui permissão para acessar o módulo {modulo}"
        if acao:
            message = f"Você não possui permissão para {acao} em {modulo}"
        super().__init__(message)
        self.code = "PERMISSION_DENIED"
        self.details = {"modulo": modulo, "acao": acao}


class TenantAccessError(AuthorizationError):
    """Usuário não é membro ativo da equipe solicitada."""

    def __init__(self, team_id: str | None = None):
        super().__init__("Acesso não permitido a esta equipe")
        self.code = "TEAM_ACCESS_DENIED"
        if team_id:
            self.details = {"team_id": team_id}


# === Exceções de Recursos ===

class ResourceNotFoundError(LegalXException):
    """Recurso não encontrado."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str | None = None,
    ):
        message = f"{resource_type} não encontrado"
        if resource_id:
            message = f"{resource_type} com ID {resource_id} não encontrado"
        super().__init__(message, code="NOT_FOUND")
        self.resource_type = resource_type
        self.resource_id = resource_id


class ResourceAlreadyExistsError(LegalXException):
    """Recurso já existe (conflito)."""

    def __init__(self, message: str):
        super().__init__(message, code="ALREADY_EXISTS")


# === Exceções de Validação ===

class ValidationError(LegalXException):
    """Erro de validação de dados."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        errors: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field
        self.errors = errors or []
        if self.errors:
            self.details = {"errors": self.errors}


class InvalidCPFError(ValidationError):
    """CPF inválido."""

    def __init__(self, cpf: str):
        super().__init__(f"CPF inválido: {cpf}", field="cpf")
        self.code = "INVALID_CPF"


# === Exceções de Negócio ===

class BusinessRuleError(LegalXException):
    """Violação de regra de negócio."""

    def __init__(self, message: str, rule: str | None = None):
        super().__init__(message, code="BUSINESS_RULE_VIOLATION")
        self.rule = rule


class InvalidStatusTransitionError(BusinessRuleError):
    """Transição de status não permitida."""

    def __init__(self, atual: str, novo: str):
        super().__init__(
            f"Transição de status não permitida: {atual} -> {novo}",
            rule="STATUS_TRANSITION",
        )
        self.code = "INVALID_STATUS_TRANSITION"


class InvitationError(BusinessRuleError):
    """Convite de equipe recusado."""

    def __init__(self, message: str, resultado: str):
        super().__init__(message, rule="INVITATION")
        self.code = f"INVITATION_{resultado.upper()}"
        self.details = {"resultado": resultado}


# === Exceções de Armazenamento ===

class StorageError(LegalXException):
    """Erro de armazenamento."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message, code="STORAGE_ERROR")
        self.operation = operation


class BackendUnavailableError(StorageError):
    """Backend de documentos indisponível ou com falha."""

    def __init__(self, operation: str, cause: str | None = None):
        message = f"Backend de documentos indisponível ({operation})"
        if cause:
            message = f"{message}: {cause}"
        super().__init__(message, operation=operation)
        self.code = "BACKEND_UNAVAILABLE"


class WriteFailedError(StorageError):
    """Operação de escrita não concluída pelo Store."""

    def __init__(self, resource_type: str, operation: str):
        super().__init__(
            f"Não foi possível {operation} {resource_type}. Tente novamente.",
            operation=operation,
        )
        self.code = "WRITE_FAILED"
