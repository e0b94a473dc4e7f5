"""Application-level exceptions.

Messages are French: they are shown as-is to the end users of the
bookkeeping front end.
"""


class AppError(Exception):
    """Base exception for application errors."""

    status_code = 400

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} introuvable : {identifier}", code="NOT_FOUND")


class AuthenticationError(AppError):
    """Raised when credentials or a session token are invalid."""

    status_code = 401

    def __init__(self, message: str = "Identifiants invalides."):
        super().__init__(message, code="AUTHENTICATION_ERROR")


class PermissionDeniedError(AppError):
    """Raised when the caller lacks the role required for an operation."""

    status_code = 403

    def __init__(self, message: str = "Accès refusé."):
        super().__init__(message, code="PERMISSION_DENIED")


class UnbalancedEntryError(AppError):
    """Raised when a journal entry is validated with debit != credit."""

    def __init__(self, total_debit: str, total_credit: str):
        super().__init__(
            "L'écriture doit être équilibrée (Débit = Crédit) pour être validée "
            f"(débit {total_debit}, crédit {total_credit}).",
            code="UNBALANCED_ENTRY",
        )


class ClosedExerciseError(AppError):
    """Raised when posting into a closed or missing accounting period."""

    def __init__(self, message: str = "L'exercice comptable est clôturé."):
        super().__init__(message, code="CLOSED_EXERCISE")


class OverlappingExerciseError(AppError):
    """Raised when a new exercise overlaps an existing one."""

    def __init__(self):
        super().__init__(
            "Un exercice existe déjà pour cette période. Les dates se chevauchent.",
            code="OVERLAPPING_EXERCISE",
        )


class DuplicateAccountError(AppError):
    """Raised when an account number already exists in a chart."""

    def __init__(self, numero_compte: str):
        super().__init__(
            f"Le compte {numero_compte} existe déjà.",
            code="DUPLICATE_ACCOUNT",
        )


class AccountInUseError(AppError):
    """Raised when deleting an account still referenced by entries, assets or invoices."""

    def __init__(self):
        super().__init__(
            "Impossible de supprimer : compte utilisé dans des écritures, immobilisations ou factures.",
            code="ACCOUNT_IN_USE",
        )


class InsufficientStockError(AppError):
    """Raised when a stock exit exceeds the quantity on hand."""

    def __init__(self, reference: str, requested: str, available: str):
        super().__init__(
            f"Stock insuffisant pour {reference} : demandé {requested}, disponible {available}",
            code="INSUFFICIENT_STOCK",
        )
