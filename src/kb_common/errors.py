"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Wager
  2xxx: Match
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Wager ---

class NoSelectionsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "No wager selections to confirm", 422)


class InsufficientBalanceError(AppError):
    def __init__(self, required: int, available: int) -> None:
        super().__init__(
            1002,
            f"Insufficient balance: required {required}, available {available}",
            422,
        )


class UnknownSelectionError(AppError):
    def __init__(self, market: str, outcome: str) -> None:
        super().__init__(1003, f"Unknown selection: {market}/{outcome}", 422)


# --- 2xxx: Match ---

class BetsClosedError(AppError):
    def __init__(self, phase: str) -> None:
        super().__init__(2001, f"Betting is closed in phase {phase}", 409)


class IllegalTransitionError(AppError):
    def __init__(self, operation: str, phase: str) -> None:
        super().__init__(2002, f"Cannot {operation} in phase {phase}", 409)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
