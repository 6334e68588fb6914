from datetime import date


class LedgerError(Exception):
    """Base class for balance ledger errors.

    ``code`` is the snake_case detail the HTTP layer reports.
    """

    code = "ledger_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CardNotFound(LedgerError):
    code = "card_not_found"

    def __init__(self, card_number: str):
        self.card_number = card_number
        super().__init__(f"Credit card not found for number: {card_number}")


class UserNotFound(LedgerError):
    code = "user_not_found"

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class InvalidDate(LedgerError):
    code = "invalid_date"

    def __init__(self, message: str = "balance date is required", day: date | None = None):
        self.day = day
        super().__init__(message)


class CardExists(LedgerError):
    code = "card_exists"

    def __init__(self, card_number: str):
        self.card_number = card_number
        super().__init__(f"Credit card already registered: {card_number}")
