class RelayError(Exception):
    status_code: int = 500
    detail: str = "Internal error"

    def __init__(self, detail: str | None = None):
        if detail:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(RelayError):
    status_code = 400
    detail = "Missing required field"


class NotRegistered(RelayError):
    status_code = 404
    detail = "Telegram user not registered. Ask user to start the bot first."


class InvoiceCreationFailed(RelayError):
    status_code = 500
    detail = "Failed to create payment order"


class InvalidSignature(RelayError):
    status_code = 401
    detail = "Invalid signature"


class OrderNotFound(RelayError):
    status_code = 404
    detail = "Order not found for invoice"


class KeyNotFound(RelayError):
    status_code = 404
    detail = "Activation key not found"


class OwnerMismatch(RelayError):
    status_code = 403
    detail = "Activation key belongs to another chat"


class KeyGenerationFailed(RelayError):
    status_code = 500
    detail = "Could not allocate a unique activation key"
