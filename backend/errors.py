"""Error taxonomy for the MADE proxy. Every error maps to a status code and a Spanish message."""


class MadeError(Exception):
    status_code = 500
    default_message = "Error interno del servidor (Proxy)."

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class MethodNotAllowed(MadeError):
    status_code = 405
    default_message = "Método no permitido. Usa POST."


class MissingCredential(MadeError):
    status_code = 500
    default_message = "Clave de API no configurada en el servidor."


class InvalidInput(MadeError):
    status_code = 400
    default_message = "Solicitud inválida."


class UpstreamError(MadeError):
    """Non-success response from Gemini; status_code mirrors the upstream status."""

    default_message = "Error desconocido de Gemini."


class InternalError(MadeError):
    status_code = 500
