# ecorater/errors.py


class UpstreamError(Exception):
    """An external service (model or search API) failed or answered garbage."""

    def __init__(self, service: str, message: str):
        super().__init__(f"{service}: {message}")
        self.service = service
        self.message = message
