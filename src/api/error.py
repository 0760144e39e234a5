from libs.result import Error


class ClientError(Exception):
    """Use case error raised from a route; rendered as {"error": {"code", "message"}}"""

    def __init__(self, error: Error, status_code: int = 400):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    def to_content(self) -> dict:
        return {"error": {"code": self.error.code, "message": self.error.message}}
