class CAPLSyntaxError(Exception):
    """Raised when the strict parser finds an error or missing node."""

    def __init__(self, message: str, line: int, column: int):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    @property
    def loc(self) -> dict:
        return {"line": self.line, "column": self.column}

    def __str__(self) -> str:
        return f"{self.message} ({self.line}:{self.column})"
