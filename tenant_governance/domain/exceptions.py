"""
Domain exceptions.

Only infrastructure failures are raised as exceptions; business rule
violations travel as Result errors.
"""


class PersistenceError(Exception):
    """The underlying store rejected or could not complete a read or write"""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        message = f"Persistence failure during {operation}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
