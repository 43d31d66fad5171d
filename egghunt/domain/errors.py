"""
Domain Errors

Raised synchronously by entities when a caller breaks a precondition.
Lookups never raise for missing rows; they return None instead.
"""


class InvalidArgumentError(ValueError):
    """An argument passed to an entity operation is not acceptable"""

    def __init__(self, argument: str, message: str):
        self.argument = argument
        super().__init__(f"{argument}: {message}")
