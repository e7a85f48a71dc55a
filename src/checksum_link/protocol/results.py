"""Result codes returned by the receiver for each transmitted frame."""

from __future__ import annotations

from enum import Enum


class ResultCode(str, Enum):
    """Outcome of one transmission attempt, as sent over the wire."""

    DATA_SUCCESS = "DATA_SUCCESS"
    DATA_ERROR = "DATA_ERROR"
    CODE_ERROR = "CODE_ERROR"

    @classmethod
    def parse(cls, token: str) -> ResultCode:
        """Map a wire token to a ResultCode.

        Raises:
            ValueError: If the token is not one of the known literals.
        """
        try:
            return cls(token.strip())
        except ValueError:
            raise ValueError(f"Unknown result token: {token!r}") from None

    def __str__(self) -> str:
        return self.value
