"""Exceptions raised by the liquidity pipeline."""


class LiquidityError(Exception):
    """Base class for pipeline failures surfaced to the caller."""


class InvalidRequestError(LiquidityError, ValueError):
    """Caller input is unusable; raised before any fetch happens."""


class IncompleteDataError(LiquidityError):
    """A computation is missing one or more required series."""

    def __init__(self, computation: str, missing: list[str]) -> None:
        self.computation = computation
        self.missing = list(missing)
        super().__init__(
            f"Incomplete data for {computation}: missing {', '.join(self.missing)}"
        )


class DegenerateHistoryError(LiquidityError):
    """A historical series has too few valid points to be trusted."""

    def __init__(self, points: int, minimum: int) -> None:
        self.points = points
        self.minimum = minimum
        super().__init__(
            f"History has {points} valid points; more than {minimum} required"
        )
