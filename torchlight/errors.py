class TorchlightError(Exception):
    """Base class for all torchlight errors."""

    pass


class PlayerUnavailable(TorchlightError, KeyError):
    """
    The player's world, entity store or entity could not be resolved.
    Callers abort the operation; nothing is retried.
    """

    def __init__(self, player_id, reason: str = "player is not resolvable"):
        super().__init__(f"{player_id}: {reason}")
        self.player_id = player_id
        self.reason = reason

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return f"{self.player_id}: {self.reason}"


class CommandError(TorchlightError, ValueError):
    """Raised when command arguments cannot be parsed."""

    pass
