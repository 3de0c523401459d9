"""Protocol-misuse errors a TAP session may raise.

A failing assertion is never an error: it is reported through the TAP stream
and the boolean return value. These exceptions only signal that the session
itself was driven in an order TAP does not allow.
"""


class TapError(RuntimeError):
    """Base class for TAP protocol misuse."""

    default_message = "TAP protocol misuse"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class AlreadyPlanned(TapError):
    """A plan line has already been emitted but a change to it was requested."""

    default_message = "Plan line emitted already"


class AlreadyFinished(TapError):
    """`finalize` or `bail` ran already but more state-changing calls arrived."""

    default_message = "TAP session closed already"


class LatePlan(TapError):
    """A plan was requested after the first test line was printed.

    TAP only allows the plan line at the beginning or the end. Printing it at
    the end is what `Session.finalize` does.
    """

    default_message = "Too late to plan tests now"
