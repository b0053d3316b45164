class EventNotFoundError(Exception):
    """Raised when the requested event does not exist or is not visible."""

    def __init__(self, message: str = "Event not found.") -> None:
        super().__init__(message)


class MissingRegistrationFieldsError(Exception):
    """Raised when a registration form is submitted with blank fields."""

    def __init__(self, message: str = "All fields are required.") -> None:
        super().__init__(message)


class AlreadyRegisteredError(Exception):
    """Raised when a user registers twice for the same event."""

    def __init__(self, message: str = "You are already registered for this event.") -> None:
        super().__init__(message)


class TicketCodeExhaustedError(Exception):
    """Raised when no unused ticket code could be generated within the retry budget."""

    def __init__(self, message: str = "Could not allocate a ticket code. Please try again.") -> None:
        super().__init__(message)


class RegistrationNotFoundError(Exception):
    """Raised when a registration id does not match any registration."""

    def __init__(self, message: str = "Registration not found.") -> None:
        super().__init__(message)


class InvalidRegistrationTransitionError(Exception):
    """Raised when a moderation decision is not allowed from the registration's current status."""


class TicketNotFoundError(Exception):
    """Raised when a ticket code does not match any registration."""

    def __init__(self, message: str = "Ticket not found.") -> None:
        super().__init__(message)


class MissingProposalFieldsError(Exception):
    """Raised when an event proposal lacks a title or start time."""

    def __init__(self, message: str = "Title and Start Time are required.") -> None:
        super().__init__(message)


class MailNotConfiguredError(Exception):
    """Raised when an operation needs outgoing mail but no SMTP credentials are set."""

    def __init__(self, message: str = "Missing email credentials") -> None:
        super().__init__(message)
