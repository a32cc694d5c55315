"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts an action they are not allowed to perform."""

    def __init__(self, action: str, user_id: str):
        self.action = action
        self.user_id = user_id
        super().__init__(f"User {user_id} is not authorized to {action}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ConflictError(DomainError):
    """Raised when a write collides with an existing record."""

    pass


class ProfileAlreadyExistsError(ConflictError):
    """A profile already exists for this id or username."""

    pass


class InviteAlreadyExistsError(ConflictError):
    """The user already holds a pending invite."""

    pass


class InviteCodeCollisionError(ConflictError):
    """The generated invite code is already taken."""

    pass


class InvalidInviteTransitionError(BusinessRuleViolationError):
    """Raised when an invite is moved out of a terminal state."""

    def __init__(self, invite_id: str, current: str, target: str):
        super().__init__(f"Invite {invite_id} cannot move from {current} to {target}")
