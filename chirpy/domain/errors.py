class DuplicateEmailError(Exception):
    """A user with this email already exists."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already in use: {email}")
