"""Account payloads for the authentication collaborator."""

from pydantic import BaseModel, Field


class SecurityAnswers(BaseModel):
    q1: str = Field(..., min_length=1, max_length=200)
    q2: str = Field(..., min_length=1, max_length=200)
    q3: str = Field(..., min_length=1, max_length=200)

    def normalized(self) -> tuple[str, str, str]:
        """Answers compared case-insensitively, ignoring outer whitespace."""
        return tuple(a.strip().casefold() for a in (self.q1, self.q2, self.q3))


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)
    answers: SecurityAnswers


class LoginRequest(BaseModel):
    username: str
    password: str


class ResetPasswordRequest(BaseModel):
    username: str
    answers: SecurityAnswers
    new_password: str = Field(..., min_length=6, max_length=72)


class UserSession(BaseModel):
    """What a successful login hands back. Never any hash."""
    user_id: int
    username: str
