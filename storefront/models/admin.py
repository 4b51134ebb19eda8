from pydantic import BaseModel, model_validator

from storefront.config import MIN_PASSWORD_LENGTH


class AdminLogin(BaseModel):
    email: str
    password: str


class AdminSignup(BaseModel):
    email: str
    password: str
    confirmPassword: str

    @model_validator(mode="after")
    def _check_password(self):
        if self.password != self.confirmPassword:
            raise ValueError("Passwords do not match")
        if len(self.password) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
        if "@" not in self.email:
            raise ValueError("Invalid email address")
        return self

