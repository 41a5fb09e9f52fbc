"""
Overridable field names for the token lifecycle operations.
"""
from pydantic import BaseModel, ConfigDict


class VerificationFields(BaseModel):
    """Field names touched by ``verify_user_account``."""

    model_config = ConfigDict(frozen=True)

    verified_field: str = "verified"
    token_field: str = "verificationToken"
    token_expiration_field: str = "verificationTokenExpiration"


class ResetPasswordFields(BaseModel):
    """Field names touched by ``add_reset_password_token``."""

    model_config = ConfigDict(frozen=True)

    token_field: str = "resetPassToken"
    token_expiration_field: str = "resetPassTokenExpiration"

    # A pending verification is cleared when a reset token is issued
    verification_token_field: str = "verificationToken"
    verification_token_expiration_field: str = "verificationTokenExpiration"
