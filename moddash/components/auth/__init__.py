"""
Auth component - Shared-password login and session verification.
"""

from .component import check_config, run, run_login, run_verify_session
from .models import (
    INVALID_PASSWORD_ERROR,
    MISSING_PASSWORD_ERROR,
    MISSING_SECRET_ERROR,
    AuthOutput,
    LoginInput,
    VerifySessionInput,
)
from .ports import AuthAdapterPort, AuthConfigPort, TimePort

__all__ = [
    # Entry points
    "run",
    "run_login",
    "run_verify_session",
    "check_config",
    # Models
    "AuthOutput",
    "LoginInput",
    "VerifySessionInput",
    "INVALID_PASSWORD_ERROR",
    "MISSING_PASSWORD_ERROR",
    "MISSING_SECRET_ERROR",
    # Ports
    "AuthAdapterPort",
    "AuthConfigPort",
    "TimePort",
]
