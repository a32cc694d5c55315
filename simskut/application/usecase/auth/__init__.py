"""Authentication use cases."""

from .auth_callback import AuthCallbackUseCase
from .bootstrap import BootstrapUseCase
from .change_password import ChangePasswordUseCase
from .get_current_user import GetCurrentUserUseCase
from .sign_in import SignInUseCase
from .sign_out import SignOutUseCase
from .sign_up import SignUpUseCase

__all__ = [
    "AuthCallbackUseCase",
    "BootstrapUseCase",
    "ChangePasswordUseCase",
    "GetCurrentUserUseCase",
    "SignInUseCase",
    "SignOutUseCase",
    "SignUpUseCase",
]
