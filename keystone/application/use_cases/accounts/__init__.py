# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .login_account import LoginAccountUseCase
from .register_account import RegisterAccountUseCase
from .verify_token import VerifyTokenUseCase

__all__ = ["LoginAccountUseCase", "RegisterAccountUseCase", "VerifyTokenUseCase"]
