# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .password_hashing import WerkzeugPasswordHasher
from .token_signing import ItsDangerousTokenSigner

__all__ = ["ItsDangerousTokenSigner", "WerkzeugPasswordHasher"]
