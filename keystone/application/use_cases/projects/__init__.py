# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .workspace import ProjectWorkspace

__all__ = ["ProjectWorkspace"]
