# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth_controller import AuthController
from .projects_controller import ProjectsController
from .store_controller import StoreController

__all__ = ["AuthController", "ProjectsController", "StoreController"]
