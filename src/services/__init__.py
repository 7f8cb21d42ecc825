# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Services package.

Service modules are imported by name (``from src.services import
project_service``); the package itself imports nothing so that schemas can
use :mod:`src.services.derived` without a cycle.
"""
