# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: faultline

"""
Request-scoped context propagation for faultline.
"""

from __future__ import annotations

from faultline.context.helpers import (
    call_later_with_context,
    gather_with_context,
    with_context,
)
from faultline.context.runtime import (
    RuntimeEnvironment,
    RuntimeSettings,
    detect_runtime_environment,
    is_edge_runtime,
)
from faultline.context.storage import (
    ContextStorage,
    FallbackContextStorage,
    NativeContextStorage,
    create_context_storage,
)

__all__ = [
    # Runtime detection
    "RuntimeEnvironment",
    "RuntimeSettings",
    "detect_runtime_environment",
    "is_edge_runtime",
    # Storage
    "ContextStorage",
    "FallbackContextStorage",
    "NativeContextStorage",
    "create_context_storage",
    # Async helpers
    "with_context",
    "gather_with_context",
    "call_later_with_context",
]
