# -*- coding: utf-8 -*-
"""
Prism: Tracing color through linear light
Copyright (c) 2026 opticsWolf

SPDX-License-Identifier: LGPL-3.0-or-later

Module: prism_errors.py — Conversion error taxonomy.

Every failure of the engine is raised before any output is produced, so a
conversion either fully succeeds or leaves nothing behind.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ParameterKind(Enum):
    """Which primitive parameter a conversion could not resolve."""
    WHITEPOINT = "whitepoint"
    PRIMARIES = "primaries"
    LUMINANCE = "luminance"
    TRANSFER = "transfer"
    DIFFERENCING = "differencing"


class ConversionError(Exception):
    """Base class for all color conversion failures."""
    pass


class UnsupportedError(ConversionError):
    """
    A recognized standard was requested that the engine does not implement.

    Callers may treat this as a capability check and reject such color
    spaces up front (see ``prism_engine.check_supported``).

    Attributes:
        kind: The parameter family of the offending value.
        value: The enumeration member itself.
    """

    def __init__(self, kind: ParameterKind, value: Any):
        self.kind = kind
        self.value = value
        name = getattr(value, "name", repr(value))
        super().__init__(f"Unsupported {kind.value}: {name}")


class InvalidPairingError(ConversionError):
    """
    A structurally meaningless conversion was requested.

    Raised for instance when a ``Scalars`` space is paired with anything
    other than ``Xyz``.
    """

    def __init__(self, src: Any, dst: Any, reason: str = ""):
        self.src = src
        self.dst = dst
        msg = f"Cannot convert {src!r} -> {dst!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class NumericDomainError(ConversionError, ValueError):
    """Input samples lie outside the domain a transform is defined on."""
    pass
