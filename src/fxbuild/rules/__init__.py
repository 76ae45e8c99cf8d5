"""Declarative module descriptors for the FaceFX integration."""

from __future__ import annotations

from .facefx import (
    FACEFX_EDITOR_MODULE,
    FACEFX_LIB_MODULE,
    FACEFX_MODULE,
    engine_rules,
    facefx_editor_rules,
    facefx_lib_rules,
    facefx_rules,
)
from .model import ModuleRules, ModuleType

__all__ = [
    "FACEFX_EDITOR_MODULE",
    "FACEFX_LIB_MODULE",
    "FACEFX_MODULE",
    "ModuleRules",
    "ModuleType",
    "engine_rules",
    "facefx_editor_rules",
    "facefx_lib_rules",
    "facefx_rules",
]
