"""
MixinKit Core Module

The attach/detach protocol, the per-host attachment registry and the
constraint checker. No dependencies on the demo or on any concrete mixin.
"""

from .errors import MixinError, MixinDefinitionError, ConstraintViolationError
from .registry import (
    AttachmentRecord, AttachmentRegistry,
    get_registry, has_mixin, is_composed, applied_mixins, owner_of,
)
from .constraints import Applicability, check_applicable, not_applicable
from .mixin import Mixin, MixinHost, MixinSpec, MixinRequest, mixin_inits, mixin_destroys, apply_mixin
from .scope import mixin_scope

__all__ = [
    "Mixin",
    "MixinHost",
    "MixinSpec",
    "MixinRequest",
    "mixin_inits",
    "mixin_destroys",
    "apply_mixin",
    "mixin_scope",
    "AttachmentRecord",
    "AttachmentRegistry",
    "get_registry",
    "has_mixin",
    "is_composed",
    "applied_mixins",
    "owner_of",
    "Applicability",
    "check_applicable",
    "not_applicable",
    "MixinError",
    "MixinDefinitionError",
    "ConstraintViolationError",
]
