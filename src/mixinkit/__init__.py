"""
MixinKit - Runtime Mixin Composition with Lifecycles

Attach reusable behavior bundles to host instances at runtime, each with its
own initializer, finalizer, optional configuration and host constraints,
and tear them down again per owning class in reverse attachment order.
"""

from .core import (
    Mixin, MixinHost, MixinSpec, MixinRequest,
    mixin_inits, mixin_destroys, apply_mixin, mixin_scope,
    AttachmentRecord, AttachmentRegistry,
    get_registry, has_mixin, is_composed, applied_mixins, owner_of,
    Applicability, check_applicable, not_applicable,
    MixinError, MixinDefinitionError, ConstraintViolationError,
)
from .config import MixinSettings, Environment, get_settings, set_settings, configure_logging

__version__ = "0.1.0"

__all__ = [
    # Composition
    'Mixin',
    'MixinHost',
    'MixinSpec',
    'MixinRequest',
    'mixin_inits',
    'mixin_destroys',
    'apply_mixin',
    'mixin_scope',

    # Registry and queries
    'AttachmentRecord',
    'AttachmentRegistry',
    'get_registry',
    'has_mixin',
    'is_composed',
    'applied_mixins',
    'owner_of',

    # Constraints
    'Applicability',
    'check_applicable',
    'not_applicable',

    # Errors
    'MixinError',
    'MixinDefinitionError',
    'ConstraintViolationError',

    # Configuration
    'MixinSettings',
    'Environment',
    'get_settings',
    'set_settings',
    'configure_logging',
]
