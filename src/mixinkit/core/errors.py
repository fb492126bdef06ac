"""
Mixin Errors

Exceptions for programming errors in unit definitions and unit requests.

Mis-composition (constraint failures, double attachment, teardown of an
uncomposed host) is reported through logging and never raised, unless strict
constraint checking is switched on in the settings.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .constraints import Applicability


class MixinError(Exception):
    """Base class for all mixinkit errors"""


class MixinDefinitionError(MixinError, TypeError):
    """A mixin class, unit request or host cannot be used for composition"""


class ConstraintViolationError(MixinError):
    """Raised by the constraint checker when strict constraints are enabled"""

    def __init__(self, result: 'Applicability'):
        super().__init__(result.reason)
        self.result = result


__all__ = ["MixinError", "MixinDefinitionError", "ConstraintViolationError"]
