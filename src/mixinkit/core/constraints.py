"""
Constraint Checker - Runtime Host Requirements

🛡️ Best-Effort Safety Net:
Some mixins only make sense on a particular kind of host, either a concrete
class or a host that already carries another mixin. Mixins check this from
their own initializer and bail out early when the host does not qualify:

    class MixinSprite(Mixin):
        def initialize(self, conf=None):
            if Mixin.not_applicable(self, MixinSprite, GameObject):
                return
            ...

Failures are reported on the ``mixinkit`` logger and never raised, unless
strict constraints are enabled in the settings.
"""

from typing import Any
from dataclasses import dataclass
import logging

from ..config.settings import get_settings
from .errors import ConstraintViolationError
from .registry import has_mixin

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Applicability:
    """Outcome of checking one host against one mixin requirement"""
    passed: bool
    actor: str
    mixin: str
    required: str
    reason: str = ""

    def __bool__(self) -> bool:
        return self.passed


def _name(obj: Any) -> str:
    return getattr(obj, "__name__", None) or type(obj).__name__


def _is_instance(host: Any, required: type) -> bool:
    try:
        return isinstance(host, required)
    except TypeError:
        # Protocols that are not runtime_checkable cannot answer isinstance
        return False


def check_applicable(host: Any, mixin: type, required: type) -> Applicability:
    """
    Check that ``host`` qualifies for ``mixin``.

    The host qualifies when it is an instance of ``required`` (nominally, or
    structurally for runtime-checkable protocols) or when ``required`` is a
    mixin already attached to it.
    """
    actor = type(host).__name__
    mixin_name = _name(mixin)
    required_name = _name(required)

    if _is_instance(host, required) or has_mixin(host, required):
        return Applicability(True, actor, mixin_name, required_name)

    reason = (
        f"{actor} is not an instance of {required_name} and can not use mixin "
        f"{mixin_name}. Correct this fault as it can lead to unpredictable behaviour."
    )
    return Applicability(False, actor, mixin_name, required_name, reason)


def not_applicable(host: Any, mixin: type, required: type) -> bool:
    """
    Report whether ``mixin`` must refuse to set itself up on ``host``.

    Returns True (after logging the diagnostic) when the host does not
    qualify. In strict mode the failure raises ConstraintViolationError.
    """
    result = check_applicable(host, mixin, required)
    if result.passed:
        return False

    if get_settings().strict_constraints:
        raise ConstraintViolationError(result)

    logger.error(result.reason)
    return True


__all__ = ["Applicability", "check_applicable", "not_applicable"]
