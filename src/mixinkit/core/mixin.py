"""
Mixin - Runtime Behavior Composition

🧩 Composable Host Capabilities:
A Mixin subclass is a named bundle of methods and attributes that gets
installed onto a host *instance* at runtime, with its own initializer,
finalizer and optional configuration.

Instructions for writing mixins:
- Override ``initialize(self, conf=None)`` to set up state on the host.
  ``self`` is the host, so members of other mixins are reachable.
- Override ``finalize(self)`` to tear that state down again.
- Set ``conf_model`` to a pydantic model to have dict configuration
  validated before it reaches ``initialize``.
- Set ``multi_mixin = True`` for mixins that must be initialized again every
  time they are requested (e.g. mixins with a tree that needs re-priming).
- Guard host requirements with ``Mixin.not_applicable(self, MyMixin, Required)``.

Instructions for hosts:

    class Combinator(BaseClass):
        def __init__(self):
            super().__init__()
            mixin_inits(self, Combinator, MixinNumber,
                        MixinSpec(MixinString, conf={"default_value": "a string"}))

        def destroy(self):
            self.mixin_destroys(Combinator)

Each class in a host hierarchy passes *itself* as the owner, so a base class
and a derived class tear down only the mixins they attached.
"""

from typing import Any, ClassVar, Dict, List, Mapping, Optional, Type, Union
from dataclasses import dataclass
import logging
import types

from pydantic import BaseModel

from .constraints import check_applicable, not_applicable
from .errors import MixinDefinitionError
from .registry import (
    AttachmentRegistry, REGISTRY_ATTR,
    get_registry, has_mixin, applied_mixins, is_composed,
)

logger = logging.getLogger(__name__)

# Names a Mixin subclass uses to talk to the framework, never installed on hosts
_FRAMEWORK_HOOKS = frozenset({"initialize", "finalize", "multi_mixin", "conf_model", "_mixin_members"})
_SPEC_KEYS = frozenset({"mixin", "conf", "multi"})


@dataclass(frozen=True)
class MixinSpec:
    """
    One mixin request for ``mixin_inits``.

    Args:
        mixin: The Mixin subclass to attach
        conf: Configuration handed to the mixin's initializer
        multi: Call-site override of the mixin's ``multi_mixin`` policy
    """
    mixin: Type['Mixin']
    conf: Any = None
    multi: Optional[bool] = None

    def __post_init__(self):
        if not _is_mixin_class(self.mixin):
            raise MixinDefinitionError(f"{self.mixin!r} is not a Mixin subclass")

    @property
    def repeat(self) -> bool:
        """Whether the initializer runs again on an already attached mixin"""
        if self.multi is not None:
            return self.multi
        return self.mixin.multi_mixin


MixinRequest = Union[Type['Mixin'], MixinSpec, Mapping[str, Any]]


def _is_mixin_class(obj: Any) -> bool:
    return isinstance(obj, type) and issubclass(obj, Mixin) and obj is not Mixin


def _as_spec(request: MixinRequest) -> MixinSpec:
    if isinstance(request, MixinSpec):
        return request

    if isinstance(request, Mapping):
        unknown = set(request) - _SPEC_KEYS
        if unknown or "mixin" not in request:
            raise MixinDefinitionError(
                f"Mixin request mappings take 'mixin', 'conf' and 'multi', got {sorted(request)}"
            )
        return MixinSpec(request["mixin"], request.get("conf"), request.get("multi"))

    return MixinSpec(request)


def _collect_members(mixin: type) -> Dict[str, Any]:
    """Gather the methods and attributes ``mixin`` installs on a host"""
    members: Dict[str, Any] = {}

    for klass in reversed(mixin.__mro__):
        if klass in Mixin.__mro__:
            continue

        for name, value in vars(klass).items():
            if name.startswith("__") or name.startswith("_abc_") or name in _FRAMEWORK_HOOKS:
                continue

            if not isinstance(value, (types.FunctionType, classmethod, staticmethod)) \
                    and hasattr(type(value), "__get__"):
                raise MixinDefinitionError(
                    f"{mixin.__name__}.{name} is a {type(value).__name__}; only plain methods, "
                    f"classmethods, staticmethods and attributes can be installed on a host"
                )

            members[name] = value

    return members


def _bind(value: Any, host: Any, mixin: type) -> Any:
    if isinstance(value, types.FunctionType):
        return types.MethodType(value, host)
    if isinstance(value, classmethod):
        return value.__get__(None, mixin)
    if isinstance(value, staticmethod):
        return value.__func__
    if isinstance(value, (list, dict, set)):
        return value.copy()
    return value


def _set(host: Any, name: str, value: Any):
    try:
        object.__setattr__(host, name, value)
    except AttributeError as e:
        raise MixinDefinitionError(
            f"Can not install {name!r} on {type(host).__name__}: {e}"
        ) from e


def apply_mixin(host: Any, mixin: Type['Mixin']) -> Dict[str, Any]:
    """
    Install the members of ``mixin`` onto ``host``.

    Called by ``mixin_inits``; there is no need to call it manually. Only
    non-dunder names are written to the instance, so the host keeps
    reporting its own class afterwards.

    Returns:
        The instance attributes the mixin's members replaced, by name
    """
    instance_attrs = vars(host)
    replaced = {
        name: instance_attrs[name]
        for name in mixin._mixin_members if name in instance_attrs
    }

    try:
        for name, value in mixin._mixin_members.items():
            _set(host, name, _bind(value, host, mixin))
    except MixinDefinitionError:
        _withdraw_mixin(host, mixin, replaced)
        raise

    return replaced


def _withdraw_mixin(host: Any, mixin: Type['Mixin'], replaced: Dict[str, Any]):
    """Undo ``apply_mixin``, putting back whatever the members replaced"""
    instance_attrs = vars(host)
    for name in mixin._mixin_members:
        if name in replaced:
            instance_attrs[name] = replaced[name]
        else:
            instance_attrs.pop(name, None)


def _resolve_conf(spec: MixinSpec) -> Any:
    model = spec.mixin.conf_model
    if model is None or isinstance(spec.conf, model):
        return spec.conf
    return model.model_validate(spec.conf if spec.conf is not None else {})


def _bookkeeping_members() -> Dict[str, Any]:
    return {
        "mixin_destroys": mixin_destroys,
        "has_mixin": has_mixin,
        "applied_mixins": applied_mixins,
    }


def _start_registry(host: Any) -> AttachmentRegistry:
    if not hasattr(host, "__dict__"):
        raise MixinDefinitionError(
            f"{type(host).__name__} instances have no __dict__ and can not host mixins"
        )

    # Every composed host gets the framework's own members, unless its class has them
    for name, func in _bookkeeping_members().items():
        if not hasattr(type(host), name):
            _set(host, name, types.MethodType(func, host))

    registry = AttachmentRegistry()
    _set(host, REGISTRY_ATTR, registry)
    logger.debug(f"Started mixin registry for {type(host).__name__}")
    return registry


def _retire_registry(host: Any, registry: AttachmentRegistry):
    registry.clear()
    object.__delattr__(host, REGISTRY_ATTR)
    logger.debug(f"Retired mixin registry for {type(host).__name__}")


def mixin_inits(host: Any, owner: type, *mixins: MixinRequest) -> Any:
    """
    Attach and initialize mixins on a host.

    Args:
        host: Instance of the class using mixins
        owner: The class performing this round of attachment
        *mixins: Mixin classes, MixinSpec objects or ``{"mixin": ..., "conf": ...}`` mappings

    Returns:
        The host, for use in expressions
    """
    specs = [_as_spec(request) for request in mixins]
    if not specs:
        return host

    registry = get_registry(host)
    if registry is None:
        registry = _start_registry(host)

    for spec in specs:
        mixin = spec.mixin
        is_first = not has_mixin(host, mixin)
        replaced = None

        try:
            if is_first:
                replaced = apply_mixin(host, mixin)
            else:
                logger.debug(f"{type(host).__name__} already has {mixin.__name__}, members left as they are")

            if is_first or spec.repeat:
                mixin.initialize(host, _resolve_conf(spec))
        except Exception:
            # A mixin that failed to set up leaves no members and no empty registry behind
            if replaced is not None:
                _withdraw_mixin(host, mixin, replaced)
            if len(registry) == 0:
                _retire_registry(host, registry)
            raise

        if is_first:
            registry.add(mixin, owner, types.MethodType(mixin.finalize, host))
            logger.debug(f"{owner.__name__} attached {mixin.__name__} to {type(host).__name__}")

    return host


def mixin_destroys(host: Any, owner: type):
    """
    Finalize the mixins ``owner`` attached to ``host``, newest first.

    Once every attached mixin has been finalized, whichever owner attached
    it, the registry is removed from the host.

    Args:
        host: Instance of the class using mixins
        owner: The class that attached the mixins (the class calling this)
    """
    registry = get_registry(host)
    if registry is None:
        logger.debug(f"{type(host).__name__} has no mixins to destroy")
        return

    for record in reversed(registry.owned_by(owner)):
        record.destroy()
        registry.mark_finalized(record)

    if registry.drained:
        _retire_registry(host, registry)
    else:
        logger.debug(
            f"{owner.__name__} finished teardown of {type(host).__name__}, "
            f"{len(registry) - registry.destroyed} mixin(s) still attached by other classes"
        )


class Mixin:
    """
    Base class to derive mixins from.

    Subclasses are never instantiated; their members are installed onto
    hosts by ``mixin_inits``. Properties and other descriptors can not live
    on an instance and are rejected when the subclass is defined.
    """

    multi_mixin: ClassVar[bool] = False
    conf_model: ClassVar[Optional[Type[BaseModel]]] = None
    _mixin_members: ClassVar[Dict[str, Any]] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        cls._mixin_members = _collect_members(cls)

    def initialize(self, conf: Any = None):
        """Set up the mixin on ``self`` (the host)"""

    def finalize(self):
        """Tear the mixin down again"""

    # Framework helpers, reachable as Mixin.<name> from mixins and hosts
    mixin_inits = staticmethod(mixin_inits)
    mixin_destroys = staticmethod(mixin_destroys)
    has_mixin = staticmethod(has_mixin)
    not_applicable = staticmethod(not_applicable)
    check_applicable = staticmethod(check_applicable)
    apply_mixin = staticmethod(apply_mixin)


class MixinHost:
    """
    Optional base class for hosts.

    Gives hosts the composition calls as methods; hosts that do not inherit
    from it get ``mixin_destroys``, ``has_mixin`` and ``applied_mixins``
    installed the first time they compose mixins.
    """

    def mixin_inits(self, owner: type, *mixins: MixinRequest) -> 'MixinHost':
        return mixin_inits(self, owner, *mixins)

    def mixin_destroys(self, owner: type):
        mixin_destroys(self, owner)

    def has_mixin(self, mixin: type) -> bool:
        return has_mixin(self, mixin)

    def applied_mixins(self) -> List[Type[Mixin]]:
        return applied_mixins(self)

    @property
    def is_composed(self) -> bool:
        return is_composed(self)



__all__ = [
    "Mixin", "MixinHost", "MixinSpec", "MixinRequest",
    "mixin_inits", "mixin_destroys", "apply_mixin",
]
