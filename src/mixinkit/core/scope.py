"""
Scoped composition for hosts whose mixins should only live for a block.
"""

from contextlib import contextmanager
from typing import Any, Iterator

from .mixin import MixinRequest, mixin_destroys, mixin_inits


@contextmanager
def mixin_scope(host: Any, owner: type, *mixins: MixinRequest) -> Iterator[Any]:
    """
    Attach mixins for the duration of a ``with`` block.

    The mixins ``owner`` attached are finalized on exit, also when the
    block raises. Mixins attached by other owners are left alone.

        with mixin_scope(sprite, Renderer, MixinOutline) as host:
            host.draw_outline()
    """
    mixin_inits(host, owner, *mixins)
    try:
        yield host
    finally:
        mixin_destroys(host, owner)


__all__ = ["mixin_scope"]
