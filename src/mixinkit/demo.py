"""
Demo of composing a host from two mixins

Run with ``python -m mixinkit.demo``.
"""

from typing import Optional
import logging

from pydantic import BaseModel, ConfigDict, Field

from .config import configure_logging
from .core import Mixin, MixinSpec, mixin_inits

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Mixin 1. As plain as a mixin can get.
# ---------------------------------------------------------------------------

class MixinNumber(Mixin):
    my_number: Optional[int]

    def initialize(self, conf=None):
        self.my_number = 1

    def finalize(self):
        vars(self).pop("my_number", None)

    def get_number(self) -> int:
        return self.my_number


# ---------------------------------------------------------------------------
# Mixin 2. Depends on the host having another mixin (MixinNumber).
# ---------------------------------------------------------------------------

class MixinStringConf(BaseModel):
    """Configuration for MixinString"""
    model_config = ConfigDict(populate_by_name=True)

    default_value: Optional[str] = Field(default=None, alias="defaultValue")


class MixinString(Mixin):
    conf_model = MixinStringConf

    my_string: Optional[str]

    def initialize(self, conf: Optional[MixinStringConf] = None):
        if Mixin.not_applicable(self, MixinString, MixinNumber):
            return

        self.my_string = conf.default_value if conf is not None else None

    def finalize(self):
        vars(self).pop("my_string", None)

    def get_string(self) -> str:
        return getattr(self, "my_string", None) or "My value: "

    def join_with_number(self):
        self.my_string = self.get_string() + str(self.get_number())


# ---------------------------------------------------------------------------
# Class 1. No mixins, only a class to derive from.
# ---------------------------------------------------------------------------

class BaseClass:
    def __init__(self):
        logger.info("BaseClass is here!")


# ---------------------------------------------------------------------------
# Class 2. Uses mixins and extends BaseClass.
# ---------------------------------------------------------------------------

class Combinator(BaseClass):
    def __init__(self):
        super().__init__()

        mixin_inits(
            self, Combinator,
            MixinNumber,
            MixinSpec(MixinString, conf={"defaultValue": "Fave nr is: "}),
        )

    def destroy(self):
        self.mixin_destroys(Combinator)


def main():
    configure_logging()

    combinator = Combinator()
    print(combinator.get_string())

    combinator.join_with_number()
    print(combinator.get_string())

    combinator.destroy()


if __name__ == "__main__":
    main()
