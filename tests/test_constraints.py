"""
Constraint Checker Tests

Host requirements expressed against concrete classes, protocols and other
mixins, reported through logging or raised in strict mode.
"""

import logging
from typing import Protocol, runtime_checkable

import pytest

from mixinkit import (
    Mixin, Applicability, ConstraintViolationError,
    check_applicable, not_applicable, mixin_inits, mixin_destroys, has_mixin, is_composed,
)
from mixinkit.config import MixinSettings, set_settings
from mixinkit.demo import MixinNumber, MixinString


class GameObject:
    pass


class Player(GameObject):
    pass


class Scenery:
    pass


@runtime_checkable
class Drawable(Protocol):
    def draw(self) -> str: ...


class Canvas:
    def draw(self) -> str:
        return "canvas"


class NotChecked(Protocol):
    def draw(self) -> str: ...


class MixinSprite(Mixin):
    def initialize(self, conf=None):
        if Mixin.not_applicable(self, MixinSprite, GameObject):
            return
        self.sprite = conf or "default.png"

    def finalize(self):
        vars(self).pop("sprite", None)


@pytest.fixture
def strict():
    set_settings(MixinSettings(strict_constraints=True))


class TestCheckApplicable:
    def test_instance_of_required_class_passes(self):
        result = check_applicable(Player(), MixinSprite, GameObject)

        assert result.passed
        assert bool(result)
        assert result.reason == ""

    def test_unrelated_host_fails_with_diagnostic(self):
        result = check_applicable(Scenery(), MixinSprite, GameObject)

        assert isinstance(result, Applicability)
        assert not result
        assert result.actor == "Scenery"
        assert result.mixin == "MixinSprite"
        assert result.required == "GameObject"
        assert "Scenery is not an instance of GameObject and can not use mixin MixinSprite" in result.reason

    def test_attached_mixin_satisfies_requirement(self):
        host = Scenery()
        mixin_inits(host, Scenery, MixinNumber)

        assert check_applicable(host, MixinString, MixinNumber).passed

    def test_torn_down_mixin_no_longer_satisfies_requirement(self):
        host = Scenery()
        mixin_inits(host, Scenery, MixinNumber)
        mixin_destroys(host, Scenery)

        assert not check_applicable(host, MixinString, MixinNumber).passed

    def test_runtime_checkable_protocol_is_structural(self):
        assert check_applicable(Canvas(), MixinSprite, Drawable).passed
        assert not check_applicable(Scenery(), MixinSprite, Drawable).passed

    def test_plain_protocol_falls_back_to_membership(self):
        assert not check_applicable(Canvas(), MixinSprite, NotChecked).passed


class TestNotApplicable:
    def test_passing_host_logs_nothing(self, caplog):
        with caplog.at_level(logging.ERROR, logger="mixinkit"):
            assert not_applicable(Player(), MixinSprite, GameObject) is False

        assert caplog.records == []

    def test_failing_host_is_logged(self, caplog):
        with caplog.at_level(logging.ERROR, logger="mixinkit"):
            assert not_applicable(Scenery(), MixinSprite, GameObject) is True

        [record] = caplog.records
        assert record.levelno == logging.ERROR
        assert record.name == "mixinkit.core.constraints"
        assert "can not use mixin MixinSprite" in record.getMessage()

    def test_strict_mode_raises(self, strict):
        with pytest.raises(ConstraintViolationError) as excinfo:
            not_applicable(Scenery(), MixinSprite, GameObject)

        assert excinfo.value.result.required == "GameObject"


class TestConstraintsDuringComposition:
    def test_qualifying_host_is_set_up(self):
        host = Player()
        mixin_inits(host, Player, {"mixin": MixinSprite, "conf": "hero.png"})

        assert host.sprite == "hero.png"

    def test_mismatched_host_stays_unset_and_composition_continues(self, caplog):
        host = Scenery()
        with caplog.at_level(logging.ERROR, logger="mixinkit"):
            mixin_inits(host, Scenery, MixinSprite, MixinNumber)

        assert not hasattr(host, "sprite")
        assert host.get_number() == 1
        assert has_mixin(host, MixinSprite)
        assert len(caplog.records) == 1

    def test_missing_mixin_requirement(self, caplog):
        host = Scenery()
        with caplog.at_level(logging.ERROR, logger="mixinkit"):
            mixin_inits(host, Scenery, {"mixin": MixinString, "conf": {"default_value": "x"}})

        assert "my_string" not in vars(host)
        assert host.get_string() == "My value: "
        assert "is not an instance of MixinNumber" in caplog.text

    def test_requirement_order_matters(self, caplog):
        host = Scenery()
        with caplog.at_level(logging.ERROR, logger="mixinkit"):
            mixin_inits(host, Scenery, MixinString, MixinNumber)

        assert "my_string" not in vars(host)
        assert len(caplog.records) == 1

    def test_strict_mode_aborts_composition(self, strict):
        host = Scenery()
        with pytest.raises(ConstraintViolationError):
            mixin_inits(host, Scenery, MixinSprite)

        assert not has_mixin(host, MixinSprite)
        assert not is_composed(host)
