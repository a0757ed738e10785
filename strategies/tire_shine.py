"""Tire shine add-on."""

from models.enums import Addon
from strategies.base import AbstractAddonStrategy


class TireShine(AbstractAddonStrategy):

    key = Addon.TIRE_SHINE
