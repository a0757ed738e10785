"""Hand wax and shine add-on."""

from models.enums import Addon
from strategies.base import AbstractAddonStrategy


class HandWaxAndShine(AbstractAddonStrategy):

    key = Addon.HAND_WAX_AND_SHINE
