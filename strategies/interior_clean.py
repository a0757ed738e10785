"""
Interior clean add-on: vacuum, wipe-down, windows.

Done by hand after the car leaves the tunnel, so it always runs after
the wash phase.
"""

from models.enums import Addon
from strategies.base import AbstractAddonStrategy


class InteriorClean(AbstractAddonStrategy):

    key = Addon.INTERIOR_CLEAN
