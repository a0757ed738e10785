"""
To The Max wash: every arch in the tunnel.

Awesome wash plus wheel brushes, ceramic sealant and a spot-free rinse.
Same simulated duration as the other tiers; set WASH_DURATION to change it.
"""

from models.enums import WashTier
from strategies.base import AbstractWashStrategy


class ToTheMaxWash(AbstractWashStrategy):

    key = WashTier.TO_THE_MAX
