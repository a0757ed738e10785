"""
Basic wash: rinse, soap, rinse, air dry.

The cheapest tier and the one most jobs ask for.
"""

from models.enums import WashTier
from strategies.base import AbstractWashStrategy


class BasicWash(AbstractWashStrategy):

    key = WashTier.BASIC
