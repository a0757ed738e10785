"""Awesome wash: basic wash plus triple foam and an undercarriage spray."""

from models.enums import WashTier
from strategies.base import AbstractWashStrategy


class AwesomeWash(AbstractWashStrategy):

    key = WashTier.AWESOME
