"""
Shared enumerations used across the entire project.

Using Python enums (inheriting from str) means:
- They serialize to JSON automatically ("Basic", not "WashTier.BASIC")
- They work as FastAPI request fields
- Typos become immediate errors instead of silent bugs

WashTier and Addon are the dispatch keys: each member is owned by exactly
one strategy class in strategies/. CarMake is informational only.
"""

import enum


class CarMake(str, enum.Enum):
    FORD = "Ford"
    TOYOTA = "Toyota"
    HONDA = "Honda"
    CHEVROLET = "Chevrolet"
    TESLA = "Tesla"
    SUBARU = "Subaru"


class WashTier(str, enum.Enum):
    BASIC = "Basic"              # rinse and dry
    AWESOME = "Awesome"          # basic + foam and undercarriage
    TO_THE_MAX = "ToTheMax"      # everything the tunnel can do


class Addon(str, enum.Enum):
    TIRE_SHINE = "TireShine"
    INTERIOR_CLEAN = "InteriorClean"
    HAND_WAX_AND_SHINE = "HandWaxAndShine"


class ActionKind(str, enum.Enum):
    WASH = "wash"
    ADDON = "addon"
