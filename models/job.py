"""
CarJob: one customer's car-wash work order.

This is a plain frozen dataclass, not an ORM model: jobs are never persisted.
They arrive as JSON on the Redis queue, become a CarJob, get processed once,
and are discarded.

Key design decisions:
- frozen=True + tuple addons: strategies receive the job but cannot mutate it
- enum coercion in __post_init__: "Basic" and WashTier.BASIC are both accepted,
  anything else fails at construction instead of deep inside the processor
- addons keep duplicates exactly as submitted; deduplication is the
  processor's job (see distinct_addons)
"""

from dataclasses import dataclass, field

from dispatch.errors import InvalidArgumentError
from models.enums import Addon, CarMake, WashTier


@dataclass(frozen=True)
class CarJob:
    customer_id: int
    make: CarMake
    wash_tier: WashTier
    addons: tuple[Addon, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if (
            isinstance(self.customer_id, bool)
            or not isinstance(self.customer_id, int)
            or self.customer_id <= 0
        ):
            raise InvalidArgumentError("customer_id", "must be a positive integer")

        # frozen dataclass → assign through object.__setattr__
        object.__setattr__(self, "make", _coerce(CarMake, self.make, "make"))
        object.__setattr__(self, "wash_tier", _coerce(WashTier, self.wash_tier, "wash_tier"))

        if self.addons is None or isinstance(self.addons, (str, bytes)):
            raise InvalidArgumentError("addons", "must be a sequence of add-on names")
        try:
            addons = tuple(_coerce(Addon, a, "addons") for a in self.addons)
        except TypeError as e:
            raise InvalidArgumentError("addons", "must be a sequence of add-on names") from e
        object.__setattr__(self, "addons", addons)

    def distinct_addons(self) -> tuple[Addon, ...]:
        """Add-ons with repeats removed, in order of first occurrence."""
        return tuple(dict.fromkeys(self.addons))

    def to_dict(self) -> dict:
        """JSON-ready representation used on the Redis job queue."""
        return {
            "customer_id": self.customer_id,
            "make": self.make.value,
            "wash_tier": self.wash_tier.value,
            "addons": [a.value for a in self.addons],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CarJob":
        if not isinstance(data, dict):
            raise InvalidArgumentError("data", "must be a JSON object")
        try:
            return cls(
                customer_id=data["customer_id"],
                make=data["make"],
                wash_tier=data["wash_tier"],
                addons=data.get("addons", ()),
            )
        except KeyError as e:
            raise InvalidArgumentError(str(e.args[0])) from e

    def __repr__(self) -> str:
        addons = ", ".join(a.value for a in self.addons) or "none"
        return f"<CarJob customer={self.customer_id} [{self.wash_tier.value}] addons={addons}>"


def _coerce(enum_cls, value, name: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = [m.value for m in enum_cls]
        raise InvalidArgumentError(name, f"must be one of {allowed}, got {value!r}") from e
