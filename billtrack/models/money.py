from __future__ import annotations

import functools
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation, localcontext
from fractions import Fraction
from typing import Any, Iterable

from pydantic_core import core_schema

from billtrack.errors import InvalidAmount

CENT = Decimal("0.01")
_PRECISION = 50


def to_decimal(val: Any) -> Decimal:
    """Convertit str / int / float / Decimal / Fraction en Decimal exact.

    Les floats passent par str() (0.1 -> Decimal("0.1")), comme la saisie
    utilisateur. Lève ValueError pour tout le reste.
    """
    if isinstance(val, bool):
        raise ValueError(f"not a number: {val!r}")
    if isinstance(val, Decimal):
        d = val
    elif isinstance(val, int):
        d = Decimal(val)
    elif isinstance(val, float):
        d = Decimal(str(val))
    elif isinstance(val, Fraction):
        with localcontext() as ctx:
            ctx.prec = _PRECISION
            d = Decimal(val.numerator) / Decimal(val.denominator)
    elif isinstance(val, str):
        s = val.strip().replace(",", ".")
        try:
            d = Decimal(s)
        except InvalidOperation:
            raise ValueError(f"not a number: {val!r}") from None
    else:
        raise ValueError(f"not a number: {val!r}")
    if not d.is_finite():
        raise ValueError(f"not a finite number: {val!r}")
    return d


@functools.total_ordering
class Money:
    """Montant exact au centime, stocké en nombre entier de centimes."""

    __slots__ = ("_cents",)

    def __init__(self, value: Any = 0):
        if isinstance(value, Money):
            cents = value._cents
        else:
            try:
                d = to_decimal(value)
            except ValueError as e:
                raise InvalidAmount(str(e)) from None
            # assez de chiffres pour que le passage en centimes soit exact
            with localcontext() as ctx:
                ctx.prec = max(_PRECISION, len(d.as_tuple().digits) + 2)
                scaled = d.scaleb(2)
            if scaled != scaled.to_integral_value():
                raise InvalidAmount(f"{value!r} is not exact at cent precision")
            cents = int(scaled)
        object.__setattr__(self, "_cents", cents)

    def __setattr__(self, name, value):
        raise AttributeError("Money is immutable")

    # ---------- Constructeurs ---------- #

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        if isinstance(cents, bool) or not isinstance(cents, int):
            raise InvalidAmount(f"cents must be an int, got {cents!r}")
        m = cls.__new__(cls)
        object.__setattr__(m, "_cents", cents)
        return m

    @classmethod
    def of(cls, value: Any) -> "Money":
        return value if isinstance(value, Money) else cls(value)

    @classmethod
    def total(cls, values: Iterable[Any]) -> "Money":
        return cls.from_cents(sum(cls.of(v)._cents for v in values))

    # ---------- Accès ---------- #

    @property
    def cents(self) -> int:
        return self._cents

    @property
    def amount(self) -> Decimal:
        return Decimal(self._cents).scaleb(-2)

    def is_zero(self) -> bool:
        return self._cents == 0

    def is_negative(self) -> bool:
        return self._cents < 0

    # ---------- Arithmétique ---------- #

    def __add__(self, other: Any) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money.from_cents(self._cents + other._cents)

    def __radd__(self, other: Any) -> "Money":
        # sum() démarre à 0
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self
        return NotImplemented

    def __sub__(self, other: Any) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money.from_cents(self._cents - other._cents)

    def __neg__(self) -> "Money":
        return Money.from_cents(-self._cents)

    def __mul__(self, factor: Any) -> "Money":
        if isinstance(factor, Money):
            return NotImplemented
        try:
            f = to_decimal(factor)
        except ValueError:
            return NotImplemented
        with localcontext() as ctx:
            ctx.prec = _PRECISION
            exact = self.amount * f
            rounded = exact.quantize(CENT, rounding=ROUND_HALF_EVEN)
        return Money.from_cents(int(rounded.scaleb(2)))

    __rmul__ = __mul__

    # ---------- Comparaisons ---------- #

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._cents == other._cents

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self._cents < other._cents

    def __hash__(self) -> int:
        return hash(("Money", self._cents))

    def __bool__(self) -> bool:
        return self._cents != 0

    # ---------- Formats ---------- #

    def __str__(self) -> str:
        sign = "-" if self._cents < 0 else ""
        units, cents = divmod(abs(self._cents), 100)
        return f"{sign}{units}.{cents:02d}"

    def __repr__(self) -> str:
        return f"Money('{self}')"

    def __reduce__(self):
        return (Money.from_cents, (self._cents,))

    # ---------- pydantic ---------- #

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        return core_schema.no_info_plain_validator_function(
            cls.of,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda m: str(m), info_arg=False, return_schema=core_schema.str_schema()
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema, handler):
        return {"type": "string", "pattern": r"^-?\d+\.\d{2}$"}


ZERO = Money.from_cents(0)
