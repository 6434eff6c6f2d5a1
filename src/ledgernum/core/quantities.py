#!/usr/bin/env python3
"""
Fixed-Point Quantities

Quantities represent an amount of something as a signed integer "base value"
tied to a QuantityDefinition that gives the base value its meaning. All math is
done on the integers, so adding, subtracting and subdividing quantities is exact.

Resolution:
- A DecimalDefinition with decimal_places=2 stores 12.34 as 1234
- decimal_places may be negative: with -2, 1234 is stored as 12 (i.e. 1200)

Definitions are shared singletons. Calling get_decimal_definition() with
equivalent options always returns the same object, so compatibility checks
between quantities are identity checks.

Examples:
    >>> cents = get_decimal_definition(2)
    >>> price = cents.quantity_from_number(12.345)
    >>> price.base_value
    1235
    >>> price.to_value_text()
    '12.35'
    >>> [part.to_value_text() for part in cents.quantity_from_number(1).subdivide([1, 1, 1])]
    ['0.33', '0.33', '0.34']
"""

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from numbers import Number
from typing import Any, Iterable, Sequence, Union

from .integer_math import rescale, round_div, round_fraction, scale_to_integer, to_fraction

logger = logging.getLogger(__name__)

DECIMAL_DEFINITION_PREFIX = "DecimalDefinition_"
CURRENCY_DEFINITION_PREFIX = "Currency_"

Operand = Union["Quantity", Number]


class QuantityError(Exception):
    """Base class for quantity errors."""

    pass


class QuantityDefinitionError(QuantityError, ValueError):
    """Raised when definition options are invalid."""

    pass


class IncompatibleDefinitionError(QuantityError, TypeError):
    """Raised when two definitions cannot be compared or combined."""

    pass


class CurrencyMismatchError(QuantityError):
    """Raised when quantities of different currencies are combined."""

    pass


def _flatten(args: tuple[Any, ...]) -> list[Any]:
    """Allow operands either as individual arguments or as a single list."""
    if len(args) == 1 and isinstance(args[0], (list, tuple)):
        return list(args[0])
    return list(args)


@dataclass(frozen=True)
class ParseResult:
    """
    Result of parsing value text.

    Attributes:
        quantity: The parsed value at the parsing definition's resolution
        full_quantity: The parsed value at the finer of the definition's
            resolution and the number of decimal digits in the text
        remaining_text: The unparsed text following the value
    """

    quantity: "Quantity"
    full_quantity: "Quantity"
    remaining_text: str


@dataclass(frozen=True)
class Quantity:
    """
    Immutable quantity: an integer base value and its shared definition.

    Equality is by (definition identity, base value). All manipulation methods
    return new Quantity objects.
    """

    definition: "QuantityDefinition"
    base_value: int

    def __post_init__(self) -> None:
        if not isinstance(self.definition, QuantityDefinition):
            raise TypeError(f"Expected a QuantityDefinition, got {type(self.definition).__name__}")
        if not isinstance(self.base_value, int) or isinstance(self.base_value, bool):
            object.__setattr__(self, "base_value", round_fraction(to_fraction(self.base_value)))

    def get_base_value(self) -> int:
        """Get the integer base value."""
        return self.base_value

    def get_definition(self) -> "QuantityDefinition":
        """Get the quantity's definition."""
        return self.definition

    def to_number(self) -> float:
        """Get the value as a float. This is most likely not exact."""
        return self.definition.base_value_to_number(self.base_value)

    def to_decimal(self) -> Decimal:
        """Get the exact value as a Decimal."""
        return self.definition.base_value_to_decimal(self.base_value)

    def from_number(self, number: Number) -> "Quantity":
        """Create a quantity with this quantity's definition closest to a number."""
        return self.definition.quantity_from_number(number)

    def to_value_text(self) -> str:
        """Get text that from_value_text() parses back into this quantity."""
        return self.definition.base_value_to_value_text(self.base_value)

    def from_value_text(self, value_text: str) -> ParseResult | None:
        """Parse value text using this quantity's definition."""
        return self.definition.from_value_text(value_text)

    @staticmethod
    def get_highest_resolution_quantity(operands: Iterable[Operand]) -> "Quantity | None":
        """
        Find the quantity with the highest resolution definition.

        Non-quantity operands are ignored. If several quantities share the highest
        resolution the first one is returned.
        """
        best: Quantity | None = None
        for operand in operands:
            if not isinstance(operand, Quantity):
                continue
            if best is None or best.definition.compare_definition_resolution(operand.definition) < 0:
                best = operand
        return best

    @staticmethod
    def _reference_definition(operands: list[Operand]) -> "QuantityDefinition":
        reference = Quantity.get_highest_resolution_quantity(operands)
        if reference is None:
            raise ValueError("At least one Quantity operand is required")
        return reference.definition

    @staticmethod
    def add_quantities(*args: Operand | Sequence[Operand]) -> "Quantity":
        """
        Add quantities together.

        The result has the definition of the highest resolution quantity.
        Operands may be given individually or as a single list.
        """
        operands = _flatten(args)
        return Quantity._reference_definition(operands).add_quantities(operands)

    @staticmethod
    def subtract_quantities(*args: Operand | Sequence[Operand]) -> "Quantity":
        """
        Subtract all following operands from the first.

        The result has the definition of the highest resolution quantity.
        """
        operands = _flatten(args)
        return Quantity._reference_definition(operands).subtract_quantities(operands)

    @staticmethod
    def multiply_quantities(*args: Operand | Sequence[Operand]) -> "Quantity":
        """
        Multiply quantities together.

        The result has the definition of the highest resolution quantity. Plain
        number operands do not take part in choosing the resolution, so a number
        with more decimal digits than any quantity is rounded to that resolution
        before multiplying. Pass a Quantity with enough resolution to avoid this.
        """
        operands = _flatten(args)
        return Quantity._reference_definition(operands).multiply_quantities(operands)

    def add(self, *args: Operand | Sequence[Operand]) -> "Quantity":
        """Add quantities and/or numbers to this quantity, keeping this definition."""
        return self.definition.add_quantities([self] + _flatten(args))

    def subtract(self, *args: Operand | Sequence[Operand]) -> "Quantity":
        """Subtract quantities and/or numbers from this quantity, keeping this definition."""
        return self.definition.subtract_quantities([self] + _flatten(args))

    def multiply(self, *args: Operand | Sequence[Operand]) -> "Quantity":
        """
        Multiply this quantity by quantities and/or numbers, keeping this definition.

        Multiplication is normally lossy; the result is rounded once.
        """
        return self.definition.multiply_quantities([self] + _flatten(args))

    def negate(self) -> "Quantity":
        """Get the additive inverse of this quantity."""
        return self.definition.negate_quantity(self)

    def subdivide(self, *args: Number | Sequence[Number]) -> list["Quantity"]:
        """
        Split this quantity into parts proportional to a list of weights.

        The final part absorbs any rounding so the parts always sum exactly to
        this quantity. A single weight returns [self].

        Args:
            *args: The weights, individually or as a single list

        Returns:
            List of quantities with this quantity's definition
        """
        weights = _flatten(args)
        if len(weights) <= 1:
            return [self]
        base_values = self.definition.subdivide_base_value(self.base_value, weights)
        return [self.definition.from_base_value(base_value) for base_value in base_values]

    def _compare(self, other: "Quantity") -> int:
        if not isinstance(other, Quantity):
            return NotImplemented
        if self.definition.is_currency or other.definition.is_currency:
            # Same rule as addition: money only compares with the same currency.
            if not (
                self.definition.is_currency
                and other.definition.is_currency
                and self.definition.code == other.definition.code
            ):
                raise CurrencyMismatchError(
                    "Quantities with currencies can only be compared with the same currency."
                )
        places = max(self.definition.decimal_places, other.definition.decimal_places)
        mine = rescale(self.base_value, self.definition.decimal_places, places)
        theirs = rescale(other.base_value, other.definition.decimal_places, places)
        return (mine > theirs) - (mine < theirs)

    def __add__(self, other: Operand) -> "Quantity":
        return self.add(other)

    def __sub__(self, other: Operand) -> "Quantity":
        return self.subtract(other)

    def __mul__(self, other: Operand) -> "Quantity":
        return self.multiply(other)

    def __neg__(self) -> "Quantity":
        return self.negate()

    def __lt__(self, other: "Quantity") -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result < 0

    def __le__(self, other: "Quantity") -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result <= 0

    def __gt__(self, other: "Quantity") -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result > 0

    def __ge__(self, other: "Quantity") -> bool:
        result = self._compare(other)
        return result if result is NotImplemented else result >= 0

    def __str__(self) -> str:
        return self.to_value_text()

    def __repr__(self) -> str:
        return f"Quantity(definition={self.definition.definition_name}, base_value={self.base_value})"


class QuantityDefinition(ABC):
    """
    Interface for the objects defining the resolution of Quantity objects.

    Definitions are immutable and shared. Methods taking a single quantity
    presume the quantity belongs to this definition unless noted otherwise.
    """

    #: True for definitions whose quantities carry a currency.
    is_currency = False

    @property
    @abstractmethod
    def definition_name(self) -> str:
        """Stable name that get_quantity_definition() resolves back to this definition."""

    @property
    @abstractmethod
    def decimal_places(self) -> int:
        """Number of decimal places, negative for coarser units."""

    @abstractmethod
    def compare_definition_resolution(self, other: "QuantityDefinition") -> int:
        """
        Compare resolutions.

        Returns:
            < 0 if this resolution is lower than other's, 0 if equal, > 0 if higher

        Raises:
            IncompatibleDefinitionError: If other is not comparable with this definition
        """

    @abstractmethod
    def base_value_to_number(self, base_value: int) -> float:
        """Convert a base value to its (approximate) number."""

    @abstractmethod
    def base_value_to_decimal(self, base_value: int) -> Decimal:
        """Convert a base value to its exact Decimal."""

    @abstractmethod
    def number_to_base_value(self, number: Number) -> int:
        """Convert a number to the closest base value."""

    @abstractmethod
    def base_value_to_value_text(self, base_value: int) -> str:
        """Format a base value as text parseable by from_value_text()."""

    @abstractmethod
    def from_value_text(self, value_text: str) -> ParseResult | None:
        """Parse value text, returning None if no value could be parsed."""

    @abstractmethod
    def get_display_text(self) -> str:
        """Template illustrating the value text format, e.g. 'x.xx'."""

    @abstractmethod
    def to_json(self) -> Any:
        """Serialized form of the definition."""

    @abstractmethod
    def add_quantities(self, operands: Sequence[Operand]) -> Quantity:
        """Add operands; the result has this definition."""

    @abstractmethod
    def subtract_quantities(self, operands: Sequence[Operand]) -> Quantity:
        """Subtract the following operands from the first; the result has this definition."""

    @abstractmethod
    def multiply_quantities(self, operands: Sequence[Operand]) -> Quantity:
        """Multiply operands; the result has this definition."""

    @abstractmethod
    def subdivide_base_value(self, base_value: int, weights: Sequence[Number]) -> list[int]:
        """Split a base value proportionally, parts summing exactly to base_value."""

    def quantity_from_number(self, number: Number) -> Quantity:
        """Create the quantity with this definition closest to a number."""
        return Quantity(self, self.number_to_base_value(number))

    def from_base_value(self, base_value: int) -> Quantity:
        """Create a quantity with this definition and a given base value."""
        return Quantity(self, base_value)

    def to_value_text(self, quantity: Quantity) -> str:
        """Format a quantity of this definition."""
        return self.base_value_to_value_text(quantity.base_value)

    def negate_quantity(self, quantity: Quantity) -> Quantity:
        """Create the negative of a quantity, with this definition."""
        return Quantity(self, -self.change_quantity_definition(quantity).base_value)

    def change_quantity_definition(self, operand: Operand) -> Quantity:
        """
        Convert a quantity or number to this definition.

        Raising the resolution is exact, lowering it rounds half away from zero.
        """
        if not isinstance(operand, Quantity):
            return self.quantity_from_number(operand)
        if operand.definition is self:
            return operand
        self.compare_definition_resolution(operand.definition)
        return Quantity(
            self,
            rescale(operand.base_value, operand.definition.decimal_places, self.decimal_places),
        )

    def is_same_definition(self, other: "QuantityDefinition") -> bool:
        return other is self


@dataclass(frozen=True)
class DecimalOptions:
    """
    Canonical, normalized options for a DecimalDefinition.

    Attributes:
        decimal_places: Digits after the decimal mark; negative for units of 10, 100...
        group_mark: Optional thousands separator
        decimal_mark: Separator before the fractional digits
    """

    decimal_places: int = 0
    group_mark: str | None = None
    decimal_mark: str = "."

    def __post_init__(self) -> None:
        if isinstance(self.decimal_places, bool) or not isinstance(self.decimal_places, int):
            raise QuantityDefinitionError(f"decimal_places must be an integer: {self.decimal_places!r}")
        if not self.decimal_mark:
            raise QuantityDefinitionError("decimal_mark must not be empty")
        if self.group_mark == "":
            object.__setattr__(self, "group_mark", None)
        for mark in (self.group_mark, self.decimal_mark):
            if mark is not None and any(ch.isdigit() for ch in mark):
                raise QuantityDefinitionError(f"Digits cannot be used as marks: {mark!r}")
        if self.group_mark is not None and self.group_mark == self.decimal_mark:
            raise QuantityDefinitionError("group_mark and decimal_mark must differ")

    @property
    def name(self) -> str:
        """
        Definition name, e.g. 'DecimalDefinition_2', 'DecimalDefinition_-2_,'.

        A non-default decimal mark is appended as a third field.
        """
        name = f"{DECIMAL_DEFINITION_PREFIX}{self.decimal_places}"
        if self.group_mark or self.decimal_mark != ".":
            name += f"_{self.group_mark or ''}"
        if self.decimal_mark != ".":
            name += f"_{self.decimal_mark}"
        return name

    @classmethod
    def from_name(cls, name: str) -> "DecimalOptions | None":
        """Parse a definition name, returning None if it is not a decimal definition name."""
        if not name.startswith(DECIMAL_DEFINITION_PREFIX):
            return None
        fields = name[len(DECIMAL_DEFINITION_PREFIX) :].split("_", 2)
        try:
            decimal_places = int(fields[0])
        except ValueError:
            return None
        group_mark = fields[1] if len(fields) > 1 and fields[1] else None
        decimal_mark = fields[2] if len(fields) > 2 else "."
        return cls(decimal_places=decimal_places, group_mark=group_mark, decimal_mark=decimal_mark)

    @classmethod
    def from_value(cls, value: Any) -> "DecimalOptions":
        """
        Normalize any accepted options shape.

        Accepts an int (decimal places), a definition name, a mapping with
        decimalPlaces/groupMark/decimalMark (or snake_case) keys, a DecimalOptions,
        or a DecimalDefinition.

        Raises:
            QuantityDefinitionError: If the value cannot be normalized
        """
        if isinstance(value, DecimalOptions):
            return value
        if isinstance(value, DecimalDefinition):
            return value.options
        if value is None:
            return cls()
        if isinstance(value, bool):
            raise QuantityDefinitionError(f"Invalid decimal definition options: {value!r}")
        if isinstance(value, int):
            return cls(decimal_places=value)
        if isinstance(value, float) and value.is_integer():
            return cls(decimal_places=int(value))
        if isinstance(value, str):
            options = cls.from_name(value)
            if options is None:
                raise QuantityDefinitionError(f"Not a decimal definition name: {value!r}")
            return options
        if isinstance(value, dict):
            decimal_places = value.get("decimalPlaces", value.get("decimal_places", 0))
            if isinstance(decimal_places, float) and decimal_places.is_integer():
                decimal_places = int(decimal_places)
            decimal_mark = value.get("decimalMark", value.get("decimal_mark"))
            return cls(
                decimal_places=decimal_places,
                group_mark=value.get("groupMark", value.get("group_mark")),
                decimal_mark="." if decimal_mark is None else decimal_mark,
            )
        raise QuantityDefinitionError(f"Invalid decimal definition options: {value!r}")

    def to_json(self) -> dict[str, Any]:
        json_value: dict[str, Any] = {"decimalPlaces": self.decimal_places}
        if self.group_mark:
            json_value["groupMark"] = self.group_mark
        if self.decimal_mark != ".":
            json_value["decimalMark"] = self.decimal_mark
        return json_value


def split_base_value(base_value: int, decimal_places: int) -> tuple[bool, str, str]:
    """Split a base value into (is_negative, integer digits, fraction digits)."""
    digits = str(abs(base_value))
    if decimal_places > 0:
        digits = digits.rjust(decimal_places + 1, "0")
        return base_value < 0, digits[:-decimal_places], digits[-decimal_places:]
    return base_value < 0, digits + "0" * -decimal_places, ""


def digit_groups(digits: str, primary: int = 3, secondary: int = 3) -> list[str]:
    """Split integer digits into groups, the rightmost group having primary digits."""
    if len(digits) <= primary:
        return [digits]
    groups = [digits[-primary:]]
    digits = digits[:-primary]
    while len(digits) > secondary:
        groups.append(digits[-secondary:])
        digits = digits[:-secondary]
    groups.append(digits)
    return list(reversed(groups))


def group_digits(digits: str, group_mark: str | None) -> str:
    """Insert group marks every three integer digits, counting from the right."""
    if not group_mark:
        return digits
    return group_mark.join(digit_groups(digits))


class DecimalDefinition(QuantityDefinition):
    """
    QuantityDefinition for decimal numbers with a fixed number of decimal places.

    With negative decimal places quantities come in chunks of powers of ten: with
    -2 every value is a whole number of hundreds, and 0 formats as '000'.

    Instances should be obtained through get_decimal_definition() so that
    equivalent options share one object.
    """

    def __init__(self, options: DecimalOptions) -> None:
        self._options = options

    @property
    def options(self) -> DecimalOptions:
        return self._options

    @property
    def definition_name(self) -> str:
        return self._options.name

    @property
    def decimal_places(self) -> int:
        return self._options.decimal_places

    @property
    def group_mark(self) -> str | None:
        return self._options.group_mark

    @property
    def decimal_mark(self) -> str:
        return self._options.decimal_mark

    def get_decimal_places(self) -> int:
        return self._options.decimal_places

    def get_group_mark(self) -> str | None:
        return self._options.group_mark

    def _with_decimal_places(self, decimal_places: int) -> "DecimalDefinition":
        """Definition with the same marks and a different resolution."""
        return get_decimal_definition(
            DecimalOptions(
                decimal_places=decimal_places,
                group_mark=self.group_mark,
                decimal_mark=self.decimal_mark,
            )
        )

    def to_json(self) -> dict[str, Any]:
        return self._options.to_json()

    def compare_definition_resolution(self, other: QuantityDefinition) -> int:
        if not isinstance(other, DecimalDefinition):
            raise IncompatibleDefinitionError(
                f"{self.definition_name} is not compatible with {other.definition_name}"
            )
        return self.decimal_places - other.decimal_places

    def is_same_definition(self, other: QuantityDefinition) -> bool:
        if other is self:
            return True
        return type(other) is type(self) and other.options == self.options

    def base_value_to_number(self, base_value: int) -> float:
        if self.decimal_places >= 0:
            return base_value / 10**self.decimal_places
        return float(base_value * 10**-self.decimal_places)

    def base_value_to_decimal(self, base_value: int) -> Decimal:
        sign = 1 if base_value < 0 else 0
        digits = tuple(int(ch) for ch in str(abs(base_value)))
        return Decimal((sign, digits, -self.decimal_places))

    def number_to_base_value(self, number: Number) -> int:
        return scale_to_integer(number, self.decimal_places)

    def base_value_to_value_text(self, base_value: int) -> str:
        is_negative, integer, fraction = split_base_value(base_value, self.decimal_places)
        text = group_digits(integer, self.group_mark)
        if fraction:
            text += self.decimal_mark + fraction
        return ("-" + text) if is_negative else text

    def from_value_text(self, value_text: str) -> ParseResult | None:
        """
        Parse text generated by base_value_to_value_text() back into quantities.

        Parsing skips leading whitespace, accepts an optional sign, digits with
        optional group marks, and an optional decimal mark followed by digits. It
        stops at the first character that cannot extend the number.

        Returns:
            ParseResult, or None if no digits were found
        """
        text = value_text.lstrip()
        length = len(text)
        group_mark = self.group_mark
        i = 0

        sign = 1
        if i < length and text[i] in "-+":
            sign = -1 if text[i] == "-" else 1
            i += 1

        def scan_digits(start: int) -> tuple[str, int]:
            digits = []
            pos = start
            while pos < length:
                ch = text[pos]
                if "0" <= ch <= "9":
                    digits.append(ch)
                    pos += 1
                elif group_mark and text.startswith(group_mark, pos):
                    pos += len(group_mark)
                else:
                    break
            return "".join(digits), pos

        integer_digits, i = scan_digits(i)
        fraction_digits = ""
        if text.startswith(self.decimal_mark, i):
            fraction_digits, end = scan_digits(i + len(self.decimal_mark))
            if integer_digits or fraction_digits:
                i = end

        if not integer_digits and not fraction_digits:
            logger.debug(f"No value found in text {value_text!r}")
            return None

        fraction_places = len(fraction_digits)
        raw_value = sign * int(integer_digits + fraction_digits)

        quantity = self.from_base_value(rescale(raw_value, fraction_places, self.decimal_places))
        if fraction_places > self.decimal_places:
            full_quantity = self._with_decimal_places(fraction_places).from_base_value(raw_value)
        else:
            full_quantity = quantity

        return ParseResult(quantity=quantity, full_quantity=full_quantity, remaining_text=text[i:])

    def get_display_text(self) -> str:
        places = self.decimal_places
        if places > 0:
            return "x" + self.decimal_mark + "x" * places
        return group_digits("x" + "0" * -places, self.group_mark)

    def _check_operands(self, operands: Sequence[Operand], operation: str) -> None:
        """Currency-bearing quantities may only be combined by a matching currency definition."""
        currency_count = sum(
            1 for operand in operands if isinstance(operand, Quantity) and operand.definition.is_currency
        )
        if operation == "multiply":
            if currency_count > 1:
                raise CurrencyMismatchError(
                    "Quantities with currencies can only be multiplied by scalar values/quantities."
                )
        elif currency_count:
            raise CurrencyMismatchError(
                f"Quantities with currencies can only be {operation}ed with quantities of the same currency."
            )

    def _working_places(self, operands: Sequence[Operand]) -> int:
        """Finest resolution among this definition and the quantity operands."""
        reference = Quantity.get_highest_resolution_quantity(operands)
        if reference is None:
            return self.decimal_places
        self.compare_definition_resolution(reference.definition)
        return max(self.decimal_places, reference.definition.decimal_places)

    @staticmethod
    def _base_value_at(operand: Operand, places: int) -> int:
        if isinstance(operand, Quantity):
            return rescale(operand.base_value, operand.definition.decimal_places, places)
        return scale_to_integer(operand, places)

    def add_quantities(self, operands: Sequence[Operand]) -> Quantity:
        """
        Sum the operands at the working resolution, then round once to this one.

        Numbers are rounded to the working resolution before summing.
        """
        operands = list(operands)
        self._check_operands(operands, "add")
        places = self._working_places(operands)
        total = sum(self._base_value_at(operand, places) for operand in operands)
        return Quantity(self, rescale(total, places, self.decimal_places))

    def subtract_quantities(self, operands: Sequence[Operand]) -> Quantity:
        operands = list(operands)
        if not operands:
            return Quantity(self, 0)
        self._check_operands(operands, "subtract")
        places = self._working_places(operands)
        total = self._base_value_at(operands[0], places)
        for operand in operands[1:]:
            total -= self._base_value_at(operand, places)
        return Quantity(self, rescale(total, places, self.decimal_places))

    def multiply_quantities(self, operands: Sequence[Operand]) -> Quantity:
        operands = list(operands)
        if not operands:
            return Quantity(self, 0)
        self._check_operands(operands, "multiply")
        places = self._working_places(operands)
        product = 1
        for operand in operands:
            product *= self._base_value_at(operand, places)

        # product carries 10^(places * len(operands)); move it to this resolution in one step.
        shift = self.decimal_places - places * len(operands)
        if shift >= 0:
            return Quantity(self, product * 10**shift)
        return Quantity(self, round_div(product, 10**-shift))

    def subdivide_base_value(self, base_value: int, weights: Sequence[Number]) -> list[int]:
        if not weights or len(weights) <= 1:
            return [base_value]

        fractions = [to_fraction(weight) for weight in weights]
        total = sum(fractions, Fraction(0))
        if total == 0:
            raise ValueError("Subdivision weights must not sum to zero")

        parts = [round_fraction(base_value * weight / total) for weight in fractions[:-1]]
        parts.append(base_value - sum(parts))
        return parts

    def __repr__(self) -> str:
        return f"<{self.definition_name}>"


_registry: dict[str, QuantityDefinition] = {}
_registry_lock = threading.Lock()


def register_quantity_definition(definition: QuantityDefinition) -> QuantityDefinition:
    """
    Register a definition under its name, returning the registered instance.

    If a definition with the same name is already registered that instance is
    returned instead, so callers must use the return value.
    """
    name = definition.definition_name
    with _registry_lock:
        existing = _registry.get(name)
        if existing is not None:
            return existing
        _registry[name] = definition
    logger.debug(f"Registered quantity definition {name}")
    return definition


def get_decimal_definition(options: Any = None) -> DecimalDefinition:
    """
    Get the shared DecimalDefinition for a set of options.

    Any options that normalize to the same DecimalOptions return the identical
    definition object.

    Args:
        options: Decimal places, a definition name, an options mapping,
            DecimalOptions, or a DecimalDefinition

    Raises:
        QuantityDefinitionError: If the options are invalid
    """
    if isinstance(options, DecimalDefinition):
        return options

    normalized = DecimalOptions.from_value(options)
    existing = _registry.get(normalized.name)
    if existing is not None:
        return existing  # type: ignore[return-value]

    with _registry_lock:
        existing = _registry.get(normalized.name)
        if existing is not None:
            return existing  # type: ignore[return-value]
        definition = DecimalDefinition(normalized)
        _registry[normalized.name] = definition

    logger.debug(f"Created quantity definition {normalized.name}")
    return definition


def get_quantity_definition(name: "str | int | QuantityDefinition") -> QuantityDefinition | None:
    """
    Get the definition for a name returned by QuantityDefinition.definition_name.

    Definitions pass through unchanged and integers are treated as decimal
    places. Returns None for names that are neither registered nor decimal
    definition names.
    """
    if isinstance(name, QuantityDefinition):
        return name
    if isinstance(name, int):
        return get_decimal_definition(name)

    existing = _registry.get(name)
    if existing is not None:
        return existing

    if name.startswith(CURRENCY_DEFINITION_PREFIX):
        from .currency import currency_from_definition_name

        return currency_from_definition_name(name)

    options = DecimalOptions.from_name(name)
    if options is None:
        logger.debug(f"No quantity definition named {name!r}")
        return None
    return get_decimal_definition(options)


def get_quantity_definition_name(definition: "QuantityDefinition | str | None") -> str | None:
    """Get the name of a definition, passing names and None through."""
    if definition is None or isinstance(definition, str):
        return definition
    return definition.definition_name
