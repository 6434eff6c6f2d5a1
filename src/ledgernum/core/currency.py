#!/usr/bin/env python3
"""
Currency Quantity Definitions

Currency is a DecimalDefinition that also carries an ISO 4217 code and
formats/parses localized currency strings ("$1,234.56", "-1.234,56 €").

The locale tokens (currency symbol, separators, signs and the positive and
negative affixes) are read once from Babel when a Currency is created and kept
in a CurrencyFormat. All formatting afterwards works on exact integer digits,
no float ever passes through a formatter.

Key Principles:
- Currencies come from get_currency() / get_currency_definition(), which return
  one shared instance per set of options
- Adding or subtracting requires every operand to be the same currency
- Money can be scaled by numbers or plain quantities, never by other money
"""

import logging
import re
import threading
from dataclasses import dataclass, replace
from enum import Enum
from numbers import Number
from typing import Any, Iterable, Sequence

from babel import Locale, UnknownLocaleError
from babel.numbers import (
    format_currency,
    get_currency_symbol,
    get_decimal_symbol,
    get_group_symbol,
    get_minus_sign_symbol,
    get_plus_sign_symbol,
)

from .config import get_locale
from .integer_math import rescale, scale_to_integer
from .iso4217 import get_currency_info
from .quantities import (
    CURRENCY_DEFINITION_PREFIX,
    CurrencyMismatchError,
    DecimalDefinition,
    DecimalOptions,
    Operand,
    ParseResult,
    Quantity,
    QuantityDefinition,
    QuantityDefinitionError,
    digit_groups,
    register_quantity_definition,
    split_base_value,
)

logger = logging.getLogger(__name__)

# Formatted to show every token a locale uses for negative amounts.
PROBE_VALUE = -1234567.89

_DEFINITION_NAME_PATTERN = re.compile(
    rf"^{CURRENCY_DEFINITION_PREFIX}(?P<code>[A-Z]{{3}})_(?P<places>-?\d+)"
    r"@(?P<locale>[^#:]+)(?::(?P<numeric>-?\d+))?(?:#(?P<name>.*))?$"
)


class CurrencyParseError(ValueError):
    """Raised when a currency string cannot be parsed."""

    pass


class UnknownCurrencyError(KeyError):
    """Raised for currency codes that are not in the ISO 4217 table."""

    pass


class FormatPart(Enum):
    """Token categories in a formatted currency string."""

    CURRENCY = "currency"
    MINUS_SIGN = "minusSign"
    PLUS_SIGN = "plusSign"
    INTEGER = "integer"
    GROUP = "group"
    DECIMAL = "decimal"
    FRACTION = "fraction"
    LITERAL = "literal"


@dataclass(frozen=True)
class CurrencyFormat:
    """
    Locale formatting tokens for one currency.

    Affixes are Babel pattern affixes: '¤' stands for the currency symbol, '-'
    for the minus sign and '+' for the plus sign.
    """

    locale: str
    currency_symbol: str
    decimal_mark: str
    group_mark: str
    minus_sign: str
    plus_sign: str
    positive_prefix: str = "¤"
    positive_suffix: str = ""
    negative_prefix: str = "-¤"
    negative_suffix: str = ""
    primary_grouping: int = 3
    secondary_grouping: int = 3

    @classmethod
    def from_locale(cls, code: str, locale: str) -> "CurrencyFormat":
        """
        Read the formatting tokens for a currency from Babel's locale data.

        Raises:
            QuantityDefinitionError: If the locale is unknown
        """
        try:
            babel_locale = Locale.parse(locale.replace("-", "_"))
        except (UnknownLocaleError, ValueError) as e:
            raise QuantityDefinitionError(f"Unknown locale {locale!r}") from e

        pattern = babel_locale.currency_formats["standard"]
        currency_format = cls(
            locale=str(babel_locale),
            currency_symbol=get_currency_symbol(code, locale=babel_locale),
            decimal_mark=get_decimal_symbol(babel_locale),
            group_mark=get_group_symbol(babel_locale),
            minus_sign=get_minus_sign_symbol(babel_locale),
            plus_sign=get_plus_sign_symbol(babel_locale) or "+",
            positive_prefix=pattern.prefix[0],
            positive_suffix=pattern.suffix[0],
            negative_prefix=pattern.prefix[1],
            negative_suffix=pattern.suffix[1],
            primary_grouping=pattern.grouping[0],
            secondary_grouping=pattern.grouping[1],
        )
        logger.debug(
            f"Currency format for {code} in {currency_format.locale}: "
            f"{format_currency(PROBE_VALUE, code, locale=babel_locale)}"
        )
        return currency_format

    def affix_parts(self, affix: str) -> list[tuple[FormatPart, str]]:
        """Expand a pattern affix into typed parts."""
        parts: list[tuple[FormatPart, str]] = []
        literal = ""
        for ch in affix:
            if ch == "'":
                continue
            if ch in "¤-+":
                if literal:
                    parts.append((FormatPart.LITERAL, literal))
                    literal = ""
                if ch == "¤":
                    parts.append((FormatPart.CURRENCY, self.currency_symbol))
                elif ch == "-":
                    parts.append((FormatPart.MINUS_SIGN, self.minus_sign))
                else:
                    parts.append((FormatPart.PLUS_SIGN, self.plus_sign))
            else:
                literal += ch
        if literal:
            parts.append((FormatPart.LITERAL, literal))
        return parts

    @property
    def literals(self) -> tuple[str, ...]:
        """Non-token text appearing in any affix."""
        values = []
        for affix in (self.positive_prefix, self.positive_suffix, self.negative_prefix, self.negative_suffix):
            for part, value in self.affix_parts(affix):
                if part == FormatPart.LITERAL and value not in values:
                    values.append(value)
        return tuple(values)


@dataclass(frozen=True)
class CurrencyOptions:
    """Canonical, normalized options for a Currency."""

    code: str
    numeric_code: int
    name: str
    decimal_places: int
    locale: str

    @classmethod
    def from_value(cls, value: Any, locale: str | None = None) -> "CurrencyOptions":
        """
        Normalize any accepted currency options shape.

        Accepts a 3-letter ISO code, a Currency, a CurrencyOptions, or a mapping
        of options. A mapping may name a base currency under 'currency' whose
        options are copied and then overridden by the other keys.

        Args:
            value: The options to normalize
            locale: Locale used when value does not specify one, defaults to
                the configured locale

        Raises:
            UnknownCurrencyError: If a code is not in the ISO 4217 table
            QuantityDefinitionError: If the value cannot be normalized
        """
        if isinstance(value, CurrencyOptions):
            return value
        if isinstance(value, Currency):
            return value.currency_options

        if isinstance(value, str):
            info = get_currency_info(value)
            if info is None:
                raise UnknownCurrencyError(value)
            return cls(
                code=info.code,
                numeric_code=info.numeric_code,
                name=info.name,
                decimal_places=info.decimal_places,
                locale=_normalize_locale(locale),
            )

        if not isinstance(value, dict):
            raise QuantityDefinitionError(f"Invalid currency options: {value!r}")

        option_locale = value.get("locale") or locale
        decimal_places = value.get("decimalPlaces", value.get("decimal_places"))
        numeric_code = value.get("numericCode", value.get("numeric_code"))

        if value.get("currency") is not None:
            base = cls.from_value(value["currency"], option_locale)
        elif value.get("code") and get_currency_info(value["code"]) is not None:
            base = cls.from_value(value["code"], option_locale)
        elif value.get("code") and decimal_places is not None:
            base = cls(
                code=value["code"].upper(),
                numeric_code=numeric_code or 0,
                name=value.get("name") or value["code"].upper(),
                decimal_places=decimal_places,
                locale=_normalize_locale(option_locale),
            )
        else:
            raise UnknownCurrencyError(value.get("code"))

        overrides: dict[str, Any] = {}
        if value.get("code"):
            overrides["code"] = value["code"].upper()
        if numeric_code is not None:
            overrides["numeric_code"] = numeric_code
        if value.get("name"):
            overrides["name"] = value["name"]
        if decimal_places is not None:
            overrides["decimal_places"] = decimal_places
        if value.get("locale"):
            overrides["locale"] = _normalize_locale(value["locale"])
        return replace(base, **overrides)

    @property
    def definition_name(self) -> str:
        """
        Name like 'Currency_USD_2@en_US'.

        A numeric code other than the ISO one is appended as ':<numeric>', and
        a name other than the ISO one as '#<name>'.
        """
        name = f"{CURRENCY_DEFINITION_PREFIX}{self.code}_{self.decimal_places}@{self.locale}"
        info = get_currency_info(self.code)
        if self.numeric_code != (0 if info is None else info.numeric_code):
            name += f":{self.numeric_code}"
        if info is None or info.name != self.name:
            name += f"#{self.name}"
        return name

    def to_json(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "numericCode": self.numeric_code,
            "name": self.name,
            "decimalPlaces": self.decimal_places,
            "locale": self.locale,
        }


def _normalize_locale(locale: str | None) -> str:
    if not locale:
        locale = get_locale()
    return locale.replace("-", "_")


def _normalize_parts(parts: Any) -> set[FormatPart]:
    if parts is None:
        return set()
    if isinstance(parts, (FormatPart, str)):
        parts = [parts]
    return {part if isinstance(part, FormatPart) else FormatPart(part) for part in parts}


class Currency(DecimalDefinition):
    """
    QuantityDefinition for an amount of money in a specific currency.

    Example:
        >>> usd = get_currency("USD")
        >>> usd.base_value_to_string(123456789)
        '$1,234,567.89'
        >>> usd.base_value_from_string("+$123.456")
        12346
    """

    is_currency = True

    def __init__(self, options: CurrencyOptions, currency_format: CurrencyFormat | None = None) -> None:
        if currency_format is None:
            currency_format = CurrencyFormat.from_locale(options.code, options.locale)
        super().__init__(
            DecimalOptions(
                decimal_places=options.decimal_places,
                group_mark=currency_format.group_mark or None,
                decimal_mark=currency_format.decimal_mark,
            )
        )
        self._currency_options = options
        self._format = currency_format
        self._literals = currency_format.literals

    @property
    def currency_options(self) -> CurrencyOptions:
        return self._currency_options

    @property
    def currency_format(self) -> CurrencyFormat:
        return self._format

    @property
    def code(self) -> str:
        return self._currency_options.code

    @property
    def numeric_code(self) -> int:
        return self._currency_options.numeric_code

    @property
    def name(self) -> str:
        return self._currency_options.name

    @property
    def locale(self) -> str:
        return self._currency_options.locale

    @property
    def currency_symbol(self) -> str:
        return self._format.currency_symbol

    @property
    def minus_sign(self) -> str:
        return self._format.minus_sign

    @property
    def plus_sign(self) -> str:
        return self._format.plus_sign

    @property
    def definition_name(self) -> str:
        return self._currency_options.definition_name

    def get_code(self) -> str:
        return self.code

    def get_numeric_code(self) -> int:
        return self.numeric_code

    def get_name(self) -> str:
        return self.name

    def with_decimal_places(self, decimal_places: int) -> "Currency":
        """Get the same currency at a different resolution."""
        if decimal_places == self.decimal_places:
            return self
        return get_currency_definition(replace(self._currency_options, decimal_places=decimal_places))

    def _with_decimal_places(self, decimal_places: int) -> "Currency":
        return self.with_decimal_places(decimal_places)

    def is_same_definition(self, other: QuantityDefinition) -> bool:
        if other is self:
            return True
        return isinstance(other, Currency) and other.currency_options == self.currency_options

    def to_json(self) -> Any:
        """The code for standard currencies, the full options otherwise."""
        if self._currency_options == CurrencyOptions.from_value(self.code):
            return self.code
        return self._currency_options.to_json()

    #
    # Formatting
    #
    def format_to_parts(self, base_value: int, decimal_places: int | None = None) -> list[tuple[FormatPart, str]]:
        """
        Format a base value into typed parts.

        Args:
            base_value: The integer value to format
            decimal_places: Resolution of base_value, defaults to the currency's

        Returns:
            List of (FormatPart, text) tuples that concatenate to the currency string
        """
        if decimal_places is None:
            decimal_places = self.decimal_places

        is_negative, integer, fraction = split_base_value(base_value, decimal_places)
        fmt = self._format
        if is_negative:
            prefix, suffix = fmt.negative_prefix, fmt.negative_suffix
        else:
            prefix, suffix = fmt.positive_prefix, fmt.positive_suffix

        parts = fmt.affix_parts(prefix)
        for index, group in enumerate(digit_groups(integer, fmt.primary_grouping, fmt.secondary_grouping)):
            if index:
                parts.append((FormatPart.GROUP, fmt.group_mark))
            parts.append((FormatPart.INTEGER, group))
        if fraction:
            parts.append((FormatPart.DECIMAL, fmt.decimal_mark))
            parts.append((FormatPart.FRACTION, fraction))
        parts.extend(fmt.affix_parts(suffix))
        return parts

    def format_base_value_with_parts(
        self,
        base_value: int,
        parts_to_skip: "FormatPart | str | Iterable[FormatPart | str] | None" = None,
        decimal_places: int | None = None,
    ) -> str:
        """
        Format a base value leaving out selected parts.

        Args:
            base_value: The integer value to format
            parts_to_skip: FormatPart(s), or their string values such as 'currency'
            decimal_places: Resolution of base_value, defaults to the currency's
        """
        skip = _normalize_parts(parts_to_skip)
        text = "".join(
            value for part, value in self.format_to_parts(base_value, decimal_places) if part not in skip
        )
        return text.strip() if skip else text

    def base_value_to_string(self, base_value: int) -> str:
        """Format a base value (1234 for $12.34) as a localized currency string."""
        return self.format_base_value_with_parts(base_value)

    def base_value_to_simple_string(self, base_value: int) -> str:
        """Format without the currency symbol or group marks, e.g. '1234567.89'."""
        return self.format_base_value_with_parts(base_value, [FormatPart.CURRENCY, FormatPart.GROUP])

    def base_value_to_no_currency_string(self, base_value: int) -> str:
        """Format without the currency symbol, e.g. '1,234,567.89'."""
        return self.format_base_value_with_parts(base_value, FormatPart.CURRENCY)

    def decimal_value_to_string(self, value: Number, decimal_places: int | None = None) -> str:
        """
        Format a decimal value (12.34 for $12.34) as a localized currency string.

        Args:
            value: The decimal value
            decimal_places: Number of decimal places to show, defaults to the currency's
        """
        if decimal_places is None:
            decimal_places = self.decimal_places
        return self.format_base_value_with_parts(scale_to_integer(value, decimal_places), None, decimal_places)

    #
    # Parsing
    #
    def _scan(self, text: str) -> tuple[int, int, int]:
        """
        Scan a currency string into (sign, digits value, fraction digit count).

        Whitespace is only allowed around the string; spacing inside it must be
        one of the locale's affix literals.

        Raises:
            CurrencyParseError: On unrecognized characters, a second decimal
                mark, or no digits at all
        """
        fmt = self._format
        value_text = text.strip()
        tokens = [
            (fmt.currency_symbol, None),
            (fmt.plus_sign, None),
            (fmt.group_mark, None),
            (fmt.minus_sign, "minus"),
            ("-", "minus"),
            (fmt.decimal_mark, "decimal"),
        ] + [(literal, None) for literal in self._literals]
        tokens = [(token, kind) for token, kind in tokens if token]

        sign = 1
        value = 0
        digit_count = 0
        fraction_places = -1
        length = len(value_text)
        i = 0
        while i < length:
            for token, kind in tokens:
                if value_text.startswith(token, i):
                    if kind == "minus":
                        sign = -1
                    elif kind == "decimal":
                        if fraction_places >= 0:
                            raise CurrencyParseError(f"More than one decimal mark in {text!r}")
                        fraction_places = 0
                    i += len(token)
                    break
            else:
                ch = value_text[i]
                if "0" <= ch <= "9":
                    value = value * 10 + int(ch)
                    digit_count += 1
                    if fraction_places >= 0:
                        fraction_places += 1
                else:
                    raise CurrencyParseError(f"Unrecognized character {ch!r} in currency string {text!r}")
                i += 1

        if not digit_count:
            raise CurrencyParseError(f"No digits in currency string {text!r}")
        return sign, value, max(fraction_places, 0)

    def base_value_from_string(self, text: str) -> int:
        """
        Parse a localized currency string into a base value.

        Digits beyond the currency's decimal places are rounded half away from zero.

        Raises:
            CurrencyParseError: If the string is not a currency string
        """
        sign, value, fraction_places = self._scan(text)
        return sign * rescale(value, fraction_places, self.decimal_places)

    def decimal_value_from_string(self, text: str) -> float:
        """Parse a localized currency string into a decimal value ('$12.34' -> 12.34)."""
        return self.base_value_to_number(self.base_value_from_string(text))

    #
    # QuantityDefinition
    #
    def base_value_to_value_text(self, base_value: int) -> str:
        return self.base_value_to_string(base_value)

    def from_value_text(self, value_text: str) -> ParseResult | None:
        try:
            sign, value, fraction_places = self._scan(value_text)
        except CurrencyParseError as e:
            logger.debug(f"Could not parse {value_text!r} as {self.code}: {e}")
            return None

        quantity = self.from_base_value(sign * rescale(value, fraction_places, self.decimal_places))
        if fraction_places > self.decimal_places:
            full_quantity = self.with_decimal_places(fraction_places).from_base_value(sign * value)
        else:
            full_quantity = quantity
        return ParseResult(quantity=quantity, full_quantity=full_quantity, remaining_text="")

    def get_display_text(self) -> str:
        """Template such as '$x.xx'."""
        text = "x"
        if self.decimal_places > 0:
            text += self._format.decimal_mark + "x" * self.decimal_places
        fmt = self._format
        prefix = "".join(value for _, value in fmt.affix_parts(fmt.positive_prefix))
        suffix = "".join(value for _, value in fmt.affix_parts(fmt.positive_suffix))
        return prefix + text + suffix

    def _check_operands(self, operands: Sequence[Operand], operation: str) -> None:
        if operation == "multiply":
            has_currency = False
            for operand in operands:
                if isinstance(operand, Quantity) and operand.definition.is_currency:
                    if has_currency:
                        raise CurrencyMismatchError(
                            "Quantities with currencies can only be multiplied by scalar values/quantities."
                        )
                    has_currency = True
                    if operand.definition.code != self.code:
                        raise CurrencyMismatchError(
                            "The quantity of a currency being multiplied must match the currency "
                            "doing the multiplication."
                        )
            return

        for operand in operands:
            if (
                not isinstance(operand, Quantity)
                or not operand.definition.is_currency
                or operand.definition.code != self.code
            ):
                raise CurrencyMismatchError(
                    f"Quantities with currencies can only be {operation}ed with quantities of the same currency."
                )

    def __repr__(self) -> str:
        return f"<Currency {self.code} {self.decimal_places}dp {self.locale}>"


_currencies: dict[CurrencyOptions, Currency] = {}
_currencies_lock = threading.Lock()


def get_currency_definition(options: Any, locale: str | None = None) -> Currency:
    """
    Get the shared Currency for a set of options.

    Args:
        options: A code, Currency, CurrencyOptions or options mapping
        locale: Locale used when options do not specify one

    Raises:
        UnknownCurrencyError: If a code is not in the ISO 4217 table
        QuantityDefinitionError: If the options are invalid
    """
    if isinstance(options, Currency):
        return options

    normalized = CurrencyOptions.from_value(options, locale)
    existing = _currencies.get(normalized)
    if existing is not None:
        return existing

    with _currencies_lock:
        existing = _currencies.get(normalized)
        if existing is not None:
            return existing
        currency = Currency(normalized)
        _currencies[normalized] = currency

    logger.debug(f"Created currency definition {currency.definition_name}")
    register_quantity_definition(currency)
    return currency


def get_currency(code: str, locale: str | None = None) -> Currency:
    """
    Get the shared Currency for an ISO 4217 code.

    Raises:
        UnknownCurrencyError: If the code is not in the ISO 4217 table
    """
    try:
        return get_currency_definition(code.upper(), locale)
    except UnknownCurrencyError:
        logger.debug(f"Unknown currency code {code!r}")
        raise


def currency_from_definition_name(name: str) -> Currency | None:
    """Resolve a Currency.definition_name back to its Currency."""
    match = _DEFINITION_NAME_PATTERN.match(name)
    if match is None:
        logger.debug(f"Not a currency definition name: {name!r}")
        return None

    options: dict[str, Any] = {
        "code": match["code"],
        "decimalPlaces": int(match["places"]),
        "locale": match["locale"],
    }
    if match["numeric"] is not None:
        options["numericCode"] = int(match["numeric"])
    if match["name"] is not None:
        options["name"] = match["name"]
    return get_currency_definition(options)


def currency_to_json(currency: Currency | None) -> Any:
    """Serialize a currency to its code, or its options for non-standard currencies."""
    if currency is None:
        return None
    return currency.to_json()


def currency_from_json(json_value: Any) -> Currency | None:
    """Restore a currency serialized by currency_to_json()."""
    if not json_value:
        return None
    if isinstance(json_value, str):
        return get_currency(json_value)
    return get_currency_definition(json_value)
