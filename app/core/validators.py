"""
Structural validation of account numbers per payment scheme.

Every scheme maps to a pure predicate over the submitted PAN. The table is
checked for totality when a ValidatorFactory is built, so a scheme without a
validator stops the application at startup rather than failing a request.
"""

from collections.abc import Callable, Mapping
from collections.abc import Set as AbstractSet
from typing import TypeAlias

from app.exceptions.startup import ConfigurationError
from app.models.wallet import WalletScheme

Validator: TypeAlias = Callable[[str], bool]

CARD_PAN_LENGTH = 16
MOMO_PAN_LENGTH = 12
MIN_PREFIX_LENGTH = 5

# --- Network prefix tables (Ghana numbering plan, country code 233) ---
# Kept verbatim: editing these silently changes which numbers validate.

MTN_PREFIXES = frozenset(
    {
        "23324", "23354", "23355", "233591", "233592", "233593", "233594", "233595", "233596", "2333080", "2333081",
        "2333082", "2333180", "2333280", "23333800", "23334800", "23335800", "23336800", "23337800", "23338800",
        "23339800",
    }
)  # fmt: skip

VODAFONE_PREFIXES = frozenset(
    {"23320", "23330", "23331", "23332", "23333", "23334", "23335", "23336", "23337", "23338", "23339", "23350"}
)

AIRTEL_TIGO_PREFIXES = frozenset(
    {
        "23326", "23356", "233307", "233317", "233327", "233337", "233347", "233357", "233367", "233377", "233387",
        "233397", "23327", "23329", "23357",
    }
)  # fmt: skip


# --- 1. CARD SCHEMES ---


def validate_visa(pan: str) -> bool:
    return len(pan) == CARD_PAN_LENGTH and pan.startswith("4")


def validate_mastercard(pan: str) -> bool:
    return len(pan) == CARD_PAN_LENGTH and pan.startswith("5")


# --- 2. MOBILE MONEY SCHEMES ---


def has_network_prefix(pan: str, prefixes: AbstractSet[str]) -> bool:
    """
    Returns True if any leading substring of at least MIN_PREFIX_LENGTH characters
    is a member of prefixes. Shorter prefixes are tried first.
    """
    for end in range(MIN_PREFIX_LENGTH, len(pan)):
        if pan[:end] in prefixes:
            return True
    return False


def momo_validator(prefixes: frozenset[str]) -> Validator:
    """Builds a validator for a mobile money network from its prefix table."""

    def validate(pan: str) -> bool:
        # Length gate first: the prefix loop never sees short input.
        return len(pan) == MOMO_PAN_LENGTH and has_network_prefix(pan, prefixes)

    return validate


validate_mtn = momo_validator(MTN_PREFIXES)
validate_vodafone = momo_validator(VODAFONE_PREFIXES)
validate_airtel_tigo = momo_validator(AIRTEL_TIGO_PREFIXES)


def validate_phone_number(phone_number: str) -> bool:
    # Accepts everything for now; country specific rules belong here.
    return True


SCHEME_VALIDATORS: Mapping[WalletScheme, Validator] = {
    WalletScheme.VISA: validate_visa,
    WalletScheme.MASTERCARD: validate_mastercard,
    WalletScheme.MTN: validate_mtn,
    WalletScheme.VODAFONE: validate_vodafone,
    WalletScheme.AIRTEL_TIGO: validate_airtel_tigo,
}


# --- 3. FACTORY ---


class ValidatorFactory:
    """
    Resolves the validator for a wallet scheme.

    Raises:
        ConfigurationError: On construction, if any WalletScheme member has no validator.
    """

    def __init__(self, validators: Mapping[WalletScheme, Validator] = SCHEME_VALIDATORS):
        missing = [scheme.value for scheme in WalletScheme if scheme not in validators]
        if missing:
            raise ConfigurationError(
                f"Critical application requirement not met: Validator for {', '.join(missing)} not found."
            )
        self._validators = dict(validators)

    def get_scheme_validator(self, scheme: WalletScheme) -> Validator:
        return self._validators[scheme]

    def get_phone_number_validator(self) -> Validator:
        return validate_phone_number
