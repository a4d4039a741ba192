"""Fixed-width binary layout for account records.

The layout is explicit and independent of any in-memory representation:

    version   B    1 byte   record format version
    active    B    1 byte   0 = closed, 1 = active
    number    I    4 bytes  account number
    balance   q    8 bytes  signed balance in minor units (cents)
    type      10s           NUL-padded ASCII
    name      100s          NUL-padded UTF-8
    phone     20s           NUL-padded UTF-8
    address   200s          NUL-padded UTF-8

All integers are little-endian.
"""

import struct

from bankledger.domain.entities import Account, AccountType
from bankledger.domain.errors import CorruptRecordError, InvalidAccountTypeError
from bankledger.domain.money import from_minor_units, to_minor_units

FORMAT_VERSION = 1

TYPE_LEN = 10
NAME_LEN = 100
PHONE_LEN = 20
ADDRESS_LEN = 200

_RECORD = struct.Struct(f"<BBIq{TYPE_LEN}s{NAME_LEN}s{PHONE_LEN}s{ADDRESS_LEN}s")

RECORD_SIZE = _RECORD.size


def truncate_text(text: str, width: int) -> bytes:
    """Encode text as UTF-8, cut to at most ``width`` bytes on a character boundary."""
    encoded = (text or "").encode("utf-8")
    if len(encoded) <= width:
        return encoded
    return encoded[:width].decode("utf-8", errors="ignore").encode("utf-8")


def _decode_text(raw: bytes) -> str:
    return raw.rstrip(b"\x00").decode("utf-8", errors="replace")


def encode_account(account: Account) -> bytes:
    """Encode an account into exactly RECORD_SIZE bytes."""
    return _RECORD.pack(
        FORMAT_VERSION,
        1 if account.active else 0,
        account.account_number,
        to_minor_units(account.balance),
        account.account_type.value.encode("ascii"),
        truncate_text(account.holder_name, NAME_LEN),
        truncate_text(account.phone, PHONE_LEN),
        truncate_text(account.address, ADDRESS_LEN),
    )


def decode_account(data: bytes) -> Account:
    """Decode one record slot.

    Raises:
        CorruptRecordError: If the slot does not hold a valid account
    """
    if len(data) != RECORD_SIZE:
        raise CorruptRecordError(
            f"Record must be {RECORD_SIZE} bytes, got {len(data)}"
        )
    version, active, number, cents, raw_type, name, phone, address = _RECORD.unpack(data)
    if version != FORMAT_VERSION:
        raise CorruptRecordError(f"Unsupported record format version {version}")
    if number <= 0:
        raise CorruptRecordError("Record has no account number")
    try:
        account_type = AccountType.parse(_decode_text(raw_type))
    except InvalidAccountTypeError as e:
        raise CorruptRecordError(f"Record for account {number}: {e}") from e

    return Account(
        account_number=number,
        holder_name=_decode_text(name),
        account_type=account_type,
        balance=from_minor_units(cents),
        phone=_decode_text(phone),
        address=_decode_text(address),
        active=bool(active),
    )
