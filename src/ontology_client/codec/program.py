"""
Program scripts

Transaction signatures travel as two small VM programs: an invocation script
pushing each signature, and a verification script naming the public key(s).
The address of an account is the hash160 of its verification script.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

from ..crypto.key import PublicKey
from ..crypto.schemes import KeyType
from ..runtime.errors import InvalidParamsError, UnmarshalError
from .reader import BinaryReader
from .writer import BinaryWriter

PUSH0 = 0x00
PUSHBYTES75 = 0x4B
PUSHDATA1 = 0x4C
PUSHDATA2 = 0x4D
PUSHDATA4 = 0x4E
PUSHM1 = 0x4F
PUSH1 = 0x51
PUSH16 = 0x60
CHECKSIG = 0xAC
CHECKMULTISIG = 0xAE

MULTI_SIG_MAX_PUBKEY_SIZE = 1024


@dataclass
class ProgramInfo:
    """Public keys and threshold named by a verification script."""

    pub_keys: List[PublicKey] = field(default_factory=list)
    m: int = 0


def push_bytes(data: str) -> str:
    """
    Encode a data push.

    Args:
        data: Hex encoded bytes to push

    Returns:
        Hex encoded push instruction
    """
    raw = bytes.fromhex(data)
    n = len(raw)
    writer = BinaryWriter()
    if n == 0:
        raise InvalidParamsError("Cannot push empty data")
    if n <= PUSHBYTES75:
        writer.u8(n)
    elif n < 0x100:
        writer.u8(PUSHDATA1).u8(n)
    elif n < 0x10000:
        writer.u8(PUSHDATA2).u16le(n)
    else:
        writer.u8(PUSHDATA4).u32le(n)
    return writer.bytes(raw).to_hex()


def push_num(num: int) -> str:
    """Encode a small integer push."""
    if num == -1:
        return f"{PUSHM1:02x}"
    if num == 0:
        return f"{PUSH0:02x}"
    if 0 < num <= 16:
        return f"{PUSH1 - 1 + num:02x}"
    if num < 0:
        raise InvalidParamsError(f"Cannot push negative number: {num}")
    length = (num.bit_length() + 8) // 8
    return push_bytes(num.to_bytes(length, "little").hex())


def _sort_key(pk: PublicKey) -> Tuple[int, str]:
    # compressed ECDSA points are ordered by x coordinate, not by parity prefix
    if pk.algorithm in (KeyType.ECDSA, KeyType.SM2):
        return pk.algorithm.hex, pk.key[2:]
    return pk.algorithm.hex, pk.key


def sort_public_keys(pub_keys: Sequence[PublicKey]) -> List[PublicKey]:
    """Canonical key order used in multisig scripts."""
    return sorted(pub_keys, key=_sort_key)


def program_from_pub_key(pk: PublicKey) -> str:
    """Verification script for a single key."""
    return push_bytes(pk.serialize_hex()) + f"{CHECKSIG:02x}"


def program_from_multi_pub_key(pub_keys: Sequence[PublicKey], m: int) -> str:
    """
    Verification script for an m-of-n multisig.

    Keys are sorted before encoding so that the same set always produces
    the same script and address.
    """
    n = len(pub_keys)
    if not 1 <= m <= n <= MULTI_SIG_MAX_PUBKEY_SIZE:
        raise InvalidParamsError(f"Invalid multisig threshold {m} of {n}")

    result = push_num(m)
    for pk in sort_public_keys(pub_keys):
        result += push_bytes(pk.serialize_hex())
    result += push_num(n)
    result += f"{CHECKMULTISIG:02x}"
    return result


def program_from_params(sigs: Sequence[str]) -> str:
    """Invocation script pushing each signature."""
    return "".join(push_bytes(sig) for sig in sigs)


def _read_item(reader: BinaryReader) -> Union[int, str]:
    """Read one push; small numbers come back as int, data as hex."""
    opcode = reader.read_uint8()
    if opcode == PUSH0:
        return 0
    if opcode == PUSHM1:
        return -1
    if PUSH1 <= opcode <= PUSH16:
        return opcode - PUSH1 + 1
    if opcode <= PUSHBYTES75:
        return reader.read(opcode)
    if opcode == PUSHDATA1:
        return reader.read(reader.read_uint8())
    if opcode == PUSHDATA2:
        return reader.read(reader.read_uint16())
    if opcode == PUSHDATA4:
        return reader.read(reader.read_uint32())
    raise UnmarshalError(f"Unexpected opcode in program: {opcode:#04x}")


def _as_num(item: Union[int, str]) -> int:
    if isinstance(item, int):
        return item
    return int.from_bytes(bytes.fromhex(item), "little")


def _as_pub_key(item: Union[int, str]) -> PublicKey:
    if isinstance(item, int):
        raise UnmarshalError("Expected a public key push")
    return PublicKey.deserialize_hex(BinaryReader(item), len(item) // 2)


def get_params_from_program(program: str) -> List[str]:
    """Signatures pushed by an invocation script."""
    reader = BinaryReader(program)
    sigs = []
    while not reader.is_empty():
        item = _read_item(reader)
        if isinstance(item, int):
            raise UnmarshalError("Expected a signature push")
        sigs.append(item)
    return sigs


def get_program_info(program: str) -> ProgramInfo:
    """
    Parse a verification script.

    Raises:
        UnmarshalError: If the script is neither single key nor multisig
    """
    if len(program) < 4:
        raise UnmarshalError("Verification script is too short")

    last = int(program[-2:], 16)
    reader = BinaryReader(program[:-2])
    items = []
    while not reader.is_empty():
        items.append(_read_item(reader))

    if last == CHECKSIG:
        if len(items) != 1:
            raise UnmarshalError("Single key script must push exactly one key")
        return ProgramInfo([_as_pub_key(items[0])], 1)

    if last == CHECKMULTISIG:
        if len(items) < 3:
            raise UnmarshalError("Multisig script is too short")
        m = _as_num(items[0])
        n = _as_num(items[-1])
        keys = [_as_pub_key(item) for item in items[1:-1]]
        if len(keys) != n or not 1 <= m <= n:
            raise UnmarshalError(f"Inconsistent multisig script: {m} of {n} with {len(keys)} keys")
        return ProgramInfo(keys, m)

    raise UnmarshalError(f"Unsupported verification script opcode: {last:#04x}")
