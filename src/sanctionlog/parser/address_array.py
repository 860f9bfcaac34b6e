"""Manual decoder for a single dynamic ``address[]`` event argument.

Payload layout (32-byte words):
    [0]            head: byte offset of the array (0x20 for a lone argument)
    [offset]       N, the array length
    [offset+32..]  N slots, each a right-aligned 20-byte address

The 12 high-order padding bytes of each slot are ignored, not validated.
"""

from eth_utils import to_checksum_address

from sanctionlog.exceptions import DecodeError

WORD_SIZE = 32
ADDRESS_SIZE = 20

DEFAULT_MAX_LENGTH = 5000


def _to_bytes(data: str | bytes) -> bytes:
    if isinstance(data, bytes):
        return data
    hex_data = data[2:] if data.startswith(("0x", "0X")) else data
    try:
        return bytes.fromhex(hex_data)
    except ValueError as e:
        raise DecodeError(f"Payload is not valid hex: {e}") from e


def _read_word(payload: bytes, offset: int, what: str) -> int:
    end = offset + WORD_SIZE
    if len(payload) < end:
        raise DecodeError(f"Payload too short for {what}: need {end} bytes, got {len(payload)}")
    return int.from_bytes(payload[offset:end], "big")


def decode_address_array(data: str | bytes, max_length: int = DEFAULT_MAX_LENGTH) -> list[str]:
    """Decode an ABI-encoded ``address[]`` payload into checksummed addresses.

    Raises DecodeError on truncated payloads, non-hex input, or a length word
    above ``max_length``.
    """
    payload = _to_bytes(data)

    offset = _read_word(payload, 0, "array offset")
    if offset % WORD_SIZE != 0:
        raise DecodeError(f"Array offset {offset} is not word-aligned")

    length = _read_word(payload, offset, "array length")
    if length > max_length:
        raise DecodeError(f"Array length {length} exceeds limit of {max_length}")

    start = offset + WORD_SIZE
    needed = start + length * WORD_SIZE
    if len(payload) < needed:
        raise DecodeError(
            f"Payload too short for {length} addresses: need {needed} bytes, got {len(payload)}"
        )

    addresses: list[str] = []
    for i in range(length):
        slot = payload[start + i * WORD_SIZE:start + (i + 1) * WORD_SIZE]
        addresses.append(to_checksum_address("0x" + slot[WORD_SIZE - ADDRESS_SIZE:].hex()))
    return addresses


def encode_address_array(addresses: list[str]) -> str:
    """Inverse of decode_address_array. Produces the 0x-prefixed hex log payload."""
    words = [WORD_SIZE.to_bytes(WORD_SIZE, "big"), len(addresses).to_bytes(WORD_SIZE, "big")]
    for addr in addresses:
        raw = bytes.fromhex(addr[2:] if addr.startswith("0x") else addr)
        if len(raw) != ADDRESS_SIZE:
            raise ValueError(f"Not a 20-byte address: {addr}")
        words.append(raw.rjust(WORD_SIZE, b"\x00"))
    return "0x" + b"".join(words).hex()
