from nethermind.evm_rpc.exceptions import DecodingError

WEI_PER_ETH = 10**18


def strip_hex_prefix(hex_str: str) -> str:
    """Removes a leading 0x or 0X from a hex string if present"""
    if hex_str[:2] in ("0x", "0X"):
        return hex_str[2:]
    return hex_str


def to_bytes(hex_str: str) -> bytes:
    """
    Converts a hex string into bytes.  Leading 0x is optional, and odd length strings are left padded

    :param hex_str: hex encoded data
    :return: raw bytes
    """
    stripped = strip_hex_prefix(hex_str)
    if len(stripped) % 2:
        stripped = "0" + stripped
    try:
        return bytes.fromhex(stripped)
    except ValueError as e:
        raise DecodingError(f"Invalid hex string: {hex_str!r}") from e


def hex_to_decimal(hex_str: str) -> int:
    """
    Converts a hex quantity to an integer

    >>> hex_to_decimal("0xff")
    255
    """
    return int(strip_hex_prefix(hex_str), 16)


def decimal_to_hex(decimal: int) -> str:
    """
    Converts an integer to a 0x prefixed hex quantity

    >>> decimal_to_hex(255)
    '0xff'
    """
    return f"0x{decimal:x}"


def wei_to_eth(amount: int) -> float:
    """
    Converts wei into ether.  Returns a float, so amounts with more than ~15 significant digits lose precision.

    >>> wei_to_eth(1_000_000_000_000_000_000)
    1.0
    """
    return amount / WEI_PER_ETH


def shorten_hex(hex_str: str, keep_len: int) -> str:
    """
    Keeps the last keep_len characters of a hex string, and prefixes them with 0x.  keep_len must not exceed the
    length of hex_str.

    >>> shorten_hex("0x000000000000000000000000f8e81d47203a594245e36c48e151709f0c19fbe8", 40)
    '0xf8e81d47203a594245e36c48e151709f0c19fbe8'
    """
    return f"0x{hex_str[len(hex_str) - keep_len:]}"


def hex_to_string(hex_str: str) -> str:
    """
    Decodes hex encoded UTF-8 text returned from contracts.  Strips spaces, backslashes, and NUL padding.

    >>> hex_to_string("0x48656c6c6f000000")
    'Hello'
    """
    text = to_bytes(hex_str).decode("utf-8")
    text = text.replace(" ", "").replace("\\", "")
    return text.strip("\x00")


def util_get_method_hash(calldata: str) -> str:
    """
    Returns the 4 byte function selector from calldata

    >>> util_get_method_hash("0xa9059cbb000000000000000000000000f8e81d47203a594245e36c48e151709f0c19fbe8")
    '0xa9059cbb'
    """
    calldata_bytes = to_bytes(calldata)
    if len(calldata_bytes) < 4:
        raise DecodingError(f"Calldata {calldata!r} is shorter than a 4 byte function selector")
    return "0x" + calldata_bytes[:4].hex()


def list_blocks_range(start: int, end: int) -> list[int]:
    """Returns block numbers from start up to, but not including, end"""
    return list(range(start, end))
