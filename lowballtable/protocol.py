"""Wire format for the table protocol: message header, checksums and field encoding.

All multi-byte integers travel in network byte order (big-endian).
"""

from __future__ import annotations

import struct
import time
import zlib
from dataclasses import dataclass
from enum import IntEnum

PROTOCOL_MAGIC = 0x504B5232  # "PKR2"
PROTOCOL_VERSION = 1
MAX_PACKET_SIZE = 65536
MAX_TABLES_PER_PLAYER = 24
MAX_CHAT_LENGTH = 256

_HEADER_STRUCT = struct.Struct(">IHHIIII")
HEADER_SIZE = _HEADER_STRUCT.size


class MessageType(IntEnum):
    """Message identifiers, grouped by range."""

    # Connection management (0x0000-0x00FF)
    MSG_HELLO = 0x0001
    MSG_HELLO_RESPONSE = 0x0002
    MSG_AUTH_REQUEST = 0x0003
    MSG_AUTH_RESPONSE = 0x0004
    MSG_PING = 0x0005
    MSG_PONG = 0x0006
    MSG_DISCONNECT = 0x0007
    MSG_ERROR = 0x0008

    # Lobby operations (0x0100-0x01FF)
    MSG_LOBBY_INFO = 0x0100
    MSG_TABLE_LIST_REQUEST = 0x0101
    MSG_TABLE_LIST_RESPONSE = 0x0102
    MSG_TABLE_INFO = 0x0103
    MSG_JOIN_TABLE_REQUEST = 0x0104
    MSG_JOIN_TABLE_RESPONSE = 0x0105
    MSG_LEAVE_TABLE = 0x0106
    MSG_CREATE_TABLE_REQUEST = 0x0107
    MSG_CREATE_TABLE_RESPONSE = 0x0108
    MSG_SEAT_UPDATE = 0x0109

    # Game actions (0x0200-0x02FF)
    MSG_GAME_STATE = 0x0200
    MSG_PLAYER_ACTION = 0x0201
    MSG_ACTION_RESULT = 0x0202
    MSG_DEAL_CARDS = 0x0203
    MSG_SHOW_CARDS = 0x0204
    MSG_HAND_START = 0x0205
    MSG_HAND_END = 0x0206
    MSG_BETTING_ROUND_START = 0x0207
    MSG_BETTING_ROUND_END = 0x0208
    MSG_POT_UPDATE = 0x0209
    MSG_WINNER_INFO = 0x020A

    # Tournament (0x0300-0x03FF)
    MSG_TOURNAMENT_LIST = 0x0300
    MSG_TOURNAMENT_REGISTER = 0x0301
    MSG_TOURNAMENT_UNREGISTER = 0x0302
    MSG_TOURNAMENT_START = 0x0303
    MSG_TOURNAMENT_UPDATE = 0x0304
    MSG_TOURNAMENT_TABLE_MOVE = 0x0305
    MSG_TOURNAMENT_ELIMINATION = 0x0306
    MSG_TOURNAMENT_COMPLETE = 0x0307

    # Chat and social (0x0400-0x04FF)
    MSG_CHAT = 0x0400
    MSG_PLAYER_INFO_REQUEST = 0x0401
    MSG_PLAYER_INFO_RESPONSE = 0x0402
    MSG_FRIEND_LIST = 0x0403
    MSG_ADD_FRIEND = 0x0404
    MSG_REMOVE_FRIEND = 0x0405

    # Statistics (0x0500-0x05FF)
    MSG_STATS_REQUEST = 0x0500
    MSG_STATS_RESPONSE = 0x0501
    MSG_HAND_HISTORY_REQUEST = 0x0502
    MSG_HAND_HISTORY_RESPONSE = 0x0503


class ErrorCode(IntEnum):
    """Error codes carried in response messages."""

    ERR_NONE = 0
    ERR_INVALID_MESSAGE = 1
    ERR_NOT_AUTHENTICATED = 2
    ERR_TABLE_FULL = 3
    ERR_INSUFFICIENT_FUNDS = 4
    ERR_INVALID_ACTION = 5
    ERR_NOT_YOUR_TURN = 6
    ERR_ALREADY_AT_TABLE = 7
    ERR_TABLE_NOT_FOUND = 8
    ERR_TOURNAMENT_FULL = 9
    ERR_SERVER_FULL = 10


@dataclass(frozen=True)
class WireCard:
    """A card as it travels on the wire: one byte of rank, one byte of suit."""

    rank: int
    suit: int


@dataclass
class MessageHeader:
    """Fixed-size header preceding every message; fields hold host values."""

    magic: int
    version: int
    msg_type: int
    sequence: int
    timestamp: int
    length: int
    checksum: int

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        try:
            return _HEADER_STRUCT.pack(
                self.magic,
                self.version,
                int(self.msg_type),
                self.sequence,
                self.timestamp,
                self.length,
                self.checksum,
            )
        except struct.error as exc:
            raise ValueError(f"header field out of range: {exc}") from exc


def init_header(msg_type: MessageType, length: int) -> MessageHeader:
    """Build a header for a message of the given type and payload length."""
    return MessageHeader(
        magic=PROTOCOL_MAGIC,
        version=PROTOCOL_VERSION,
        msg_type=MessageType(msg_type),
        sequence=0,
        timestamp=int(time.time()) & 0xFFFFFFFF,
        length=length,
        checksum=0,
    )


def unpack_header(data: bytes) -> MessageHeader:
    """Decode a header from the start of ``data``."""
    if len(data) < HEADER_SIZE:
        raise ValueError(f"header needs {HEADER_SIZE} bytes, got {len(data)}")
    magic, version, raw_type, sequence, timestamp, length, checksum = (
        _HEADER_STRUCT.unpack_from(data)
    )
    try:
        msg_type: int = MessageType(raw_type)
    except ValueError:
        msg_type = raw_type
    return MessageHeader(magic, version, msg_type, sequence, timestamp, length, checksum)


def calculate_checksum(data: bytes) -> int:
    """CRC-32 (reflected, polynomial 0xEDB88320) of ``data``."""
    return zlib.crc32(bytes(data)) & 0xFFFFFFFF


def verify_header(header: MessageHeader) -> bool:
    """Check magic, supported version and payload length limit."""
    if header.magic != PROTOCOL_MAGIC:
        return False
    if header.version > PROTOCOL_VERSION:
        return False
    return header.length <= MAX_PACKET_SIZE - HEADER_SIZE


def _pack(fmt: str, value: int) -> bytes:
    try:
        return struct.pack(fmt, value)
    except struct.error as exc:
        raise ValueError(f"value {value!r} does not fit: {exc}") from exc


def _unpack(fmt: str, buffer: bytes) -> int:
    try:
        return struct.unpack_from(fmt, buffer)[0]
    except struct.error as exc:
        raise ValueError(f"buffer too short: {exc}") from exc


def pack_uint16(value: int) -> bytes:
    return _pack(">H", value)


def pack_uint32(value: int) -> bytes:
    return _pack(">I", value)


def pack_uint64(value: int) -> bytes:
    return _pack(">Q", value)


def pack_string(text: str, max_len: int) -> bytes:
    """Encode ``text`` into a NUL-padded field of exactly ``max_len`` bytes."""
    if max_len < 1:
        raise ValueError("max_len must be at least 1")
    raw = text.encode("utf-8")[: max_len - 1]
    return raw.ljust(max_len, b"\x00")


def pack_card(card: WireCard) -> bytes:
    return bytes((card.rank, card.suit))


def unpack_uint16(buffer: bytes) -> int:
    return _unpack(">H", buffer)


def unpack_uint32(buffer: bytes) -> int:
    return _unpack(">I", buffer)


def unpack_uint64(buffer: bytes) -> int:
    return _unpack(">Q", buffer)


def unpack_string(buffer: bytes, max_len: int) -> str:
    """Read a NUL-terminated string of at most ``max_len - 1`` bytes."""
    if max_len < 1:
        raise ValueError("max_len must be at least 1")
    raw = bytes(buffer[: max_len - 1]).split(b"\x00", 1)[0]
    return raw.decode("utf-8", errors="replace")


def unpack_card(buffer: bytes) -> WireCard:
    if len(buffer) < 2:
        raise ValueError("a card needs 2 bytes")
    return WireCard(rank=buffer[0], suit=buffer[1])