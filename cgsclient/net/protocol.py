from __future__ import annotations

from enum import IntEnum

# Server replies are framed, client commands are not.
# Server -> client: 6 ASCII digits (zero-padded byte count) followed by the payload
#   e.g. b"000002OK"
# Client -> server: raw command text, no header, no trailing newline
#   e.g. b"GET_MOVE"
# Every command is answered by exactly one framed 'OK' before anything else.
# Commands:
# - CLIENT_NAME <name>              -> OK
# - WAIT_GAME [<MODE> key=value...] -> OK, NOT_READY*, <game name>, <data>
# - GET_GAME_DATA                   -> OK, <data>, <0|1 who starts>
# - GET_MOVE                        -> OK, <move>, <message>, <-1|0|1>
# - PLAY_MOVE <move>                -> OK, <message>, <-1|0|1>
# - DISP_GAME                       -> OK, <text to print>
# - SEND_COMMENT <text>             -> OK

HEAD_SIZE = 6
MAX_LENGTH = 20000      # largest reply read in one go (and largest command)
MAX_GET_MOVE = 128
MAX_MESSAGE = 1024
MAX_NAME = 20
MAX_COMMENT = 100

ENCODING = "utf-8"

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1234

CLIENT_NAME = "CLIENT_NAME"
WAIT_GAME = "WAIT_GAME"
GET_GAME_DATA = "GET_GAME_DATA"
GET_MOVE = "GET_MOVE"
PLAY_MOVE = "PLAY_MOVE"
DISP_GAME = "DISP_GAME"
SEND_COMMENT = "SEND_COMMENT"

ACK = b"OK"
NOT_READY = b"NOT_READY"


class ReturnCode(IntEnum):
    NORMAL_MOVE = 0
    WINNING_MOVE = 1
    LOSING_MOVE = -1
