"""High level key codes for keys that no single ASCII character represents."""

from __future__ import annotations

from enum import IntEnum

__all__ = ["CgdbKey", "is_cgdb_key"]


class CgdbKey(IntEnum):
    """Abstract keys, numbered above the range of plain character codes."""

    ESC = 10000
    UP = 10001
    DOWN = 10002
    LEFT = 10003
    RIGHT = 10004
    HOME = 10005
    END = 10006
    PPAGE = 10007
    NPAGE = 10008
    DC = 10009
    IC = 10010

    # Function keys
    F1 = 10011
    F2 = 10012
    F3 = 10013
    F4 = 10014
    F5 = 10015
    F6 = 10016
    F7 = 10017
    F8 = 10018
    F9 = 10019
    F10 = 10020
    F11 = 10021
    F12 = 10022

    # Control keys
    CTRL_A = 10023
    CTRL_B = 10024
    CTRL_C = 10025
    CTRL_D = 10026
    CTRL_E = 10027
    CTRL_F = 10028
    CTRL_G = 10029
    CTRL_H = 10030
    CTRL_I = 10031
    CTRL_J = 10032
    CTRL_K = 10033
    CTRL_L = 10034
    CTRL_M = 10035
    CTRL_N = 10036
    CTRL_O = 10037
    CTRL_P = 10038
    CTRL_Q = 10039
    CTRL_R = 10040
    CTRL_S = 10041
    CTRL_T = 10042
    CTRL_U = 10043
    CTRL_V = 10044
    CTRL_W = 10045
    CTRL_X = 10046
    CTRL_Y = 10047
    CTRL_Z = 10048

    # Keys passed straight through to the line editor.
    BACKWARD_WORD = 10049
    FORWARD_WORD = 10050
    BACKWARD_KILL_WORD = 10051
    FORWARD_KILL_WORD = 10052

    ERROR = 10053


def is_cgdb_key(key: int) -> bool:
    """Return True if ``key`` lies within the range of :class:`CgdbKey`."""
    return CgdbKey.ESC <= key <= CgdbKey.ERROR