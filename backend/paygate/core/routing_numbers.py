"""ABA routing transit numbers — split and checksum helpers (pure)."""


def aba8(rtn: str) -> str:
    """First 8 digits of a routing number, or "" when the length is not 8 or 9."""
    if len(rtn or "") not in (8, 9):
        return ""
    return rtn[:8]


def aba_check_digit(rtn: str) -> str:
    """Ninth (check) digit of a routing number, or "" when the length is not 8 or 9.

    An 8-character input has no check digit and yields "".
    """
    if len(rtn or "") not in (8, 9):
        return ""
    return rtn[8:9]


_WEIGHTS = (3, 7, 1, 3, 7, 1, 3, 7, 1)


def check_routing_number(rtn: str) -> str | None:
    """Return an error message for an invalid 9-digit routing number, else None."""
    if not rtn:
        return "no routing number provided"
    if len(rtn) != 9:
        return f"invalid routing number length of {len(rtn)}"
    if not rtn.isdigit():
        return f"routing number {rtn} has non-digit characters"
    total = sum(int(d) * w for d, w in zip(rtn, _WEIGHTS))
    if total % 10 != 0:
        return f"routing number {rtn} failed checksum"
    return None
