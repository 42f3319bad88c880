"""
Local destructive-command denylist.

A deterministic second opinion on the backend's danger marker. It can only
add a marker, never remove one. Program names only count in command
position, so `man kill` or `grep shutdown syslog` are not flagged.
"""

import re
from typing import List, Optional, Tuple

# Start of a line, after a separator or pipe, or after a wrapper that runs its argument
_CMD = r"(?:^\s*|[;&|(]\s*|\bsudo\s+(?:-\S+\s+)*|\bxargs\s+(?:-\S+\s+)*|-exec\s+)"

DESTRUCTIVE_PATTERNS: List[Tuple[str, str]] = [
    # deletion
    (_CMD + r"rm\s+(-[a-z]*\s+)*-[a-z]*[rf]", "recursive or forced file removal"),
    (_CMD + r"rm\b", "file removal"),
    (_CMD + r"find\b[^|;&]*\s-delete\b", "find with -delete"),
    (_CMD + r"shred\b", "file shredding"),
    (_CMD + r"truncate\s+-s\s*0\b", "file truncation"),
    # disks and filesystems
    (_CMD + r"mkfs(\.\w+)?\b", "filesystem creation"),
    (_CMD + r"dd\b[^|;&]*\bof=", "raw disk write"),
    (_CMD + r"(fdisk|parted|gdisk|wipefs)\b", "disk partitioning"),
    (r">\s*/dev/(sd|nvme|hd|vd)", "redirect onto a block device"),
    # processes and system state
    (_CMD + r"(kill|killall|pkill)\b", "killing processes"),
    (_CMD + r"(shutdown|reboot|poweroff|halt)\b", "shutdown or reboot"),
    (r":\(\)\s*\{\s*:\|:&\s*\};:", "fork bomb"),
    # permissions
    (_CMD + r"chmod\s+(-\S+\s+)*0?777\b", "world-writable permissions"),
    (_CMD + r"chmod\s+(-\S+\s+)*(o|a|ugo)\+[rx]*w", "world-writable permissions"),
]

_COMPILED = [
    (re.compile(pat, re.IGNORECASE | re.MULTILINE), reason)
    for pat, reason in DESTRUCTIVE_PATTERNS
]


def denylist_match(command: str) -> Optional[str]:
    """Return the reason the command looks destructive, or None."""
    text = command.strip()
    if not text:
        return None
    for pattern, reason in _COMPILED:
        if pattern.search(text):
            return reason
    return None


def is_destructive(command: str) -> bool:
    return denylist_match(command) is not None
