# Filename: prompt.py
# Author: Rich Lewis @RichLewis007
# Description: Yes/no confirmation prompt for interactive removal and emptying the trash.
#              An unreadable answer counts as "no".

from __future__ import annotations

import logging
import sys
from typing import TextIO

logger = logging.getLogger(__name__)

_YES = {"y", "yes"}


def confirm(
    prompt: str,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> bool:
    # Ask ``prompt`` and return True only for an explicit yes.
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stdout.write(f"{prompt} [y/N]: ")
    stdout.flush()
    try:
        answer = stdin.readline()
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Could not read confirmation, treating as no: %s", exc)
        return False
    if not answer:
        # EOF on stdin.
        stdout.write("\n")
        return False
    return answer.strip().lower() in _YES
