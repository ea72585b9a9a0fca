"""Parsing of ECR Bridge error artifacts.

The driver moves a failed command into the error outbox and appends its
execution log:

    I;Ora de joaca (2h);1;60;19; P;

    -------------------------------------

    Execution Log

    -------------------------------------

    11/13/2025 1:53:34 AM - ERROR: I can't read the serial number.

The layout is not contractually guaranteed, so decoding degrades through
looser extractions instead of failing.
"""

import re

from loguru import logger

from ecr_bridge.domain.entities.parsed_error import UNKNOWN_ERROR, ParsedError

EXECUTION_LOG_MARKER = "execution log"

_SEPARATOR = re.compile(r"^-+$")
_TIMESTAMPED_ERROR = re.compile(
    r"(\d{1,2}/\d{1,2}/\d{4}\s+\d{1,2}:\d{2}:\d{2}\s+[AP]M)\s*-\s*ERROR:\s*(.+)",
    re.IGNORECASE,
)
_ERROR_PREFIX = re.compile(r"ERROR:\s*", re.IGNORECASE)


def _is_separator(line: str) -> bool:
    return bool(_SEPARATOR.match(line))


def decode_error(raw_content: str) -> ParsedError:
    if not raw_content or not raw_content.strip():
        return ParsedError(
            original_command="",
            error_message=UNKNOWN_ERROR,
            raw_content=raw_content,
        )

    lines = [line.strip() for line in raw_content.splitlines()]
    lines = [line for line in lines if line]
    original_command = lines[0] if lines else ""

    marker_index = next(
        (i for i, line in enumerate(lines) if EXECUTION_LOG_MARKER in line.lower()),
        -1,
    )

    if marker_index == -1:
        logger.debug("No execution log section, using whole content as error message")
        return ParsedError(
            original_command=original_command,
            error_message=raw_content.strip() or UNKNOWN_ERROR,
            raw_content=raw_content,
        )

    log_lines = [line for line in lines[marker_index + 1 :] if not _is_separator(line)]
    fragments: list[str] = []

    for line in log_lines:
        match = _TIMESTAMPED_ERROR.search(line)
        if match:
            return ParsedError(
                original_command=original_command,
                timestamp=match.group(1),
                error_message=match.group(2).strip(),
                raw_content=raw_content,
            )
        if "error:" in line.lower():
            # ERROR: present but the timestamp shape is off
            fragment = _ERROR_PREFIX.split(line, maxsplit=1)[1].strip()
            fragments.append(fragment or line)

    if fragments:
        logger.debug("Error log lines without timestamps, joined {} fragments", len(fragments))
        return ParsedError(
            original_command=original_command,
            error_message="; ".join(fragments),
            raw_content=raw_content,
        )

    remaining = " ".join(log_lines).strip()
    logger.debug("No ERROR lines in execution log, falling back to raw log text")
    return ParsedError(
        original_command=original_command,
        error_message=remaining or UNKNOWN_ERROR,
        raw_content=raw_content,
    )


def extract_error_message(raw_content: str) -> str:
    """Return only the error message of an error artifact."""
    return decode_error(raw_content).error_message
