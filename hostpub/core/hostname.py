"""Hostname acquisition and DNS-label normalization."""
import re
import string
from dataclasses import dataclass
from typing import Callable, Optional

from hostpub.core.errors import InvalidHostname
from hostpub.core.logger import get_logger

logger = get_logger(__name__)

MAX_LABEL_LENGTH = 63

_DISALLOWED = re.compile(r"[^a-z0-9-]")
_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

PROMPT_TEXT = "Hostname"
PROMPT_HINT = "Enter a hostname for this container (letters/numbers/hyphens; 1-63 chars)."


@dataclass(frozen=True)
class ValidatedHostname:
    """A hostname that already satisfies the DNS label rules.

    Only lowercase ASCII letters, digits and hyphens, no leading or trailing
    hyphen, 1-63 characters. Build it with normalize_hostname().
    """
    value: str

    def __str__(self) -> str:
        return self.value


def sanitize(raw: str) -> str:
    """Lower-case ASCII letters, drop characters outside [a-z0-9-] and trim hyphens.

    Non-ASCII letters are dropped, never folded (the Kelvin sign is not "k"),
    matching the C-locale lowercasing done inside the container.
    """
    return _DISALLOWED.sub("", raw.translate(_ASCII_LOWER)).strip("-")


def normalize_hostname(raw: str) -> ValidatedHostname:
    """Normalize a raw hostname candidate.

    Args:
        raw: Hostname as typed by an operator or passed by a caller

    Returns:
        ValidatedHostname

    Raises:
        InvalidHostname: If the sanitized value is empty or longer than 63 chars
    """
    cleaned = sanitize(raw or "")

    if not cleaned:
        raise InvalidHostname(raw, cleaned, "Hostname cannot be empty after sanitizing.")
    if len(cleaned) > MAX_LABEL_LENGTH:
        raise InvalidHostname(
            raw,
            cleaned,
            f"Hostname '{cleaned}' is too long ({len(cleaned)} chars). "
            f"Max is {MAX_LABEL_LENGTH}.",
        )

    if cleaned != raw:
        logger.debug(f"Normalized hostname {raw!r} -> {cleaned!r}")
    return ValidatedHostname(cleaned)


def acquire_candidate(
    existing: Optional[str] = None,
    prompt: Optional[Callable[[str], str]] = None,
) -> str:
    """Return the caller-supplied hostname, or ask a human for one.

    Args:
        existing: Hostname already known to the caller (used verbatim if non-empty)
        prompt: Callable asking for input; defaults to typer.prompt

    Returns:
        Raw, not yet normalized hostname candidate
    """
    if existing:
        return existing

    if prompt is None:
        import typer

        def prompt(text: str) -> str:
            return typer.prompt(text, default="", show_default=False)

    return prompt(PROMPT_TEXT)


def resolve_hostname(
    existing: Optional[str] = None,
    prompt: Optional[Callable[[str], str]] = None,
    on_invalid: Optional[Callable[[InvalidHostname], None]] = None,
    max_attempts: Optional[int] = None,
) -> ValidatedHostname:
    """Acquire and normalize a hostname.

    A caller-supplied value is validated once and InvalidHostname propagates.
    Interactive input is re-prompted until it normalizes cleanly.

    Args:
        existing: Caller-supplied hostname (non-interactive mode when non-empty)
        prompt: Callable asking for input; defaults to typer.prompt
        on_invalid: Called with each rejected interactive attempt
        max_attempts: Give up after this many interactive attempts (None = forever)

    Raises:
        InvalidHostname: Non-interactive value rejected, or attempts exhausted
    """
    if existing:
        return normalize_hostname(acquire_candidate(existing))

    attempt = 0
    while True:
        attempt += 1
        raw = acquire_candidate(None, prompt)
        try:
            return normalize_hostname(raw)
        except InvalidHostname as exc:
            logger.debug(f"Rejected hostname {raw!r}: {exc.reason}")
            if on_invalid is not None:
                on_invalid(exc)
            if max_attempts is not None and attempt >= max_attempts:
                raise
