"""Terminal message helpers for the ORDERDESK CLI.

Status lines go to **stderr** so stdout stays machine-readable (e.g. the ids
printed by ``orderdesk user register`` and ``orderdesk order place``). Emoji
glyphs fall back to ASCII on terminals that cannot encode them.
"""

import click

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS = ("✅", "[OK]")  # pragma: no mutate
ERROR = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if `character` can be encoded on stderr."""
    encoding = getattr(click.get_text_stream("stderr"), "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(pair: tuple[str, str]) -> str:
    """Return the emoji of an (emoji, fallback) pair if stderr can encode it."""
    emoji, fallback = pair
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to stderr, e.g. ``⚠️  Back up first.``"""
    click.secho(f"{glyph(CAUTION)}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to stderr, e.g. ``✅  Confirmed order ...``"""
    click.secho(f"{glyph(SUCCESS)}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to stderr, e.g. ``❌  Cannot connect to database``"""
    click.secho(f"{glyph(ERROR)}  {msg}", fg="red", bold=True, err=True)
