from __future__ import annotations

from pathlib import Path

import typer

from ..config import ConfigError, TelegramDriverConfig, load_driver_config
from ..logging import setup_logging
from ..telegram import Keyboard, KeyboardButton, TelegramAudioDriver

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Inspect Telegram webhook updates and preview reply keyboards.",
)


def _load_config(config: Path | None) -> TelegramDriverConfig:
    try:
        return load_driver_config(config)
    except ConfigError as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1) from None


@app.command()
def inspect(
    update: Path = typer.Argument(..., help="Path to a saved webhook update (JSON)."),
    config: Path | None = typer.Option(
        None, "--config", help="Path to tgaudio.toml."
    ),
    resolve: bool = typer.Option(
        False, "--resolve/--no-resolve", help="Call getFile for audio updates."
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
) -> None:
    """Classify a webhook update and optionally resolve its audio file."""
    setup_logging(debug=debug)
    cfg = _load_config(config)
    try:
        body = update.read_bytes()
    except OSError as e:
        typer.echo(f"error: failed to read {update}: {e}", err=True)
        raise typer.Exit(code=1) from None

    with TelegramAudioDriver(body, cfg) as driver:
        typer.echo(f"kind: {driver.kind.value}")
        typer.echo(f"matches_request: {str(driver.matches_request()).lower()}")
        typer.echo(f"has_matching_event: {str(driver.has_matching_event()).lower()}")
        if not resolve or not driver.matches_request():
            return
        for message in driver.get_messages():
            for attachment in message.attachments:
                if attachment.ok:
                    typer.echo(f"url: {attachment.url}")
                else:
                    typer.echo(f"error: {attachment.exception}")


def _parse_button(spec: str) -> KeyboardButton:
    label, sep, callback = spec.partition("=")
    button = KeyboardButton.create(label)
    if sep:
        button.callback_data(callback)
    return button


@app.command()
def keyboard(
    buttons: list[str] = typer.Argument(
        None, help="Buttons as `label` or `label=callback`."
    ),
    row_size: int = typer.Option(
        0, "--row-size", min=0, help="Buttons per row (0 keeps one row)."
    ),
    kind: str = typer.Option(
        Keyboard.TYPE_INLINE,
        "--type",
        help="Markup type: inline_keyboard or keyboard.",
    ),
) -> None:
    """Print the reply_markup JSON for a set of buttons."""
    if kind not in (Keyboard.TYPE_INLINE, Keyboard.TYPE_KEYBOARD):
        typer.echo(f"error: unknown keyboard type {kind!r}", err=True)
        raise typer.Exit(code=1)
    parsed = [_parse_button(spec) for spec in buttons or []]
    markup = Keyboard.create(kind)
    if row_size <= 0:
        markup.add_row(*parsed)
    else:
        for start in range(0, len(parsed), row_size):
            markup.add_row(*parsed[start : start + row_size])
    typer.echo(markup.to_dict()["reply_markup"])


def main() -> None:
    app()


if __name__ == "__main__":
    main()
