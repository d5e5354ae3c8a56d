"""ELiTE CLI: ask an exam question and print the AI's answer.

Usage::

    # Ask a question using the configured OpenAI key
    python -m elite.cli ask "What is 2+2?"

    # Override sampling options
    python -m elite.cli ask "Explain Big-O notation" --temperature 0.2 --max-tokens 500

    # Verify the API key loads and the provider registers
    python -m elite.cli check-key
"""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from elite.config import Settings, settings


def _log_level(config: Settings) -> int:
    """DEBUG when debugging, WARNING in production, INFO otherwise."""
    if config.elite_debug:
        return logging.DEBUG
    if config.is_production:
        return logging.WARNING
    return logging.INFO


# Ensure elite.* loggers are visible on stderr.
logging.basicConfig(
    level=_log_level(settings),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
)
# Quiet down noisy third-party loggers
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)


@click.group()
def cli():
    """ELiTE: get AI answers to exam questions."""
    pass


# ── ask ───────────────────────────────────────────────────────────────


@cli.command()
@click.argument("question")
@click.option(
    "--provider",
    default="openai",
    show_default=True,
    help="Registered AI provider to send the question to.",
)
@click.option(
    "--temperature",
    type=float,
    default=0.7,
    show_default=True,
    help="Sampling temperature.",
)
@click.option(
    "--max-tokens",
    type=int,
    default=1000,
    show_default=True,
    help="Maximum tokens in the answer.",
)
def ask(question: str, provider: str, temperature: float, max_tokens: int):
    """Send QUESTION to the AI provider and print the answer."""
    if not question.strip():
        click.secho("Error: Please enter an exam question first", fg="red", err=True)
        sys.exit(1)
    asyncio.run(_ask(question, provider, temperature, max_tokens))


async def _ask(question: str, provider: str, temperature: float, max_tokens: int) -> None:
    from elite.bootstrap import initialize_ai_services
    from elite.llm import AIRequest, AIServiceError, Dispatcher, format_error_message
    from elite.llm.errors import ServiceInitializationError

    try:
        registry = await initialize_ai_services()
    except ServiceInitializationError as exc:
        click.secho(f"Failed to initialize AI services: {exc}", fg="red", err=True)
        sys.exit(1)

    dispatcher = Dispatcher(registry=registry)
    request = AIRequest(question=question, temperature=temperature, max_tokens=max_tokens)

    click.echo("Thinking...", err=True)
    try:
        response = await dispatcher.send(provider, request)
    except AIServiceError as exc:
        click.secho(f"Error: {format_error_message(str(exc))}", fg="red", err=True)
        sys.exit(1)

    click.echo(response.content)


# ── check-key ─────────────────────────────────────────────────────────


@cli.command("check-key")
def check_key():
    """Load the API key and register providers without sending a question."""
    asyncio.run(_check_key())


async def _check_key() -> None:
    from elite.bootstrap import initialize_ai_services
    from elite.llm.errors import ServiceInitializationError

    try:
        registry = await initialize_ai_services()
    except ServiceInitializationError as exc:
        click.secho(f"Failed to initialize AI services: {exc}", fg="red", err=True)
        sys.exit(1)

    for name in registry.names():
        config = registry.lookup(name)
        click.echo(
            f"  {name}: model={config.model}  endpoint={config.endpoint_url}  "
            f"max_retries={config.max_retries}"
        )
    click.secho("API key loaded successfully", fg="green")


# ── Entry point ───────────────────────────────────────────────────────


def main():
    cli()


if __name__ == "__main__":
    main()
